from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from .compliance import classify_compliance
from .config import ChecklistKindConfig, EngineConfig
from .context import EvaluationContext
from .dates import parse_record_date
from .evaluator import evaluate_record
from .links import build_dashboard_url, build_historial_url
from .models import (
    ChecklistComplianceStats,
    ChecklistSummary,
    ComplianceStatus,
    DailySummaryReport,
    EvaluationResult,
    MonthlyComplianceReport,
    Stage,
)

if TYPE_CHECKING:
    from pipelines.data_source import ChecklistSource

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


def record_date(raw: Any, kind_cfg: ChecklistKindConfig) -> Optional[date]:
    if not isinstance(raw, Mapping):
        return None
    return parse_record_date(raw.get(kind_cfg.date_field), kind_cfg.date_format)


def distinct_skus(records: List[Mapping[str, Any]]) -> List[str]:
    skus = {str(r["sku"]).strip() for r in records if r.get("sku") is not None}
    return sorted(s for s in skus if s)


@dataclass
class _KindOutcome:
    kind_cfg: ChecklistKindConfig
    results: List[EvaluationResult] = field(default_factory=list)
    failed: bool = False


class DailySummaryRunner:
    """Evaluate every quality record of one day and reduce the results to per-kind counts."""

    def __init__(
        self,
        source: "ChecklistSource",
        *,
        config: Optional[EngineConfig] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._source = source
        self._config = config or EngineConfig.default()
        self._max_workers = max_workers

    def run(self, target_date: date) -> DailySummaryReport:
        kinds = self._config.catalog.quality_kinds()
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            # map() yields in submission order, so catalog order survives.
            outcomes = list(pool.map(lambda cfg: self._evaluate_kind(cfg, target_date), kinds))
        return self._build_report(target_date, outcomes)

    def _evaluate_kind(self, kind_cfg: ChecklistKindConfig, target_date: date) -> _KindOutcome:
        kind = kind_cfg.kind
        try:
            records = self._source.fetch_all(kind)
        except Exception:
            logger.exception("Failed to fetch %s; skipping it in the daily summary.", kind.value)
            return _KindOutcome(kind_cfg=kind_cfg, failed=True)

        day_records = [r for r in records if record_date(r, kind_cfg) == target_date]
        if not day_records:
            return _KindOutcome(kind_cfg=kind_cfg)

        materials: Dict[str, str] = {}
        if kind_cfg.uses_product_reference:
            skus = distinct_skus(day_records)
            if skus:
                try:
                    materials = self._source.fetch_product_materials(skus)
                except Exception:
                    logger.exception(
                        "Product lookup failed for %s; using record product text.", kind.value
                    )

        ctx = EvaluationContext(config=self._config, product_materials=materials)
        results: List[EvaluationResult] = []
        for raw in day_records:
            try:
                results.append(evaluate_record(raw, kind, ctx))
            except Exception:
                logger.exception("Could not evaluate a %s record; leaving it out of the summary.", kind.value)
        logger.debug(
            "%s: %d records on %s, %d need review",
            kind.value,
            len(results),
            target_date.isoformat(),
            sum(1 for r in results if r.needs_review),
        )
        return _KindOutcome(kind_cfg=kind_cfg, results=results)

    def _build_report(self, target_date: date, outcomes: List[_KindOutcome]) -> DailySummaryReport:
        base_url = self._config.app_base_url
        summaries: List[ChecklistSummary] = []
        for outcome in outcomes:
            if not outcome.results:
                continue
            cfg = outcome.kind_cfg
            summaries.append(
                ChecklistSummary(
                    kind=cfg.kind,
                    display_name=cfg.display_name,
                    count=len(outcome.results),
                    needs_review_count=sum(1 for r in outcome.results if r.needs_review),
                    stage=cfg.stage,
                    dashboard_url=build_dashboard_url(cfg, target_date, base_url) if base_url else None,
                    historial_url=build_historial_url(cfg, target_date, base_url) if base_url else None,
                )
            )

        by_stage: Dict[Stage, List[ChecklistSummary]] = {stage: [] for stage in Stage}
        for summary in summaries:
            by_stage[summary.stage].append(summary)

        return DailySummaryReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            report_date=target_date,
            summaries=summaries,
            by_stage=by_stage,
            total_checklists=sum(s.count for s in summaries),
            total_needs_review=sum(s.needs_review_count for s in summaries),
            needs_review_display_names=[s.display_name for s in summaries if s.needs_review_count > 0],
            failed_kinds=[o.kind_cfg.kind for o in outcomes if o.failed],
        )


class MonthlyComplianceRunner:
    """Coarse comply / not_comply / pending counts per kind for one calendar month."""

    def __init__(
        self,
        source: "ChecklistSource",
        *,
        config: Optional[EngineConfig] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._source = source
        self._config = config or EngineConfig.default()
        self._max_workers = max_workers

    def run(self, year: int, month: int) -> MonthlyComplianceReport:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be 1-12, got {month}")

        kinds = self._config.catalog.kinds
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            outcomes = list(pool.map(lambda cfg: self._count_kind(cfg, year, month), kinds))

        stats = [s for s, _ in outcomes]
        return MonthlyComplianceReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            year=year,
            month=month,
            stats=stats,
            total_checklists=sum(s.total for s in stats),
            total_comply=sum(s.comply for s in stats),
            total_not_comply=sum(s.not_comply for s in stats),
            total_pending=sum(s.pending for s in stats),
            failed_kinds=[s.kind for s, failed in outcomes if failed],
        )

    def _count_kind(self, kind_cfg: ChecklistKindConfig, year: int, month: int):
        empty = ChecklistComplianceStats(kind=kind_cfg.kind, display_name=kind_cfg.display_name)
        try:
            records = self._source.fetch_all(kind_cfg.kind)
        except Exception:
            logger.exception("Failed to fetch %s; counting it as empty.", kind_cfg.kind.value)
            return empty, True

        thresholds = self._config.thresholds
        counts = {status: 0 for status in ComplianceStatus}
        for raw in records:
            day = record_date(raw, kind_cfg)
            if day is None or day.year != year or day.month != month:
                continue
            try:
                status = classify_compliance(raw, kind_cfg.kind, thresholds=thresholds)
            except Exception:
                logger.exception(
                    "Could not classify a %s record; leaving it out of the counts.", kind_cfg.kind.value
                )
                continue
            counts[status] += 1

        return (
            ChecklistComplianceStats(
                kind=kind_cfg.kind,
                display_name=kind_cfg.display_name,
                total=sum(counts.values()),
                comply=counts[ComplianceStatus.COMPLY],
                not_comply=counts[ComplianceStatus.NOT_COMPLY],
                pending=counts[ComplianceStatus.PENDING],
            ),
            False,
        )
