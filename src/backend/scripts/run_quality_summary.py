from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


_ensure_backend_on_path()

from common.checklist_engine.config import load_engine_config  # noqa: E402
from common.checklist_engine.dates import default_report_date, previous_month  # noqa: E402
from common.checklist_engine.models import DailySummaryReport, MonthlyComplianceReport, Stage  # noqa: E402
from common.checklist_engine.runner import DailySummaryRunner, MonthlyComplianceRunner  # noqa: E402
from pipelines.data_source import FixturesChecklistSource, get_checklist_source  # noqa: E402

logger = logging.getLogger("run_quality_summary")

STAGE_TITLES = {
    Stage.PREOPERATIONAL: "Pre-operational",
    Stage.OPERATIONAL: "Operational",
    Stage.INBOUND_OUTBOUND: "Inbound / Outbound",
}


def render_daily_markdown(report: DailySummaryReport) -> str:
    lines = [
        f"# Daily Quality Summary {report.report_date.isoformat()}",
        "",
        f"Generated at: {report.generated_at.isoformat()}",
        "",
        f"- Checklists: {report.total_checklists}",
        f"- Needing review: {report.total_needs_review}",
    ]
    if report.needs_review_display_names:
        lines.append(f"- Review: {', '.join(report.needs_review_display_names)}")
    if report.failed_kinds:
        lines.append(f"- Not fetched: {', '.join(k.value for k in report.failed_kinds)}")

    for stage in Stage:
        summaries = report.by_stage.get(stage) or []
        if not summaries:
            continue
        lines.extend(["", f"## {STAGE_TITLES[stage]}", "", "| Checklist | Count | Needs review |", "|---|---|---|"])
        for s in summaries:
            name = f"[{s.display_name}]({s.dashboard_url})" if s.dashboard_url else s.display_name
            lines.append(f"| {name} | {s.count} | {s.needs_review_count} |")

    if not report.summaries:
        lines.extend(["", "No checklists recorded for this day."])
    return "\n".join(lines) + "\n"


def render_monthly_markdown(report: MonthlyComplianceReport) -> str:
    lines = [
        f"# Monthly Compliance {report.year}-{report.month:02d}",
        "",
        f"Generated at: {report.generated_at.isoformat()}",
        "",
        "| Checklist | Total | Comply | Not comply | Pending |",
        "|---|---|---|---|---|",
    ]
    for s in report.stats:
        lines.append(f"| {s.display_name} | {s.total} | {s.comply} | {s.not_comply} | {s.pending} |")
    lines.append(
        f"| **Total** | {report.total_checklists} | {report.total_comply} | "
        f"{report.total_not_comply} | {report.total_pending} |"
    )
    if report.failed_kinds:
        lines.extend(["", f"Not fetched: {', '.join(k.value for k in report.failed_kinds)}"])
    return "\n".join(lines) + "\n"


def _build_source(args):
    if args.fixtures_dir:
        return FixturesChecklistSource(fixtures_dir=Path(args.fixtures_dir).resolve())
    return get_checklist_source()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Evaluate quality checklists and write a daily summary or monthly compliance report."
    )
    parser.add_argument(
        "--fixtures-dir",
        default=None,
        help="Read records from a fixtures directory instead of CHECKLIST_SOURCE.",
    )
    parser.add_argument(
        "--config",
        default=os.getenv("ENGINE_CONFIG_PATH") or None,
        help="JSON file with threshold/catalog overrides (default: ENGINE_CONFIG_PATH).",
    )
    parser.add_argument(
        "--format",
        choices=("json", "markdown"),
        default="json",
        help="Output format (default: json).",
    )
    parser.add_argument("--output", default=None, help="Write to this file instead of stdout.")
    parser.add_argument("--max-workers", type=int, default=4, help="Concurrent checklist kinds (default: 4).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    daily = sub.add_parser("daily", help="Needs-review counts for one day.")
    daily.add_argument("--date", default=None, help="Report date (YYYY-MM-DD); defaults to yesterday.")
    monthly = sub.add_parser("monthly", help="Comply / not comply / pending counts for one month.")
    monthly.add_argument("--year", type=int, default=None)
    monthly.add_argument("--month", type=int, default=None)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_engine_config(
        Path(args.config) if args.config else None,
        app_base_url=os.getenv("APP_BASE_URL", "").strip() or None,
    )
    source = _build_source(args)

    if args.command == "daily":
        target = date.fromisoformat(args.date) if args.date else default_report_date()
        report = DailySummaryRunner(source, config=config, max_workers=args.max_workers).run(target)
        rendered = render_daily_markdown(report) if args.format == "markdown" else None
    else:
        default_year, default_month = previous_month()
        report = MonthlyComplianceRunner(source, config=config, max_workers=args.max_workers).run(
            args.year or default_year, args.month or default_month
        )
        rendered = render_monthly_markdown(report) if args.format == "markdown" else None

    if rendered is None:
        rendered = json.dumps(report.model_dump(mode="json"), indent=2) + "\n"

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(rendered, encoding="utf-8")
        print(f"Wrote {out_path}")
    else:
        sys.stdout.write(rendered)

    if report.failed_kinds:
        logger.warning("Some checklist kinds could not be fetched: %s", [k.value for k in report.failed_kinds])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
