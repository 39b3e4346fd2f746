"""Coarse, shape-based compliance.

The result only looks at the record's own collection of sub-entries. `pending` is a real third
state (unanswered items, nothing to judge yet) and is never folded into `comply`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import ValidationError

from .classifier import classify_shape
from .config import ReviewThresholds
from .models import (
    ChecklistKind,
    ComplianceStatus,
    InspectionResult,
    ParameterStatus,
    RecordShape,
)
from .records import (
    SHAPE_RECORD_MODELS,
    BagEntryRecord,
    FindingRecord,
    InspectionRecord,
    ItemListRecord,
    MeasurementRecord,
    PersonnelRecord,
    ReadingRecord,
    has_text,
)

logger = logging.getLogger(__name__)

_DEFAULT_THRESHOLDS = ReviewThresholds()

ShapeEvaluator = Callable[[Any, ReviewThresholds], ComplianceStatus]


def item_list_compliance(record: ItemListRecord, thresholds: ReviewThresholds) -> ComplianceStatus:
    items = record.items
    if any(item.comply is False or item.corrective_action_comply is False for item in items):
        return ComplianceStatus.NOT_COMPLY
    all_comply = all(
        item.comply is True and item.corrective_action_comply in (True, None) for item in items
    )
    all_answered = all(item.comply is not None for item in items)
    if items and all_comply and all_answered:
        return ComplianceStatus.COMPLY
    return ComplianceStatus.PENDING


def bag_entry_compliance(record: BagEntryRecord, thresholds: ReviewThresholds) -> ComplianceStatus:
    if any(entry.has_not_comply_seal for entry in record.bag_entries):
        return ComplianceStatus.NOT_COMPLY
    return ComplianceStatus.COMPLY


def measurement_compliance(record: MeasurementRecord, thresholds: ReviewThresholds) -> ComplianceStatus:
    for m in record.measurements:
        if has_text(m.corrective_action):
            return ComplianceStatus.NOT_COMPLY
        if m.measure_ppm_value is not None and m.measure_ppm_value < thresholds.min_sanitizer_ppm:
            return ComplianceStatus.NOT_COMPLY
    return ComplianceStatus.COMPLY


def reading_compliance(record: ReadingRecord, thresholds: ReviewThresholds) -> ComplianceStatus:
    for r in record.readings:
        if ParameterStatus.NO_COMPLY in r.monitored_parameters().values():
            return ComplianceStatus.NOT_COMPLY
        if has_text(r.observation) or has_text(r.corrective_actions):
            return ComplianceStatus.NOT_COMPLY
    return ComplianceStatus.COMPLY


def personnel_compliance(record: PersonnelRecord, thresholds: ReviewThresholds) -> ComplianceStatus:
    if any(entry.has_bad_material for entry in record.personnel_materials):
        return ComplianceStatus.NOT_COMPLY
    return ComplianceStatus.COMPLY


def finding_compliance(record: FindingRecord, thresholds: ReviewThresholds) -> ComplianceStatus:
    if record.no_findings is True:
        return ComplianceStatus.COMPLY
    if record.findings:
        return ComplianceStatus.NOT_COMPLY
    return ComplianceStatus.PENDING


def inspection_compliance(record: InspectionRecord, thresholds: ReviewThresholds) -> ComplianceStatus:
    if record.inspection_result == InspectionResult.REJECT:
        return ComplianceStatus.NOT_COMPLY
    if record.inspection_result == InspectionResult.APPROVE:
        return ComplianceStatus.COMPLY
    return ComplianceStatus.PENDING


def _always_pending(record: Any, thresholds: ReviewThresholds) -> ComplianceStatus:
    return ComplianceStatus.PENDING


SHAPE_EVALUATORS: Dict[RecordShape, ShapeEvaluator] = {
    RecordShape.ITEM_LIST: item_list_compliance,
    RecordShape.BAG_ENTRY: bag_entry_compliance,
    RecordShape.MEASUREMENT: measurement_compliance,
    RecordShape.READING: reading_compliance,
    RecordShape.PERSONNEL: personnel_compliance,
    RecordShape.FINDING: finding_compliance,
    RecordShape.INSPECTION: inspection_compliance,
    # Pallet and box-sample records have no coarse verdict; the kind rules judge them.
    RecordShape.PALLET: _always_pending,
    RecordShape.BOX_SAMPLE: _always_pending,
    RecordShape.UNCLASSIFIED: _always_pending,
}

_missing_shapes = set(RecordShape) - set(SHAPE_EVALUATORS)
if _missing_shapes:
    raise RuntimeError(f"Record shapes without a compliance evaluator: {sorted(s.value for s in _missing_shapes)}")


def classify_compliance(
    raw: Mapping[str, Any],
    kind: Optional[ChecklistKind] = None,
    *,
    thresholds: Optional[ReviewThresholds] = None,
    shape: Optional[RecordShape] = None,
) -> ComplianceStatus:
    """Coarse status for a raw record.

    Dispatch is on the record's shape; `kind` is only used for diagnostics.
    """
    thresholds = thresholds or _DEFAULT_THRESHOLDS
    shape = shape or classify_shape(raw)
    evaluator = SHAPE_EVALUATORS[shape]
    if shape == RecordShape.UNCLASSIFIED:
        return evaluator(raw, thresholds)

    try:
        record = SHAPE_RECORD_MODELS[shape].model_validate(raw)
    except ValidationError as exc:
        logger.warning(
            "Could not read %s record as %s (%d errors); treating as pending.",
            kind.value if kind else "unknown",
            shape.value,
            exc.error_count(),
        )
        return ComplianceStatus.PENDING
    return evaluator(record, thresholds)
