from __future__ import annotations

from typing import Any, Callable, Mapping, Tuple

from .models import RecordShape


def _non_empty_list(field: str) -> Callable[[Mapping[str, Any]], bool]:
    def _matches(raw: Mapping[str, Any]) -> bool:
        value = raw.get(field)
        return isinstance(value, list) and len(value) > 0

    return _matches


def _has_findings(raw: Mapping[str, Any]) -> bool:
    # An empty findings list still counts: it pairs with `no_findings=True`.
    return isinstance(raw.get("findings"), list)


def _has_inspection(raw: Mapping[str, Any]) -> bool:
    value = raw.get("inspection_result")
    return isinstance(value, str) and value.strip() != ""


# Checked in order; first match wins.
SHAPE_SIGNATURES: Tuple[Tuple[RecordShape, Callable[[Mapping[str, Any]], bool]], ...] = (
    (RecordShape.ITEM_LIST, _non_empty_list("items")),
    (RecordShape.BAG_ENTRY, _non_empty_list("bag_entries")),
    (RecordShape.MEASUREMENT, _non_empty_list("measurements")),
    (RecordShape.READING, _non_empty_list("readings")),
    (RecordShape.PERSONNEL, _non_empty_list("personnel_materials")),
    (RecordShape.FINDING, _has_findings),
    (RecordShape.INSPECTION, _has_inspection),
    (RecordShape.PALLET, _non_empty_list("pallets")),
    (RecordShape.BOX_SAMPLE, _non_empty_list("box_samples")),
)


def classify_shape(raw: Mapping[str, Any]) -> RecordShape:
    if not isinstance(raw, Mapping):
        return RecordShape.UNCLASSIFIED
    for shape, matches in SHAPE_SIGNATURES:
        if matches(raw):
            return shape
    return RecordShape.UNCLASSIFIED
