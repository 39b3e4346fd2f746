from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import BagEntryRecord
from ..registry import register_rule
from ..rule import Rule


@register_rule
class QC_WEIGHING_SEALING(Rule):
    kind = ChecklistKind.WEIGHING_SEALING
    rule_title = "Every packaged bag is sealed correctly"

    def check(self, record: BagEntryRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        return [
            ReviewFlag(key=f"bag_entries[{idx}]", message="Bag seal does not comply.")
            for idx, entry in enumerate(record.bag_entries)
            if entry.has_not_comply_seal
        ]
