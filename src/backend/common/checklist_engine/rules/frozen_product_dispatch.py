from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import InspectionRecord
from ..registry import register_rule
from ..rule import Rule


@register_rule
class LOG_FROZEN_PRODUCT_DISPATCH(Rule):
    kind = ChecklistKind.FROZEN_PRODUCT_DISPATCH
    rule_title = "Dispatch inspection approved"

    def check(self, record: InspectionRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        # A rejected inspection already fails coarse compliance.
        return []
