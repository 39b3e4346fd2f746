from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import FindingRecord
from ..registry import register_rule
from ..rule import Rule


@register_rule
class QC_FOREIGN_MATERIAL(Rule):
    kind = ChecklistKind.FOREIGN_MATERIAL
    rule_title = "No foreign material found"

    def check(self, record: FindingRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        if record.no_findings is False and record.findings:
            return [
                ReviewFlag(
                    key="findings",
                    message=f"{len(record.findings)} foreign material finding(s) recorded.",
                    values={"count": len(record.findings)},
                )
            ]
        return []
