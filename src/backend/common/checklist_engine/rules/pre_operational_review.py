from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import ItemListRecord, has_text
from ..registry import register_rule
from ..rule import Rule


@register_rule
class QC_PRE_OPERATIONAL_REVIEW(Rule):
    kind = ChecklistKind.PRE_OPERATIONAL_REVIEW
    rule_title = "Processing-area items comply and carry no open observations"

    def check(self, record: ItemListRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        flags: List[ReviewFlag] = []
        for idx, item in enumerate(record.items):
            key = f"items[{idx}]"
            if item.comply is False:
                flags.append(ReviewFlag(key=key, message="Item does not comply.", values={"comply": False}))
            if item.corrective_action_comply is False:
                flags.append(
                    ReviewFlag(
                        key=key,
                        message="Corrective action does not comply.",
                        values={"correctiveActionComply": False},
                    )
                )
            if has_text(item.observation) or has_text(item.corrective_action_observation):
                flags.append(
                    ReviewFlag(
                        key=key,
                        message="Item carries an observation.",
                        values={
                            "observation": item.observation,
                            "correctiveActionObservation": item.corrective_action_observation,
                        },
                    )
                )
        return flags
