from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ParameterStatus, ReviewFlag
from ..records import STAFF_PRACTICE_PARAMETERS, PersonnelRecord, has_text
from ..registry import register_rule
from ..rule import Rule


@register_rule
class QC_STAFF_PRACTICES(Rule):
    kind = ChecklistKind.STAFF_PRACTICES
    rule_title = "Staff good practices comply on every monitored parameter"

    def check(self, record: PersonnelRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        flags: List[ReviewFlag] = []
        for idx, person in enumerate(record.personnel_materials):
            key = f"personnel_materials[{idx}]"
            failed = [
                wire_name
                for field_name, wire_name in STAFF_PRACTICE_PARAMETERS
                if getattr(person, field_name) == ParameterStatus.NO_COMPLY
            ]
            if failed:
                flags.append(
                    ReviewFlag(
                        key=key,
                        message=f"Parameters not complying: {', '.join(failed)}.",
                        values={"parameters": failed},
                    )
                )
            if has_text(person.corrective_action) or has_text(person.observation):
                flags.append(
                    ReviewFlag(
                        key=key,
                        message="Corrective action or observation recorded.",
                        values={
                            "correctiveAction": person.corrective_action,
                            "observation": person.observation,
                        },
                    )
                )
        return flags
