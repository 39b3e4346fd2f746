from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ConditionStatus, ReviewFlag
from ..records import PersonnelRecord, has_text
from ..registry import register_rule
from ..rule import Rule


def condition_flags(record: PersonnelRecord) -> List[ReviewFlag]:
    flags: List[ReviewFlag] = []
    for idx, person in enumerate(record.personnel_materials):
        key = f"personnel_materials[{idx}]"
        if ConditionStatus.NOT_COMPLY in (person.condition_in, person.condition_out):
            flags.append(
                ReviewFlag(
                    key=key,
                    message="Protective equipment condition does not comply.",
                    values={
                        "conditionIn": person.condition_in.value if person.condition_in else None,
                        "conditionOut": person.condition_out.value if person.condition_out else None,
                    },
                )
            )
        if has_text(person.observation_in) or has_text(person.observation_out):
            flags.append(
                ReviewFlag(
                    key=key,
                    message="Entry or exit observation recorded.",
                    values={"observationIn": person.observation_in, "observationOut": person.observation_out},
                )
            )
    return flags


@register_rule
class QC_STAFF_GLASSES_AUDITORY(Rule):
    kind = ChecklistKind.STAFF_GLASSES_AUDITORY
    rule_title = "Staff glasses and hearing protectors in good condition on entry and exit"

    def check(self, record: PersonnelRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        return condition_flags(record)


@register_rule
class QC_STAFF_GLASSES_AUDITORY_SETUP(Rule):
    kind = ChecklistKind.STAFF_GLASSES_AUDITORY_SETUP
    rule_title = "Setup-crew glasses and hearing protectors in good condition on entry and exit"

    def check(self, record: PersonnelRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        return condition_flags(record)
