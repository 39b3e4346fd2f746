from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import PersonnelRecord
from ..registry import register_rule
from ..rule import Rule


@register_rule
class QC_MATERIALS_CONTROL(Rule):
    kind = ChecklistKind.MATERIALS_CONTROL
    rule_title = "Production-area materials handed out and received in good state"

    def check(self, record: PersonnelRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        flags: List[ReviewFlag] = []
        for idx, entry in enumerate(record.personnel_materials):
            if entry.has_bad_material:
                flags.append(
                    ReviewFlag(
                        key=f"personnel_materials[{idx}]",
                        message="Material reported in bad state.",
                        values={
                            "materialStatus": entry.material_status.value if entry.material_status else None,
                            "materialStatusReceived": (
                                entry.material_status_received.value if entry.material_status_received else None
                            ),
                            "observation": entry.observation,
                            "observationReceived": entry.observation_received,
                        },
                    )
                )
        return flags
