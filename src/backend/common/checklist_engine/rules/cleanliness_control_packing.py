from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import CleanlinessRecord
from ..registry import register_rule
from ..rule import Rule
from ..units import extract_numeric


@register_rule
class QC_CLEANLINESS_CONTROL_PACKING(Rule):
    kind = ChecklistKind.CLEANLINESS_CONTROL_PACKING
    rule_title = "Packing surfaces comply and bioluminescence stays below caution"

    def check(self, record: CleanlinessRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        thresholds = ctx.thresholds
        flags: List[ReviewFlag] = []
        for area_idx, area in enumerate(record.areas):
            for part_idx, part in enumerate(area.parts):
                key = f"areas[{area_idx}].parts[{part_idx}]"
                if part.comply is False or part.corrective_action_comply is False:
                    flags.append(
                        ReviewFlag(
                            key=key,
                            message="Part does not comply.",
                            values={
                                "comply": part.comply,
                                "correctiveActionComply": part.corrective_action_comply,
                            },
                        )
                    )

                rlu = extract_numeric(part.bioluminescence_result)
                # Reject (> rlu_reject) is a subset of caution; both flag the same way.
                if rlu is not None and rlu >= thresholds.rlu_caution:
                    level = "reject" if rlu > thresholds.rlu_reject else "caution"
                    flags.append(
                        ReviewFlag(
                            key=key,
                            message=f"Bioluminescence {rlu:g} RLU at {level} level.",
                            values={
                                "rlu": rlu,
                                "level": level,
                                "rlu_caution": thresholds.rlu_caution,
                                "rlu_reject": thresholds.rlu_reject,
                            },
                        )
                    )
        return flags
