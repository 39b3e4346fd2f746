from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import MeasurementRecord, has_text
from ..registry import register_rule
from ..rule import Rule


@register_rule
class QC_FOOTBATH_CONTROL(Rule):
    kind = ChecklistKind.FOOTBATH_CONTROL
    rule_title = "Footbath sanitizer at or above minimum PPM with no corrective action"

    def check(self, record: MeasurementRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        min_ppm = ctx.thresholds.min_sanitizer_ppm
        flags: List[ReviewFlag] = []
        for idx, m in enumerate(record.measurements):
            key = f"measurements[{idx}]"
            if m.measure_ppm_value is not None and m.measure_ppm_value < min_ppm:
                flags.append(
                    ReviewFlag(
                        key=key,
                        message=f"Sanitizer {m.measure_ppm_value:g} PPM below {min_ppm:g}.",
                        values={"ppm": m.measure_ppm_value, "min_ppm": min_ppm},
                    )
                )
            if has_text(m.corrective_action):
                flags.append(
                    ReviewFlag(
                        key=key,
                        message="Corrective action recorded.",
                        values={"correctiveAction": m.corrective_action},
                    )
                )
        return flags
