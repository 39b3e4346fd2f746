from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag, TemperatureStatus
from ..records import ReadingRecord, has_text
from ..registry import register_rule
from ..rule import Rule

_OUT_OF_RANGE = (TemperatureStatus.OVER_LIMIT, TemperatureStatus.UNDER_LIMIT)


@register_rule
class QC_ENVTEMP(Rule):
    kind = ChecklistKind.ENVTEMP
    rule_title = "Process room temperature within band"

    def check(self, record: ReadingRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        t = ctx.thresholds
        flags: List[ReviewFlag] = []
        for idx, reading in enumerate(record.readings):
            key = f"readings[{idx}]"
            avg = reading.average_temp
            if avg is not None and (avg > t.env_temp_max or avg < t.env_temp_min):
                flags.append(
                    ReviewFlag(
                        key=key,
                        message=f"Average temperature {avg:g}°F outside {t.env_temp_min:g}-{t.env_temp_max:g}°F.",
                        values={"averageTemp": avg, "min": t.env_temp_min, "max": t.env_temp_max},
                    )
                )
            if reading.status in _OUT_OF_RANGE:
                flags.append(
                    ReviewFlag(
                        key=key,
                        message=f"Status reported as {reading.status.value}.",
                        values={"status": reading.status.value},
                    )
                )
            if has_text(reading.observation):
                flags.append(
                    ReviewFlag(key=key, message="Observation recorded.", values={"observation": reading.observation})
                )
        return flags
