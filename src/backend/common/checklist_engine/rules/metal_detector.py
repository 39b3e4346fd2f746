from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, DetectionResult, ParameterStatus, ReviewFlag
from ..records import ReadingRecord, has_text
from ..registry import register_rule
from ..rule import Rule

TEST_PIECES = ("bf", "bnf", "bss")


@register_rule
class QC_METAL_DETECTOR(Rule):
    kind = ChecklistKind.METAL_DETECTOR
    rule_title = "Metal detector detects every test piece with all controls complying"

    def check(self, record: ReadingRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        flags: List[ReviewFlag] = []
        for idx, reading in enumerate(record.readings):
            key = f"readings[{idx}]"
            controls = dict(reading.monitored_parameters())
            controls["beaconLight"] = reading.beacon_light
            failed = [name for name, status in controls.items() if status == ParameterStatus.NO_COMPLY]
            if failed:
                flags.append(
                    ReviewFlag(
                        key=key,
                        message=f"Controls not complying: {', '.join(failed)}.",
                        values={"parameters": failed},
                    )
                )

            missed = [
                piece for piece in TEST_PIECES if DetectionResult.NOT_DETECTED in getattr(reading, piece)
            ]
            if missed:
                flags.append(
                    ReviewFlag(
                        key=key,
                        message=f"Test piece not detected: {', '.join(missed)}.",
                        values={"pieces": missed},
                    )
                )

            if has_text(reading.observation) or has_text(reading.corrective_actions):
                flags.append(
                    ReviewFlag(
                        key=key,
                        message="Observation or corrective action recorded.",
                        values={
                            "observation": reading.observation,
                            "correctiveActions": reading.corrective_actions,
                        },
                    )
                )
        return flags
