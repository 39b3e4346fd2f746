from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import BoxSampleRecord
from ..registry import register_rule
from ..rule import Rule
from ..units import extract_numeric


@register_rule
class QC_RAW_MATERIAL_QUALITY(Rule):
    kind = ChecklistKind.RAW_MATERIAL_QUALITY
    rule_title = "Incoming fruit acceptable on taste, defects and receiving temperature"

    def check(self, record: BoxSampleRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        t = ctx.thresholds
        flags: List[ReviewFlag] = []
        for idx, sample in enumerate(record.box_samples):
            key = f"box_samples[{idx}]"
            rating = sample.organoleptic
            if rating is not None and rating not in t.acceptable_organoleptic:
                flags.append(
                    ReviewFlag(
                        key=key,
                        message=f"Organoleptic rating {sample.values.get('Organoleptic')!r} not acceptable.",
                        values={"organoleptic": sample.values.get("Organoleptic")},
                    )
                )

            weight = extract_numeric(sample.weight_sample)
            if not weight or weight <= 0:
                continue
            # Defect columns are the ones whose header carries a "%".
            for field_name, raw in sample.values.items():
                if "%" not in field_name:
                    continue
                grams = extract_numeric(raw)
                if grams is None:
                    continue
                pct = grams / weight * 100
                if pct > t.defect_pct_max:
                    flags.append(
                        ReviewFlag(
                            key=f"{key}.{field_name}",
                            message=f"{field_name} at {pct:.1f}% of sample exceeds {t.defect_pct_max:g}%.",
                            values={"grams": grams, "weight_sample": weight, "pct": pct},
                        )
                    )

        temp = record.cold_storage_receiving_temperature
        if temp is not None and (temp > t.cold_storage_max or temp < t.cold_storage_min):
            flags.append(
                ReviewFlag(
                    key="cold_storage_receiving_temperature",
                    message=f"Receiving temperature {temp:g}°C outside {t.cold_storage_min:g}-{t.cold_storage_max:g}°C.",
                    values={"temperature": temp, "min": t.cold_storage_min, "max": t.cold_storage_max},
                )
            )
        return flags
