from __future__ import annotations

from typing import List

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import PalletRecord
from ..registry import register_rule
from ..rule import Rule
from ..units import expected_bag_grams, extract_numeric
from .producto_mix import bag_weight_flag


def is_bag_weight_field(name: str) -> bool:
    lowered = name.lower()
    return "peso" in lowered and "bolsa" in lowered


@register_rule
class QC_MONOPRODUCTO(Rule):
    kind = ChecklistKind.MONOPRODUCTO
    rule_title = "Single-product bags match declared net weight"

    def check(self, record: PalletRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        expected = expected_bag_grams(ctx.material_for(record.sku, record.producto))
        if not expected:
            return []
        tolerance = ctx.thresholds.bag_weight_tolerance_pct
        flags: List[ReviewFlag] = []
        for idx, pallet in enumerate(record.pallets):
            for field_name, raw in pallet.values.items():
                if not is_bag_weight_field(field_name):
                    continue
                flag = bag_weight_flag(
                    f"pallets[{idx}].{field_name}", extract_numeric(raw) or 0.0, expected, tolerance
                )
                if flag is not None:
                    flags.append(flag)
        return flags
