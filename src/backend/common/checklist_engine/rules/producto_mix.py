from __future__ import annotations

from typing import List, Mapping, Optional

from ..context import EvaluationContext
from ..models import ChecklistKind, ReviewFlag
from ..records import Pallet, PalletRecord
from ..registry import register_rule
from ..rule import Rule
from ..units import exceeds_tolerance, expected_bag_grams, extract_numeric

BAG_WEIGHT_FIELDS = ("Peso Bolsa", "Peso Bolsa (gr)")


def bag_weight(values: Mapping[str, str]) -> float:
    for field_name in BAG_WEIGHT_FIELDS:
        raw = values.get(field_name)
        if raw:
            return extract_numeric(raw) or 0.0
    return 0.0


def composition_flags(key: str, pallet: Pallet, peso_bolsa: float, tolerance: float) -> List[ReviewFlag]:
    if pallet.fields_by_fruit is None or not pallet.expected_compositions or peso_bolsa <= 0:
        return []
    flags: List[ReviewFlag] = []
    for fruit, expected in pallet.expected_compositions.items():
        peso_fruta = extract_numeric(pallet.values.get(f"Peso Fruta {fruit}")) or 0.0
        if peso_fruta <= 0:
            continue
        actual_pct = peso_fruta / peso_bolsa * 100
        expected_pct = expected * 100
        if abs(actual_pct - expected_pct) > tolerance:
            flags.append(
                ReviewFlag(
                    key=key,
                    message=f"{fruit} is {actual_pct:.1f}% of the bag, expected {expected_pct:.1f}%.",
                    values={"fruit": fruit, "actual_pct": actual_pct, "expected_pct": expected_pct},
                )
            )
    return flags


def bag_weight_flag(
    key: str, actual: float, expected: Optional[float], tolerance_pct: float
) -> Optional[ReviewFlag]:
    if not expected or actual <= 0 or not exceeds_tolerance(actual, expected, tolerance_pct):
        return None
    return ReviewFlag(
        key=key,
        message=f"Bag weight {actual:g} g deviates more than {tolerance_pct:g}% from {expected:.2f} g.",
        values={"actual_g": actual, "expected_g": expected, "tolerance_pct": tolerance_pct},
    )


@register_rule
class QC_PRODUCTO_MIX(Rule):
    kind = ChecklistKind.PRODUCTO_MIX
    rule_title = "Mix bags match fruit composition and declared net weight"

    def check(self, record: PalletRecord, ctx: EvaluationContext) -> List[ReviewFlag]:
        t = ctx.thresholds
        expected = expected_bag_grams(ctx.material_for(record.sku, record.producto))
        flags: List[ReviewFlag] = []
        for idx, pallet in enumerate(record.pallets):
            key = f"pallets[{idx}]"
            peso_bolsa = bag_weight(pallet.values)
            flags.extend(composition_flags(key, pallet, peso_bolsa, t.composition_tolerance_points))
            flag = bag_weight_flag(key, peso_bolsa, expected, t.bag_weight_tolerance_pct)
            if flag is not None:
                flags.append(flag)
        return flags
