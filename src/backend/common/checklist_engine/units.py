from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Literal, Optional

GRAMS_PER_OUNCE = 28.3495
GRAMS_PER_POUND = 453.592

WeightUnit = Literal["oz", "lb"]

# "*16 OZ" is the catalog convention for the declared net weight; a bare "16 OZ" is a fallback.
_STARRED_WEIGHT = re.compile(r"\*(\d+\.?\d*)\s*(OZ|LB)", re.IGNORECASE)
_PLAIN_WEIGHT = re.compile(r"(\d+\.?\d*)\s*(OZ|LB)", re.IGNORECASE)
_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class WeightToken:
    magnitude: float
    unit: WeightUnit

    def to_grams(self) -> float:
        return convert_to_grams(self.magnitude, self.unit)


def parse_weight_token(text: Optional[str]) -> Optional[WeightToken]:
    """Find a weight-with-unit token in a free-text material description.

    Examples: "*16 OZ", "*2.5 LB", "16 oz", "MIX TROPICAL 2.5LB".
    """
    if not text:
        return None
    for pattern in (_STARRED_WEIGHT, _PLAIN_WEIGHT):
        match = pattern.search(text)
        if match:
            unit: WeightUnit = "lb" if match.group(2).upper() == "LB" else "oz"
            return WeightToken(magnitude=float(match.group(1)), unit=unit)
    return None


def convert_to_grams(magnitude: float, unit: str) -> float:
    if unit == "oz":
        return magnitude * GRAMS_PER_OUNCE
    if unit == "lb":
        return magnitude * GRAMS_PER_POUND
    raise ValueError(f"Unsupported weight unit: {unit!r}")


def expected_bag_grams(material: Optional[str]) -> Optional[float]:
    token = parse_weight_token(material)
    if token is None:
        return None
    return token.to_grams()


def extract_numeric(text: Any) -> Optional[float]:
    """Keep only digits and dots, then parse. "15 RLU" -> 15.0, "abc" -> None."""
    if text is None or isinstance(text, bool):
        return None
    cleaned = _NON_NUMERIC.sub("", str(text))
    if not cleaned:
        return None
    # Mirror a lenient prefix parse: "1.2.3" reads as 1.2.
    match = re.match(r"\d*\.?\d+|\d+\.?", cleaned)
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def leading_float(value: Any) -> Optional[float]:
    """Read the number a text starts with, sign included: "-5.5°C" reads as -5.5."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def exceeds_tolerance(actual: float, expected: float, tolerance_percent: float = 5) -> bool:
    # Strict: a deviation at the tolerance, give or take float rounding, does not flag.
    deviation = abs(actual - expected)
    tolerance = expected * (tolerance_percent / 100)
    return deviation > tolerance and not math.isclose(deviation, tolerance, rel_tol=1e-9)
