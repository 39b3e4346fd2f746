from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .dates import DateFormat
from .models import ChecklistKind, OrganolepticRating, Stage

DEFAULT_DATE_FIELD = "date_string"


class ReviewThresholds(BaseModel):
    """Numeric tolerances used by the needs-review rules."""

    model_config = ConfigDict(frozen=True)

    # Sanitizer concentration below this is out of range (strict `<`).
    min_sanitizer_ppm: float = 200
    # Bioluminescence: caution flags review; reject is reported only.
    rlu_caution: float = 20
    rlu_reject: float = 60
    # Process room temperature band, Fahrenheit, inclusive.
    env_temp_min: float = 42
    env_temp_max: float = 50
    bag_weight_tolerance_pct: float = 5
    # Percentage points between measured and expected fruit share.
    composition_tolerance_points: float = 5
    defect_pct_max: float = 10
    # Cold storage receiving temperature band, Celsius, inclusive.
    cold_storage_min: float = -20
    cold_storage_max: float = 0
    acceptable_organoleptic: Tuple[OrganolepticRating, ...] = (
        OrganolepticRating.EXCELLENT,
        OrganolepticRating.GOOD,
    )


class ChecklistKindConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ChecklistKind
    display_name: str
    stage: Stage
    date_field: str = DEFAULT_DATE_FIELD
    date_format: DateFormat = DateFormat.MMM_DD_YYYY
    dashboard_name: str = ""
    historial_name: str = ""
    # Logistics-only kinds are left out of the daily quality summary.
    quality: bool = True
    # Pallet kinds resolve an expected bag weight from the product catalog.
    uses_product_reference: bool = False


class ChecklistCatalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    kinds: Tuple[ChecklistKindConfig, ...] = ()

    def get(self, kind: ChecklistKind) -> ChecklistKindConfig:
        for entry in self.kinds:
            if entry.kind == kind:
                return entry
        raise KeyError(f"Checklist kind not configured: {kind.value}")

    def quality_kinds(self) -> Tuple[ChecklistKindConfig, ...]:
        return tuple(entry for entry in self.kinds if entry.quality)

    @classmethod
    def default(cls) -> "ChecklistCatalog":
        return cls(kinds=_DEFAULT_KINDS)


class EngineConfig(BaseModel):
    """Process-wide, immutable configuration passed explicitly to evaluators and runners."""

    model_config = ConfigDict(frozen=True)

    catalog: ChecklistCatalog = Field(default_factory=ChecklistCatalog.default)
    thresholds: ReviewThresholds = Field(default_factory=ReviewThresholds)
    app_base_url: Optional[str] = None

    @classmethod
    def default(cls) -> "EngineConfig":
        return cls()


def load_engine_config(path: Optional[Path] = None, *, app_base_url: Optional[str] = None) -> EngineConfig:
    """Build an `EngineConfig`, applying optional JSON overrides.

    The file may hold `thresholds` (partial `ReviewThresholds`) and `kinds`, a mapping of
    kind value -> partial `ChecklistKindConfig` fields. Kinds not mentioned keep their defaults.
    """
    raw: Dict[str, Any] = {}
    if path is not None and path.exists():
        raw = json.loads(path.read_text(encoding="utf-8"))

    thresholds = ReviewThresholds.model_validate(raw.get("thresholds") or {})

    overrides: Dict[str, Dict[str, Any]] = raw.get("kinds") or {}
    kinds = []
    for entry in _DEFAULT_KINDS:
        patch = overrides.get(entry.kind.value)
        if patch:
            entry = ChecklistKindConfig.model_validate({**entry.model_dump(), **patch, "kind": entry.kind})
        kinds.append(entry)

    return EngineConfig(
        catalog=ChecklistCatalog(kinds=tuple(kinds)),
        thresholds=thresholds,
        app_base_url=app_base_url or raw.get("app_base_url"),
    )


def _kind(
    kind: ChecklistKind,
    display_name: str,
    stage: Stage,
    dashboard_name: str,
    **extra: Any,
) -> ChecklistKindConfig:
    return ChecklistKindConfig(
        kind=kind,
        display_name=display_name,
        stage=stage,
        dashboard_name=dashboard_name,
        historial_name=dashboard_name,
        **extra,
    )


# Order is the report order.
_DEFAULT_KINDS: Tuple[ChecklistKindConfig, ...] = (
    _kind(
        ChecklistKind.PRE_OPERATIONAL_REVIEW,
        "Pre-Operational Review",
        Stage.PREOPERATIONAL,
        "Pre-Operational Review Processing Areas",
    ),
    _kind(
        ChecklistKind.CLEANLINESS_CONTROL_PACKING,
        "Cleanliness Control Packing",
        Stage.PREOPERATIONAL,
        "Cleanliness Control Packing",
    ),
    _kind(ChecklistKind.FOOTBATH_CONTROL, "Footbath Control", Stage.PREOPERATIONAL, "Footbath Control"),
    _kind(
        ChecklistKind.STAFF_PRACTICES,
        "Staff Practices",
        Stage.PREOPERATIONAL,
        "Staff Good Practices Control",
    ),
    _kind(
        ChecklistKind.STAFF_GLASSES_AUDITORY,
        "Staff Glasses Auditory",
        Stage.PREOPERATIONAL,
        "Process area staff glasses and auditory protector control",
    ),
    _kind(
        ChecklistKind.STAFF_GLASSES_AUDITORY_SETUP,
        "Staff Glasses Auditory Setup",
        Stage.PREOPERATIONAL,
        "Process area staff glasses and auditory protector control",
    ),
    _kind(
        ChecklistKind.MATERIALS_CONTROL,
        "Materials Control",
        Stage.PREOPERATIONAL,
        "Internal control of materials used in production areas",
    ),
    _kind(ChecklistKind.METAL_DETECTOR, "Metal Detector", Stage.OPERATIONAL, "Metal Detector (PCC #1)"),
    _kind(
        ChecklistKind.PRODUCTO_MIX,
        "Producto Mix",
        Stage.OPERATIONAL,
        "Checklist Mix Producto",
        uses_product_reference=True,
    ),
    _kind(
        ChecklistKind.WEIGHING_SEALING,
        "Weighing and Sealing",
        Stage.OPERATIONAL,
        "Check weighing and sealing of packaged products",
    ),
    _kind(
        ChecklistKind.FOREIGN_MATERIAL,
        "Foreign Material",
        Stage.OPERATIONAL,
        "Foreign Material Findings Record",
    ),
    _kind(
        ChecklistKind.ENVTEMP,
        "Environmental Temperature",
        Stage.OPERATIONAL,
        "Process Environmental Temperature Control",
    ),
    _kind(
        ChecklistKind.MONOPRODUCTO,
        "Monoproducto",
        Stage.OPERATIONAL,
        "Checklist Monoproducto",
        date_field="fecha",
        date_format=DateFormat.ISO,
        uses_product_reference=True,
    ),
    _kind(
        ChecklistKind.RAW_MATERIAL_QUALITY,
        "Raw Material Quality",
        Stage.INBOUND_OUTBOUND,
        "Raw Material Quality",
    ),
    _kind(
        ChecklistKind.FROZEN_PRODUCT_DISPATCH,
        "Frozen Product Dispatch",
        Stage.INBOUND_OUTBOUND,
        "Frozen Product Dispatch",
        quality=False,
    ),
)
