"""Typed views over raw checklist rows.

Rows come from the persistence layer as loosely-typed JSON. Each record shape is modelled once;
every `ChecklistKind` maps to exactly one model in `KIND_RECORD_MODELS`. Wire strings are mapped
to the closed enums in `models` while validating, and unparseable numbers become `None` so the
check that depends on them is skipped instead of raising.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import (
    ChecklistKind,
    ConditionStatus,
    DetectionResult,
    InspectionResult,
    MaterialStatus,
    OrganolepticRating,
    ParameterStatus,
    RecordShape,
    SealStatus,
    TemperatureStatus,
    WireEnum,
)
from .units import coerce_float, leading_float


def has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _bool_or_none(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _list_or_empty(value: Any) -> list:
    return value if isinstance(value, list) else []


def _wire(enum_cls: Type[WireEnum]) -> Callable[[Any], Any]:
    # A bare classmethod handed to field_validator loses its class binding.
    def _map(value: Any):
        return enum_cls.from_wire(value)

    return _map


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


# --- item list ----------------------------------------------------------------------------------


class ChecklistItem(_WireModel):
    comply: Optional[bool] = None
    corrective_action_comply: Optional[bool] = Field(None, alias="correctiveActionComply")
    observation: Optional[str] = None
    corrective_action_observation: Optional[str] = Field(None, alias="correctiveActionObservation")

    _bools = field_validator("comply", "corrective_action_comply", mode="before")(_bool_or_none)
    _texts = field_validator("observation", "corrective_action_observation", mode="before")(_text_or_none)


class ItemListRecord(_WireModel):
    items: List[ChecklistItem] = Field(default_factory=list)

    _items = field_validator("items", mode="before")(_list_or_empty)


# --- cleanliness areas --------------------------------------------------------------------------


class CleanlinessPart(_WireModel):
    comply: Optional[bool] = None
    corrective_action_comply: Optional[bool] = Field(None, alias="correctiveActionComply")
    bioluminescence_result: Optional[str] = Field(None, alias="bioluminescenceResult")

    _bools = field_validator("comply", "corrective_action_comply", mode="before")(_bool_or_none)
    _texts = field_validator("bioluminescence_result", mode="before")(_text_or_none)


class CleanlinessArea(_WireModel):
    parts: List[CleanlinessPart] = Field(default_factory=list)

    _parts = field_validator("parts", mode="before")(_list_or_empty)


class CleanlinessRecord(_WireModel):
    areas: List[CleanlinessArea] = Field(default_factory=list)

    _areas = field_validator("areas", mode="before")(_list_or_empty)


# --- bag entries --------------------------------------------------------------------------------


class BagEntry(_WireModel):
    sealed: List[SealStatus] = Field(default_factory=list)

    @field_validator("sealed", mode="before")
    @classmethod
    def _map_seals(cls, value: Any) -> list:
        return [s for s in (SealStatus.from_wire(v) for v in _list_or_empty(value)) if s is not None]

    @property
    def has_not_comply_seal(self) -> bool:
        return SealStatus.NOT_COMPLY in self.sealed


class BagEntryRecord(_WireModel):
    bag_entries: List[BagEntry] = Field(default_factory=list)

    _entries = field_validator("bag_entries", mode="before")(_list_or_empty)


# --- measurements -------------------------------------------------------------------------------


class Measurement(_WireModel):
    corrective_action: Optional[str] = Field(None, alias="correctiveAction")
    measure_ppm_value: Optional[float] = Field(None, alias="measurePpmValue")

    _texts = field_validator("corrective_action", mode="before")(_text_or_none)
    _ppm = field_validator("measure_ppm_value", mode="before")(coerce_float)


class MeasurementRecord(_WireModel):
    measurements: List[Measurement] = Field(default_factory=list)

    _measurements = field_validator("measurements", mode="before")(_list_or_empty)


# --- readings (metal detector, environmental temperature) --------------------------------------


def _detections(value: Any) -> list:
    return [d for d in (DetectionResult.from_wire(v) for v in _list_or_empty(value)) if d is not None]


class Reading(_WireModel):
    sensitivity: Optional[ParameterStatus] = None
    noise_alarm: Optional[ParameterStatus] = Field(None, alias="noiseAlarm")
    rejecting_arm: Optional[ParameterStatus] = Field(None, alias="rejectingArm")
    beacon_light: Optional[ParameterStatus] = Field(None, alias="beaconLight")
    observation: Optional[str] = None
    corrective_actions: Optional[str] = Field(None, alias="correctiveActions")

    bf: List[DetectionResult] = Field(default_factory=list)
    bnf: List[DetectionResult] = Field(default_factory=list)
    bss: List[DetectionResult] = Field(default_factory=list)

    average_temp: Optional[float] = Field(None, alias="averageTemp")
    status: Optional[TemperatureStatus] = None

    _params = field_validator("sensitivity", "noise_alarm", "rejecting_arm", "beacon_light", mode="before")(
        _wire(ParameterStatus)
    )
    _texts = field_validator("observation", "corrective_actions", mode="before")(_text_or_none)
    _detection_lists = field_validator("bf", "bnf", "bss", mode="before")(_detections)
    _temp = field_validator("average_temp", mode="before")(coerce_float)
    _status = field_validator("status", mode="before")(_wire(TemperatureStatus))

    def monitored_parameters(self) -> Dict[str, Optional[ParameterStatus]]:
        return {
            "sensitivity": self.sensitivity,
            "noiseAlarm": self.noise_alarm,
            "rejectingArm": self.rejecting_arm,
        }


class ReadingRecord(_WireModel):
    readings: List[Reading] = Field(default_factory=list)

    _readings = field_validator("readings", mode="before")(_list_or_empty)


# --- personnel / materials ----------------------------------------------------------------------

STAFF_PRACTICE_PARAMETERS = (
    ("staff_appearance", "staffAppearance"),
    ("complete_uniform", "completeUniform"),
    ("accessories_absence", "accessoriesAbsence"),
    ("work_tools_usage", "workToolsUsage"),
    ("cut_clean_not_polished_nails", "cutCleanNotPolishedNails"),
    ("no_makeup_on", "noMakeupOn"),
    ("staff_behavior", "staffBehavior"),
    ("staff_health", "staffHealth"),
)


class PersonnelEntry(_WireModel):
    material_status: Optional[MaterialStatus] = Field(None, alias="materialStatus")
    material_status_received: Optional[MaterialStatus] = Field(None, alias="materialStatusReceived")

    staff_appearance: Optional[ParameterStatus] = Field(None, alias="staffAppearance")
    complete_uniform: Optional[ParameterStatus] = Field(None, alias="completeUniform")
    accessories_absence: Optional[ParameterStatus] = Field(None, alias="accessoriesAbsence")
    work_tools_usage: Optional[ParameterStatus] = Field(None, alias="workToolsUsage")
    cut_clean_not_polished_nails: Optional[ParameterStatus] = Field(None, alias="cutCleanNotPolishedNails")
    no_makeup_on: Optional[ParameterStatus] = Field(None, alias="noMakeupOn")
    staff_behavior: Optional[ParameterStatus] = Field(None, alias="staffBehavior")
    staff_health: Optional[ParameterStatus] = Field(None, alias="staffHealth")

    condition_in: Optional[ConditionStatus] = Field(None, alias="conditionIn")
    condition_out: Optional[ConditionStatus] = Field(None, alias="conditionOut")

    observation: Optional[str] = None
    observation_received: Optional[str] = Field(None, alias="observationReceived")
    observation_in: Optional[str] = Field(None, alias="observationIn")
    observation_out: Optional[str] = Field(None, alias="observationOut")
    corrective_action: Optional[str] = Field(None, alias="correctiveAction")

    _materials = field_validator("material_status", "material_status_received", mode="before")(
        _wire(MaterialStatus)
    )
    _params = field_validator(*(name for name, _ in STAFF_PRACTICE_PARAMETERS), mode="before")(
        _wire(ParameterStatus)
    )
    _conditions = field_validator("condition_in", "condition_out", mode="before")(_wire(ConditionStatus))
    _texts = field_validator(
        "observation",
        "observation_received",
        "observation_in",
        "observation_out",
        "corrective_action",
        mode="before",
    )(_text_or_none)

    @property
    def has_bad_material(self) -> bool:
        return MaterialStatus.BAD in (self.material_status, self.material_status_received)


class PersonnelRecord(_WireModel):
    personnel_materials: List[PersonnelEntry] = Field(default_factory=list)

    _entries = field_validator("personnel_materials", mode="before")(_list_or_empty)


# --- findings -----------------------------------------------------------------------------------


class FindingRecord(_WireModel):
    no_findings: Optional[bool] = None
    findings: List[Any] = Field(default_factory=list)

    _flag = field_validator("no_findings", mode="before")(_bool_or_none)
    _findings = field_validator("findings", mode="before")(_list_or_empty)


# --- pallets (producto mix, monoproducto) -------------------------------------------------------


def _string_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): ("" if v is None else str(v)) for k, v in value.items()}


def _fraction_map(value: Any) -> Optional[Dict[str, float]]:
    if not isinstance(value, dict):
        return None
    out: Dict[str, float] = {}
    for fruit, fraction in value.items():
        parsed = coerce_float(fraction)
        if parsed is not None:
            out[str(fruit)] = parsed
    return out


class Pallet(_WireModel):
    values: Dict[str, str] = Field(default_factory=dict)
    fields_by_fruit: Optional[Any] = Field(None, alias="fieldsByFruit")
    expected_compositions: Optional[Dict[str, float]] = Field(None, alias="expectedCompositions")

    _values = field_validator("values", mode="before")(_string_map)
    _compositions = field_validator("expected_compositions", mode="before")(_fraction_map)


class PalletRecord(_WireModel):
    producto: Optional[str] = None
    sku: Optional[str] = None
    pallets: List[Pallet] = Field(default_factory=list)

    _texts = field_validator("producto", "sku", mode="before")(_text_or_none)
    _pallets = field_validator("pallets", mode="before")(_list_or_empty)


# --- raw material box samples -------------------------------------------------------------------


class BoxSample(_WireModel):
    values: Dict[str, str] = Field(default_factory=dict)
    weight_sample: Optional[str] = Field(None, alias="weightSample")

    _values = field_validator("values", mode="before")(_string_map)
    _weight = field_validator("weight_sample", mode="before")(_text_or_none)

    @property
    def organoleptic(self) -> Optional[OrganolepticRating]:
        raw = self.values.get("Organoleptic")
        if not raw:
            return None
        return OrganolepticRating.from_wire(raw)


class BoxSampleRecord(_WireModel):
    box_samples: List[BoxSample] = Field(default_factory=list)
    cold_storage_receiving_temperature: Optional[float] = None

    _samples = field_validator("box_samples", mode="before")(_list_or_empty)
    _temp = field_validator("cold_storage_receiving_temperature", mode="before")(leading_float)


# --- logistics dispatch -------------------------------------------------------------------------


class InspectionRecord(_WireModel):
    inspection_result: Optional[InspectionResult] = None

    _result = field_validator("inspection_result", mode="before")(_wire(InspectionResult))


SHAPE_RECORD_MODELS: Dict[RecordShape, Type[_WireModel]] = {
    RecordShape.ITEM_LIST: ItemListRecord,
    RecordShape.BAG_ENTRY: BagEntryRecord,
    RecordShape.MEASUREMENT: MeasurementRecord,
    RecordShape.READING: ReadingRecord,
    RecordShape.PERSONNEL: PersonnelRecord,
    RecordShape.FINDING: FindingRecord,
    RecordShape.INSPECTION: InspectionRecord,
    RecordShape.PALLET: PalletRecord,
    RecordShape.BOX_SAMPLE: BoxSampleRecord,
}

KIND_RECORD_MODELS: Dict[ChecklistKind, Type[_WireModel]] = {
    ChecklistKind.PRE_OPERATIONAL_REVIEW: ItemListRecord,
    ChecklistKind.CLEANLINESS_CONTROL_PACKING: CleanlinessRecord,
    ChecklistKind.FOOTBATH_CONTROL: MeasurementRecord,
    ChecklistKind.STAFF_PRACTICES: PersonnelRecord,
    ChecklistKind.STAFF_GLASSES_AUDITORY: PersonnelRecord,
    ChecklistKind.STAFF_GLASSES_AUDITORY_SETUP: PersonnelRecord,
    ChecklistKind.MATERIALS_CONTROL: PersonnelRecord,
    ChecklistKind.METAL_DETECTOR: ReadingRecord,
    ChecklistKind.PRODUCTO_MIX: PalletRecord,
    ChecklistKind.WEIGHING_SEALING: BagEntryRecord,
    ChecklistKind.FOREIGN_MATERIAL: FindingRecord,
    ChecklistKind.ENVTEMP: ReadingRecord,
    ChecklistKind.MONOPRODUCTO: PalletRecord,
    ChecklistKind.RAW_MATERIAL_QUALITY: BoxSampleRecord,
    ChecklistKind.FROZEN_PRODUCT_DISPATCH: InspectionRecord,
}

_missing_kinds = set(ChecklistKind) - set(KIND_RECORD_MODELS)
if _missing_kinds:
    raise RuntimeError(f"Checklist kinds without a record model: {sorted(k.value for k in _missing_kinds)}")
