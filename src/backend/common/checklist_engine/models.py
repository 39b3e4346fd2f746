from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ComplianceStatus(str, Enum):
    COMPLY = "comply"
    NOT_COMPLY = "not_comply"
    PENDING = "pending"


class Stage(str, Enum):
    PREOPERATIONAL = "preoperational"
    OPERATIONAL = "operational"
    INBOUND_OUTBOUND = "inbound-outbound"


class ChecklistKind(str, Enum):
    PRE_OPERATIONAL_REVIEW = "checklist_pre_operational_review"
    CLEANLINESS_CONTROL_PACKING = "checklist_cleanliness_control_packing"
    FOOTBATH_CONTROL = "checklist_footbath_control"
    STAFF_PRACTICES = "checklist_staff_practices"
    STAFF_GLASSES_AUDITORY = "checklist_staff_glasses_auditory"
    STAFF_GLASSES_AUDITORY_SETUP = "checklist_staff_glasses_auditory_setup"
    MATERIALS_CONTROL = "checklist_materials_control"
    METAL_DETECTOR = "checklist_metal_detector"
    PRODUCTO_MIX = "checklist_producto_mix"
    WEIGHING_SEALING = "checklist_weighing_sealing"
    FOREIGN_MATERIAL = "checklist_foreign_material"
    ENVTEMP = "checklist_envtemp"
    MONOPRODUCTO = "checklist_calidad_monoproducto"
    RAW_MATERIAL_QUALITY = "checklist_raw_material_quality"
    FROZEN_PRODUCT_DISPATCH = "checklist_frozen_product_dispatch"


class RecordShape(str, Enum):
    ITEM_LIST = "item_list"
    BAG_ENTRY = "bag_entry"
    MEASUREMENT = "measurement"
    READING = "reading"
    PERSONNEL = "personnel"
    FINDING = "finding"
    INSPECTION = "inspection"
    PALLET = "pallet"
    BOX_SAMPLE = "box_sample"
    UNCLASSIFIED = "unclassified"


# --- Wire-format enumerations -------------------------------------------------------------------
# Records arrive with free strings; each field maps them onto a closed set here. Anything not
# recognised becomes OTHER so rules never compare against raw strings.


class WireEnum(str, Enum):
    @classmethod
    def from_wire(cls, value: Any):
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        text = str(value)
        if text == "":
            return None
        for member in cls:
            if member.value == text:
                return member
        return cls("other")


class ParameterStatus(WireEnum):
    COMPLY = "Comply"
    NO_COMPLY = "No comply"
    OTHER = "other"


class ConditionStatus(WireEnum):
    COMPLY = "comply"
    NOT_COMPLY = "not_comply"
    OTHER = "other"


class MaterialStatus(WireEnum):
    GOOD = "Good/Bueno"
    BAD = "Bad/Malo"
    OTHER = "other"


class TemperatureStatus(WireEnum):
    WITHIN_RANGE = "Within Range"
    OVER_LIMIT = "Over Limit"
    UNDER_LIMIT = "Under Limit"
    OTHER = "other"


class DetectionResult(WireEnum):
    DETECTED = "D"
    NOT_DETECTED = "ND"
    OTHER = "other"


class InspectionResult(WireEnum):
    APPROVE = "Approve"
    REJECT = "Reject"
    OTHER = "other"


class OrganolepticRating(WireEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: Any):
        if isinstance(value, str):
            value = value.strip().lower()
        return super().from_wire(value)


class SealStatus(WireEnum):
    NOT_COMPLY = "not_comply"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: Any):
        if value is None:
            return None
        text = str(value).lower()
        if "not comply" in text or "no comply" in text:
            return cls.NOT_COMPLY
        return cls.OTHER


# --- Results ------------------------------------------------------------------------------------


class ReviewFlag(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    message: str
    values: Dict[str, Any] = Field(default_factory=dict)


class EvaluationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ChecklistKind
    compliance_status: ComplianceStatus
    needs_review: bool
    shape: RecordShape = RecordShape.UNCLASSIFIED
    flags: List[ReviewFlag] = Field(default_factory=list)


class ChecklistSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ChecklistKind
    display_name: str
    count: int
    needs_review_count: int
    stage: Stage
    dashboard_url: Optional[str] = None
    historial_url: Optional[str] = None


class DailySummaryReport(BaseModel):
    run_id: str
    generated_at: datetime
    report_date: date

    summaries: List[ChecklistSummary] = Field(default_factory=list)
    by_stage: Dict[Stage, List[ChecklistSummary]] = Field(default_factory=dict)

    total_checklists: int = 0
    total_needs_review: int = 0
    needs_review_display_names: List[str] = Field(default_factory=list)
    failed_kinds: List[ChecklistKind] = Field(default_factory=list)


class ChecklistComplianceStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ChecklistKind
    display_name: str
    total: int = 0
    comply: int = 0
    not_comply: int = 0
    pending: int = 0


class MonthlyComplianceReport(BaseModel):
    run_id: str
    generated_at: datetime
    year: int
    month: int

    stats: List[ChecklistComplianceStats] = Field(default_factory=list)
    total_checklists: int = 0
    total_comply: int = 0
    total_not_comply: int = 0
    total_pending: int = 0
    failed_kinds: List[ChecklistKind] = Field(default_factory=list)
