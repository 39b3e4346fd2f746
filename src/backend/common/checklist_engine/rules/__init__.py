from .pre_operational_review import QC_PRE_OPERATIONAL_REVIEW
from .cleanliness_control_packing import QC_CLEANLINESS_CONTROL_PACKING
from .footbath_control import QC_FOOTBATH_CONTROL
from .staff_practices import QC_STAFF_PRACTICES
from .staff_glasses_auditory import (
    QC_STAFF_GLASSES_AUDITORY,
    QC_STAFF_GLASSES_AUDITORY_SETUP,
)
from .materials_control import QC_MATERIALS_CONTROL
from .metal_detector import QC_METAL_DETECTOR
from .producto_mix import QC_PRODUCTO_MIX
from .weighing_sealing import QC_WEIGHING_SEALING
from .foreign_material import QC_FOREIGN_MATERIAL
from .envtemp import QC_ENVTEMP
from .monoproducto import QC_MONOPRODUCTO
from .raw_material_quality import QC_RAW_MATERIAL_QUALITY
from .frozen_product_dispatch import LOG_FROZEN_PRODUCT_DISPATCH

__all__ = [
    "QC_PRE_OPERATIONAL_REVIEW",
    "QC_CLEANLINESS_CONTROL_PACKING",
    "QC_FOOTBATH_CONTROL",
    "QC_STAFF_PRACTICES",
    "QC_STAFF_GLASSES_AUDITORY",
    "QC_STAFF_GLASSES_AUDITORY_SETUP",
    "QC_MATERIALS_CONTROL",
    "QC_METAL_DETECTOR",
    "QC_PRODUCTO_MIX",
    "QC_WEIGHING_SEALING",
    "QC_FOREIGN_MATERIAL",
    "QC_ENVTEMP",
    "QC_MONOPRODUCTO",
    "QC_RAW_MATERIAL_QUALITY",
    "LOG_FROZEN_PRODUCT_DISPATCH",
]
