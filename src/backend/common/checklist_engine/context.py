from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .config import EngineConfig, ReviewThresholds


@dataclass(frozen=True)
class EvaluationContext:
    """Read-only inputs shared by every rule for one evaluation batch.

    `product_materials` is the caller's pre-resolved `sku -> material description` lookup; rules
    never fetch reference data themselves.
    """

    config: EngineConfig = field(default_factory=EngineConfig.default)
    product_materials: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "product_materials", MappingProxyType(dict(self.product_materials)))

    @property
    def thresholds(self) -> ReviewThresholds:
        return self.config.thresholds

    def material_for(self, sku: Optional[str], fallback: Optional[str] = None) -> Optional[str]:
        if sku and self.product_materials.get(sku):
            return self.product_materials[sku]
        return fallback
