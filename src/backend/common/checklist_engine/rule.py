from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Type

from pydantic import BaseModel

from .context import EvaluationContext
from .models import ChecklistKind, ReviewFlag
from .records import KIND_RECORD_MODELS


class Rule(ABC):
    """Kind-specific needs-review check, layered on top of coarse compliance."""

    kind: ChecklistKind
    rule_title: str

    def __init__(self):
        if not getattr(self, "kind", None):
            raise ValueError("Rule must define kind")

    @property
    def record_model(self) -> Type[BaseModel]:
        return KIND_RECORD_MODELS[self.kind]

    def parse(self, raw: Mapping[str, Any]) -> BaseModel:
        return self.record_model.model_validate(raw)

    @abstractmethod
    def check(self, record: Any, ctx: EvaluationContext) -> List[ReviewFlag]:  # pragma: no cover
        """Return one flag per triggered condition; empty means no extra review needed."""
        raise NotImplementedError
