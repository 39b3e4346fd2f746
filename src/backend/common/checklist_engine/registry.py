from __future__ import annotations

from typing import Dict, Iterable, Type

from .models import ChecklistKind
from .rule import Rule


class RuleRegistry:
    def __init__(self):
        self._rules: Dict[ChecklistKind, Type[Rule]] = {}

    def register(self, rule_cls: Type[Rule]) -> None:
        kind = getattr(rule_cls, "kind", None)
        if not kind:
            raise ValueError("Rule class missing kind")
        if kind in self._rules:
            raise ValueError(f"Duplicate rule registered for kind: {kind.value}")
        self._rules[kind] = rule_cls

    def get(self, kind: ChecklistKind) -> Type[Rule]:
        return self._rules[kind]

    def create(self, kind: ChecklistKind) -> Rule:
        return self._rules[kind]()

    def kinds(self) -> Iterable[ChecklistKind]:
        return self._rules.keys()

    def missing_kinds(self) -> list[ChecklistKind]:
        return [kind for kind in ChecklistKind if kind not in self._rules]


registry = RuleRegistry()


def register_rule(rule_cls: Type[Rule]) -> Type[Rule]:
    registry.register(rule_cls)
    return rule_cls
