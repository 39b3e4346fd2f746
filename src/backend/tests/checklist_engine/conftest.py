import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import date

import pytest

from common.checklist_engine.config import EngineConfig, ReviewThresholds
from common.checklist_engine.context import EvaluationContext


@pytest.fixture
def report_date() -> date:
    return date(2025, 1, 15)


@pytest.fixture
def make_ctx():
    def _make(*, materials=None, thresholds=None, app_base_url=None) -> EvaluationContext:
        config = EngineConfig(thresholds=thresholds or ReviewThresholds(), app_base_url=app_base_url)
        return EvaluationContext(config=config, product_materials=materials or {})

    return _make


@pytest.fixture
def ctx(make_ctx) -> EvaluationContext:
    return make_ctx()


class InMemorySource:
    def __init__(self, records=None, materials=None, failing=(), failing_materials=False):
        self.records = records or {}
        self.materials = materials or {}
        self.failing = set(failing)
        self.failing_materials = failing_materials
        self.fetched = []
        self.material_requests = []

    def fetch_all(self, kind):
        self.fetched.append(kind)
        if kind in self.failing:
            raise RuntimeError(f"boom: {kind.value}")
        return list(self.records.get(kind, []))

    def fetch_product_materials(self, skus):
        skus = list(skus)
        self.material_requests.append(skus)
        if self.failing_materials:
            raise RuntimeError("productos unavailable")
        return {s: self.materials[s] for s in skus if s in self.materials}


@pytest.fixture
def make_source():
    def _make(**kwargs) -> InMemorySource:
        return InMemorySource(**kwargs)

    return _make


@pytest.fixture
def run_rule(ctx):
    def _run(rule_cls, raw, rule_ctx: EvaluationContext | None = None):
        rule = rule_cls()
        return rule.check(rule.parse(raw), rule_ctx or ctx)

    return _run
