"""Compliance and needs-review evaluation for plant quality checklists.

Domain logic only: records come in as plain mappings, reference data (product materials) is
resolved by the caller, and nothing here touches the network or mutates a record.
"""

from .compliance import classify_compliance
from .config import ChecklistCatalog, ChecklistKindConfig, EngineConfig, ReviewThresholds, load_engine_config
from .context import EvaluationContext
from .evaluator import evaluate_record, needs_review
from .models import (
    ChecklistKind,
    ChecklistSummary,
    ComplianceStatus,
    DailySummaryReport,
    EvaluationResult,
    MonthlyComplianceReport,
    ReviewFlag,
    Stage,
)
from .runner import DailySummaryRunner, MonthlyComplianceRunner

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401
