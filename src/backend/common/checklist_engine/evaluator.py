"""Per-record evaluation: coarse compliance plus the kind's needs-review rule."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from .classifier import classify_shape
from .compliance import classify_compliance
from .context import EvaluationContext
from .models import ChecklistKind, ComplianceStatus, EvaluationResult, ReviewFlag
from .registry import registry

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401

logger = logging.getLogger(__name__)


def _rule_flags(raw: Mapping[str, Any], kind: ChecklistKind, ctx: EvaluationContext) -> List[ReviewFlag]:
    rule = registry.create(kind)
    try:
        record = rule.parse(raw)
    except ValidationError as exc:
        logger.warning(
            "Skipping %s rule: record does not match its model (%d errors).",
            kind.value,
            exc.error_count(),
        )
        return []
    return rule.check(record, ctx)


def evaluate_record(
    raw: Mapping[str, Any],
    kind: ChecklistKind,
    ctx: Optional[EvaluationContext] = None,
) -> EvaluationResult:
    ctx = ctx or EvaluationContext()
    shape = classify_shape(raw)
    status = classify_compliance(raw, kind, thresholds=ctx.thresholds, shape=shape)

    flags: List[ReviewFlag] = []
    if status == ComplianceStatus.NOT_COMPLY:
        flags.append(ReviewFlag(key="compliance", message="Record does not comply."))
    flags.extend(_rule_flags(raw, kind, ctx))

    return EvaluationResult(
        kind=kind,
        compliance_status=status,
        needs_review=bool(flags),
        shape=shape,
        flags=flags,
    )


def needs_review(raw: Mapping[str, Any], kind: ChecklistKind, ctx: Optional[EvaluationContext] = None) -> bool:
    return evaluate_record(raw, kind, ctx).needs_review
