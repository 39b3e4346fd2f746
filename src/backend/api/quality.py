from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from common.checklist_engine.config import EngineConfig, load_engine_config
from common.checklist_engine.context import EvaluationContext
from common.checklist_engine.dates import default_report_date, previous_month
from common.checklist_engine.evaluator import evaluate_record
from common.checklist_engine.models import (
    ChecklistKind,
    DailySummaryReport,
    EvaluationResult,
    MonthlyComplianceReport,
)
from common.checklist_engine.runner import DailySummaryRunner, MonthlyComplianceRunner
from pipelines.data_source import ChecklistSource, get_checklist_source


router = APIRouter(prefix="/quality", tags=["quality"])


class EvaluateRequest(BaseModel):
    kind: ChecklistKind
    record: dict[str, Any]
    product_materials: dict[str, str] = Field(default_factory=dict)


def get_source() -> ChecklistSource:
    try:
        return get_checklist_source()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def get_engine_config() -> EngineConfig:
    config_path = os.getenv("ENGINE_CONFIG_PATH", "").strip()
    base_url = os.getenv("APP_BASE_URL", "").strip() or None
    try:
        return load_engine_config(Path(config_path) if config_path else None, app_base_url=base_url)
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=f"Invalid engine config: {exc}") from exc


@router.get("/daily-summary", response_model=DailySummaryReport)
def daily_summary(
    report_date: date | None = Query(None, alias="date"),
    source: ChecklistSource = Depends(get_source),
    config: EngineConfig = Depends(get_engine_config),
):
    target = report_date or default_report_date()
    return DailySummaryRunner(source, config=config).run(target)


@router.get("/monthly-compliance", response_model=MonthlyComplianceReport)
def monthly_compliance(
    year: int | None = Query(None, ge=2000),
    month: int | None = Query(None, ge=1, le=12),
    source: ChecklistSource = Depends(get_source),
    config: EngineConfig = Depends(get_engine_config),
):
    default_year, default_month = previous_month()
    return MonthlyComplianceRunner(source, config=config).run(year or default_year, month or default_month)


@router.post("/evaluate", response_model=EvaluationResult)
def evaluate(
    payload: EvaluateRequest,
    config: EngineConfig = Depends(get_engine_config),
):
    ctx = EvaluationContext(config=config, product_materials=payload.product_materials)
    return evaluate_record(payload.record, payload.kind, ctx)
