import logging
import threading
import time
from datetime import date
from pathlib import Path

import pytest

from common.checklist_engine import runner as runner_module
from common.checklist_engine.config import EngineConfig
from common.checklist_engine.models import ChecklistKind, Stage
from common.checklist_engine.runner import DailySummaryRunner, MonthlyComplianceRunner, distinct_skus
from pipelines.data_source import FixturesChecklistSource

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def _footbath(day: str, ppm, corrective: str = ""):
    return {"date_string": day, "measurements": [{"measurePpmValue": ppm, "correctiveAction": corrective}]}


def test_empty_day_produces_empty_report(make_source, report_date):
    report = DailySummaryRunner(make_source()).run(report_date)
    assert report.summaries == []
    assert report.total_checklists == 0
    assert report.total_needs_review == 0
    assert report.needs_review_display_names == []
    assert set(report.by_stage) == set(Stage)
    assert all(v == [] for v in report.by_stage.values())
    assert report.failed_kinds == []


def test_daily_filters_by_record_date(make_source, report_date):
    source = make_source(
        records={
            ChecklistKind.FOOTBATH_CONTROL: [
                _footbath("JAN-15-2025", 220),
                _footbath("jan-15-2025", 150, "refilled"),
                _footbath("JAN-16-2025", 100),
                _footbath("2025-01-15", 100),
                {"measurements": [{"measurePpmValue": 100}]},
            ]
        }
    )
    report = DailySummaryRunner(source).run(report_date)
    assert len(report.summaries) == 1
    summary = report.summaries[0]
    assert summary.kind == ChecklistKind.FOOTBATH_CONTROL
    assert summary.count == 2
    assert summary.needs_review_count == 1
    assert summary.stage == Stage.PREOPERATIONAL
    assert report.by_stage[Stage.PREOPERATIONAL] == [summary]
    assert report.needs_review_display_names == ["Footbath Control"]


def test_totals_equal_sum_of_summaries(make_source, report_date):
    source = make_source(
        records={
            ChecklistKind.FOOTBATH_CONTROL: [_footbath("JAN-15-2025", 150)],
            ChecklistKind.ENVTEMP: [
                {"date_string": "JAN-15-2025", "readings": [{"averageTemp": 45}]},
                {"date_string": "JAN-15-2025", "readings": [{"averageTemp": 51}]},
            ],
            ChecklistKind.FOREIGN_MATERIAL: [{"date_string": "JAN-15-2025", "no_findings": True, "findings": []}],
        }
    )
    report = DailySummaryRunner(source).run(report_date)
    assert report.total_checklists == sum(s.count for s in report.summaries) == 4
    assert report.total_needs_review == sum(s.needs_review_count for s in report.summaries) == 2
    assert report.needs_review_display_names == ["Footbath Control", "Environmental Temperature"]


def test_summaries_follow_catalog_order_not_completion_order(make_source, report_date):
    class SlowFirstSource(type(make_source())):
        def fetch_all(self, kind):
            if kind == ChecklistKind.PRE_OPERATIONAL_REVIEW:
                time.sleep(0.05)
            return super().fetch_all(kind)

    source = SlowFirstSource(
        records={
            ChecklistKind.PRE_OPERATIONAL_REVIEW: [{"date_string": "JAN-15-2025", "items": [{"comply": True}]}],
            ChecklistKind.RAW_MATERIAL_QUALITY: [
                {"date_string": "JAN-15-2025", "box_samples": [{"values": {"Organoleptic": "Good"}}]}
            ],
        }
    )
    report = DailySummaryRunner(source, max_workers=4).run(report_date)
    assert [s.kind for s in report.summaries] == [
        ChecklistKind.PRE_OPERATIONAL_REVIEW,
        ChecklistKind.RAW_MATERIAL_QUALITY,
    ]


def test_fetch_failure_is_logged_and_skipped(make_source, report_date, caplog):
    source = make_source(
        records={ChecklistKind.FOOTBATH_CONTROL: [_footbath("JAN-15-2025", 220)]},
        failing=[ChecklistKind.METAL_DETECTOR],
    )
    with caplog.at_level(logging.ERROR, logger="common.checklist_engine.runner"):
        report = DailySummaryRunner(source).run(report_date)
    assert report.failed_kinds == [ChecklistKind.METAL_DETECTOR]
    assert [s.kind for s in report.summaries] == [ChecklistKind.FOOTBATH_CONTROL]
    assert "checklist_metal_detector" in caplog.text


def test_logistics_kinds_not_in_daily_summary(make_source, report_date):
    source = make_source(
        records={ChecklistKind.FROZEN_PRODUCT_DISPATCH: [{"date_string": "JAN-15-2025", "inspection_result": "Reject"}]}
    )
    report = DailySummaryRunner(source).run(report_date)
    assert report.summaries == []
    assert ChecklistKind.FROZEN_PRODUCT_DISPATCH not in source.fetched


def test_skus_resolved_once_per_pallet_kind(make_source, report_date):
    source = make_source(
        records={
            ChecklistKind.PRODUCTO_MIX: [
                {"date_string": "JAN-15-2025", "sku": "MIX-16", "producto": "Blend", "pallets": [{"values": {"Peso Bolsa": "480"}}]},
                {"date_string": "JAN-15-2025", "sku": "MIX-16", "producto": "Blend", "pallets": [{"values": {"Peso Bolsa": "455"}}]},
                {"date_string": "JAN-15-2025", "sku": "", "producto": "Blend", "pallets": [{"values": {"Peso Bolsa": "1"}}]},
            ]
        },
        materials={"MIX-16": "BERRY BLEND *16 OZ"},
    )
    report = DailySummaryRunner(source).run(report_date)
    assert source.material_requests == [["MIX-16"]]
    mix = report.summaries[0]
    assert mix.count == 3
    assert mix.needs_review_count == 1


def test_material_lookup_failure_falls_back_to_record_product(make_source, report_date):
    source = make_source(
        records={
            ChecklistKind.PRODUCTO_MIX: [
                {"date_string": "JAN-15-2025", "sku": "MIX-16", "producto": "*16 OZ Blend", "pallets": [{"values": {"Peso Bolsa": "480"}}]}
            ]
        },
        failing_materials=True,
    )
    report = DailySummaryRunner(source).run(report_date)
    assert report.failed_kinds == []
    assert report.summaries[0].needs_review_count == 1


def test_links_only_with_base_url(make_source, report_date):
    source = make_source(records={ChecklistKind.FOOTBATH_CONTROL: [_footbath("JAN-15-2025", 220)]})
    without = DailySummaryRunner(source).run(report_date).summaries[0]
    assert without.dashboard_url is None and without.historial_url is None

    config = EngineConfig(app_base_url="https://qc.example.com")
    with_links = DailySummaryRunner(source, config=config).run(report_date).summaries[0]
    assert with_links.dashboard_url.startswith("https://qc.example.com/area/calidad/dashboard-quality?")
    assert with_links.historial_url.startswith("https://qc.example.com/area/calidad/historial?")


def test_fetches_run_concurrently(make_source, report_date):
    barrier = threading.Barrier(2, timeout=2)

    class BarrierSource(type(make_source())):
        def fetch_all(self, kind):
            if kind in (ChecklistKind.PRE_OPERATIONAL_REVIEW, ChecklistKind.CLEANLINESS_CONTROL_PACKING):
                barrier.wait()
            return super().fetch_all(kind)

    report = DailySummaryRunner(BarrierSource(), max_workers=2).run(report_date)
    assert report.failed_kinds == []


def test_max_workers_must_be_positive(make_source):
    with pytest.raises(ValueError):
        DailySummaryRunner(make_source(), max_workers=0)


def test_distinct_skus_ignores_blank():
    assert distinct_skus([{"sku": "B"}, {"sku": " A "}, {"sku": ""}, {"sku": None}, {}, {"sku": "B"}]) == ["A", "B"]


def test_daily_from_fixtures(report_date):
    report = DailySummaryRunner(FixturesChecklistSource(fixtures_dir=FIXTURES_DIR)).run(report_date)
    assert [(s.kind, s.count, s.needs_review_count) for s in report.summaries] == [
        (ChecklistKind.FOOTBATH_CONTROL, 2, 1),
        (ChecklistKind.METAL_DETECTOR, 2, 1),
        (ChecklistKind.PRODUCTO_MIX, 1, 1),
        (ChecklistKind.FOREIGN_MATERIAL, 1, 0),
        (ChecklistKind.MONOPRODUCTO, 1, 0),
    ]
    assert report.total_checklists == 7
    assert report.total_needs_review == 3
    assert report.needs_review_display_names == ["Footbath Control", "Metal Detector", "Producto Mix"]


def test_monthly_counts_by_status_from_fixtures():
    report = MonthlyComplianceRunner(FixturesChecklistSource(fixtures_dir=FIXTURES_DIR)).run(2025, 1)
    stats = {s.kind: s for s in report.stats}
    assert len(report.stats) == len(ChecklistKind)
    assert (stats[ChecklistKind.FOOTBATH_CONTROL].comply, stats[ChecklistKind.FOOTBATH_CONTROL].not_comply) == (2, 1)
    assert stats[ChecklistKind.FROZEN_PRODUCT_DISPATCH].not_comply == 1
    assert stats[ChecklistKind.PRODUCTO_MIX].pending == 1
    assert (stats[ChecklistKind.METAL_DETECTOR].comply, stats[ChecklistKind.METAL_DETECTOR].not_comply) == (1, 1)
    assert report.total_checklists == 11
    assert (report.total_comply, report.total_not_comply, report.total_pending) == (5, 4, 2)
    assert report.total_checklists == report.total_comply + report.total_not_comply + report.total_pending


def test_monthly_excludes_other_months_and_reports_failures(make_source):
    source = make_source(
        records={
            ChecklistKind.FOOTBATH_CONTROL: [_footbath("FEB-01-2025", 220), _footbath("JAN-31-2025", 100)],
        },
        failing=[ChecklistKind.ENVTEMP],
    )
    report = MonthlyComplianceRunner(source).run(2025, 1)
    stats = {s.kind: s for s in report.stats}
    assert stats[ChecklistKind.FOOTBATH_CONTROL].total == 1
    assert stats[ChecklistKind.FOOTBATH_CONTROL].not_comply == 1
    assert stats[ChecklistKind.ENVTEMP].total == 0
    assert report.failed_kinds == [ChecklistKind.ENVTEMP]


def test_monthly_rejects_bad_month(make_source):
    with pytest.raises(ValueError):
        MonthlyComplianceRunner(make_source()).run(2025, 13)


def test_reports_have_run_metadata(make_source, report_date):
    a = DailySummaryRunner(make_source()).run(report_date)
    b = DailySummaryRunner(make_source()).run(report_date)
    assert a.run_id != b.run_id
    assert a.report_date == date(2025, 1, 15)
    assert a.generated_at.tzinfo is not None


def test_daily_excludes_out_of_range_dates(make_source, report_date):
    source = make_source(
        records={
            ChecklistKind.FOOTBATH_CONTROL: [
                _footbath("JAN-15-2025", 220),
                _footbath("JAN-15-99999999999999999999", 100),
            ]
        }
    )
    report = DailySummaryRunner(source).run(report_date)
    assert report.total_checklists == 1
    assert report.failed_kinds == []


def test_daily_record_that_raises_is_logged_and_skipped(make_source, report_date, monkeypatch, caplog):
    real = runner_module.evaluate_record

    def _evaluate(raw, kind, ctx=None):
        if raw.get("id") == "bad":
            raise RuntimeError("broken record")
        return real(raw, kind, ctx)

    monkeypatch.setattr(runner_module, "evaluate_record", _evaluate)
    source = make_source(
        records={
            ChecklistKind.FOOTBATH_CONTROL: [
                _footbath("JAN-15-2025", 100),
                {**_footbath("JAN-15-2025", 220), "id": "bad"},
            ],
            ChecklistKind.ENVTEMP: [{"date_string": "JAN-15-2025", "readings": [{"averageTemp": 45}]}],
        }
    )
    with caplog.at_level(logging.ERROR, logger="common.checklist_engine.runner"):
        report = DailySummaryRunner(source).run(report_date)
    assert [(s.kind, s.count) for s in report.summaries] == [
        (ChecklistKind.FOOTBATH_CONTROL, 1),
        (ChecklistKind.ENVTEMP, 1),
    ]
    assert "broken record" in caplog.text


def test_monthly_record_that_raises_is_logged_and_skipped(make_source, monkeypatch, caplog):
    real = runner_module.classify_compliance

    def _classify(raw, kind=None, **kwargs):
        if raw.get("id") == "bad":
            raise RuntimeError("broken record")
        return real(raw, kind, **kwargs)

    monkeypatch.setattr(runner_module, "classify_compliance", _classify)
    source = make_source(
        records={
            ChecklistKind.FOOTBATH_CONTROL: [
                _footbath("JAN-10-2025", 220),
                {**_footbath("JAN-11-2025", 220), "id": "bad"},
                _footbath("JAN-99-99999999999999999999", 220),
            ],
        }
    )
    with caplog.at_level(logging.ERROR, logger="common.checklist_engine.runner"):
        report = MonthlyComplianceRunner(source).run(2025, 1)
    stats = {s.kind: s for s in report.stats}
    assert stats[ChecklistKind.FOOTBATH_CONTROL].total == 1
    assert report.failed_kinds == []
    assert "broken record" in caplog.text
