import json
from unittest.mock import patch

import pytest

from common.checklist_engine.models import ChecklistKind
from connectors.supabase.config import SupabaseConfig
from pipelines.data_source import FixturesChecklistSource, get_checklist_source
from pipelines.live_supabase import LiveSupabaseChecklistSource


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_fixtures_source_reads_table_file(tmp_path):
    _write(tmp_path / "checklist_envtemp.json", [{"id": 1}, {"id": 2}])
    source = FixturesChecklistSource(fixtures_dir=tmp_path)
    assert source.fetch_all(ChecklistKind.ENVTEMP) == [{"id": 1}, {"id": 2}]
    assert source.fetch_all(ChecklistKind.FOOTBATH_CONTROL) == []


def test_fixtures_source_rejects_non_array(tmp_path):
    _write(tmp_path / "checklist_envtemp.json", {"id": 1})
    with pytest.raises(ValueError):
        FixturesChecklistSource(fixtures_dir=tmp_path).fetch_all(ChecklistKind.ENVTEMP)


def test_fixtures_source_product_materials(tmp_path):
    _write(
        tmp_path / "productos.json",
        [{"sku": "A", "material": "*16 OZ"}, {"sku": "B", "material": ""}, {"sku": "C", "material": "*2 LB"}],
    )
    source = FixturesChecklistSource(fixtures_dir=tmp_path)
    assert source.fetch_product_materials(["A", "B", "Z"]) == {"A": "*16 OZ"}


def test_get_checklist_source_defaults_to_fixtures(monkeypatch, tmp_path):
    monkeypatch.delenv("CHECKLIST_SOURCE", raising=False)
    monkeypatch.setenv("CHECKLIST_FIXTURES_DIR", str(tmp_path))
    _write(tmp_path / "checklist_envtemp.json", [{"id": 9}])
    source = get_checklist_source()
    assert isinstance(source, FixturesChecklistSource)
    assert source.fetch_all(ChecklistKind.ENVTEMP) == [{"id": 9}]


def test_get_checklist_source_unknown():
    with pytest.raises(ValueError):
        get_checklist_source("sqlite")


def test_live_source_delegates_to_connector():
    config = SupabaseConfig(url="https://abc.supabase.co", service_role_key="key")
    source = LiveSupabaseChecklistSource(config=config)
    with patch("pipelines.live_supabase.fetch_table_rows", return_value=[{"id": 1}]) as rows, patch(
        "pipelines.live_supabase.fetch_product_materials", return_value={"A": "*16 OZ"}
    ) as materials:
        assert source.fetch_all(ChecklistKind.MONOPRODUCTO) == [{"id": 1}]
        assert source.fetch_product_materials(["A"]) == {"A": "*16 OZ"}

    rows.assert_called_once_with(config, "checklist_calidad_monoproducto")
    materials.assert_called_once_with(config, ["A"])


def test_live_source_selected_by_name(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "key")
    assert isinstance(get_checklist_source("live"), LiveSupabaseChecklistSource)
