import json
from pathlib import Path

from scripts.run_quality_summary import main

FIXTURES_DIR = Path(__file__).resolve().parents[1] / "checklist_engine" / "fixtures"


def test_daily_json_to_file(tmp_path, monkeypatch):
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    out = tmp_path / "daily.json"
    code = main(["--fixtures-dir", str(FIXTURES_DIR), "--output", str(out), "daily", "--date", "2025-01-15"])
    assert code == 0
    payload = json.loads(out.read_text())
    assert payload["total_checklists"] == 7
    assert payload["summaries"][0]["dashboard_url"] is None


def test_daily_markdown_to_stdout(capsys, monkeypatch):
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    main(["--fixtures-dir", str(FIXTURES_DIR), "--format", "markdown", "daily", "--date", "2025-01-15"])
    out = capsys.readouterr().out
    assert out.startswith("# Daily Quality Summary 2025-01-15")
    assert "| Footbath Control | 2 | 1 |" in out
    assert "## Operational" in out
    assert "| Metal Detector | 2 | 1 |" in out


def test_monthly_markdown(capsys):
    main(["--fixtures-dir", str(FIXTURES_DIR), "--format", "markdown", "monthly", "--year", "2025", "--month", "1"])
    out = capsys.readouterr().out
    assert "# Monthly Compliance 2025-01" in out
    assert "| **Total** | 11 | 5 | 4 | 2 |" in out
