from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterable, Protocol

from common.checklist_engine.models import ChecklistKind

PRODUCTS_FILE = "productos.json"


class ChecklistSource(Protocol):
    def fetch_all(self, kind: ChecklistKind) -> list[dict[str, Any]]:
        """Return every stored record of one checklist kind (date filtering is the caller's job)."""
        ...

    def fetch_product_materials(self, skus: Iterable[str]) -> dict[str, str]:
        """Return `sku -> material description` for the SKUs that exist."""
        ...


def get_checklist_source(name: str | None = None) -> ChecklistSource:
    """Resolve a checklist source implementation by name (fixtures|live)."""
    source = (name if name is not None else os.getenv("CHECKLIST_SOURCE", "")).strip().lower()
    if source in ("fixtures", ""):
        return FixturesChecklistSource()
    if source == "live":
        from .live_supabase import LiveSupabaseChecklistSource

        return LiveSupabaseChecklistSource()
    raise ValueError(f"Unknown checklist source '{source}' (expected 'fixtures' or 'live').")


class FixturesChecklistSource:
    """Reads `<table>.json` (a JSON array of records) and `productos.json` from one directory."""

    def __init__(self, *, fixtures_dir: Path | None = None) -> None:
        self._fixtures_dir = fixtures_dir or _default_fixtures_dir()

    def fetch_all(self, kind: ChecklistKind) -> list[dict[str, Any]]:
        path = self._fixtures_dir / f"{kind.value}.json"
        if not path.exists():
            return []
        payload = _load_json(path)
        if not isinstance(payload, list):
            raise ValueError(f"{path.name} must hold a JSON array of records")
        return payload

    def fetch_product_materials(self, skus: Iterable[str]) -> dict[str, str]:
        path = self._fixtures_dir / PRODUCTS_FILE
        if not path.exists():
            return {}
        wanted = {s for s in skus if s}
        materials: dict[str, str] = {}
        for row in _load_json(path):
            sku = row.get("sku")
            if sku in wanted and row.get("material"):
                materials[sku] = row["material"]
        return materials


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _default_fixtures_dir() -> Path:
    configured = os.getenv("CHECKLIST_FIXTURES_DIR", "").strip()
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parents[1] / "tests" / "checklist_engine" / "fixtures"
