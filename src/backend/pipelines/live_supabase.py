from __future__ import annotations

import logging
from typing import Any, Iterable

from common.checklist_engine.models import ChecklistKind
from connectors.supabase.config import SupabaseConfig, get_supabase_config
from connectors.supabase.tables import fetch_product_materials, fetch_table_rows

logger = logging.getLogger(__name__)


class LiveSupabaseChecklistSource:
    def __init__(self, *, config: SupabaseConfig | None = None) -> None:
        self._config = config or get_supabase_config()

    def fetch_all(self, kind: ChecklistKind) -> list[dict[str, Any]]:
        rows = fetch_table_rows(self._config, kind.value)
        logger.info("Fetched %d rows from %s", len(rows), kind.value)
        return rows

    def fetch_product_materials(self, skus: Iterable[str]) -> dict[str, str]:
        return fetch_product_materials(self._config, skus)
