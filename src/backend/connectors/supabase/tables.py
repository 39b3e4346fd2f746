from __future__ import annotations

from typing import Any, Iterable

from .client import supabase_get
from .config import SupabaseConfig

PRODUCTS_TABLE = "productos"


def fetch_table_rows(config: SupabaseConfig, table: str, *, select: str = "*") -> list[dict[str, Any]]:
    """Fetch every row of a table, one page at a time."""
    rows: list[dict[str, Any]] = []
    offset = 0
    while True:
        page = supabase_get(
            config,
            table,
            params={"select": select, "limit": config.page_size, "offset": offset},
        )
        rows.extend(page)
        if len(page) < config.page_size:
            return rows
        offset += len(page)


def fetch_product_materials(config: SupabaseConfig, skus: Iterable[str]) -> dict[str, str]:
    """Map each known SKU to its material description; unknown SKUs are absent."""
    wanted = sorted({s.strip() for s in skus if s and s.strip()})
    if not wanted:
        return {}

    rows = supabase_get(
        config,
        PRODUCTS_TABLE,
        params={"select": "sku,material", "sku": f"in.({','.join(_quote(s) for s in wanted)})"},
    )
    materials: dict[str, str] = {}
    for row in rows:
        sku = row.get("sku")
        material = row.get("material")
        if sku and material:
            materials[str(sku)] = str(material)
    return materials


def _quote(value: str) -> str:
    # PostgREST list values are double-quoted so commas and parens inside a SKU survive.
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
