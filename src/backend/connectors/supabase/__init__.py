"""Supabase (PostgREST) connector: network + auth for checklist and product tables."""

from .client import SupabaseHttpError, supabase_get
from .config import SupabaseConfig, get_supabase_config
from .tables import fetch_product_materials, fetch_table_rows

__all__ = [
    "SupabaseConfig",
    "SupabaseHttpError",
    "fetch_product_materials",
    "fetch_table_rows",
    "get_supabase_config",
    "supabase_get",
]
