from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class SupabaseConfig:
    url: str
    service_role_key: str
    page_size: int = 1000

    @property
    def rest_url(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1"


def get_supabase_config() -> SupabaseConfig:
    """
    Load Supabase connector configuration from environment variables.

    Reads SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY; SUPABASE_PAGE_SIZE is optional.
    """
    page_size = os.getenv("SUPABASE_PAGE_SIZE", "").strip()
    return SupabaseConfig(
        url=_require_env("SUPABASE_URL"),
        service_role_key=_require_env("SUPABASE_SERVICE_ROLE_KEY"),
        page_size=_positive_int("SUPABASE_PAGE_SIZE", page_size) if page_size else 1000,
    )


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _positive_int(name: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed < 1:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed
