from __future__ import annotations

import json
import time
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from .config import SupabaseConfig

RETRYABLE_STATUSES = (429, 500, 502, 503, 504)


class SupabaseHttpError(RuntimeError):
    def __init__(self, status: int, message: str, body: str | None = None):
        super().__init__(f"Supabase HTTP {status}: {message}")
        self.status = status
        self.body = body


def supabase_get(
    config: SupabaseConfig,
    table: str,
    *,
    params: dict[str, Any] | None = None,
    timeout_seconds: int = 30,
    max_retries: int = 3,
) -> list[dict[str, Any]]:
    """
    GET rows from a PostgREST table using the service role key.

    Retries 429/5xx and connection errors with exponential backoff.
    """
    retries = 0
    backoff = 0.5
    url = _build_url(config.rest_url, table, params)

    while True:
        req = Request(url, method="GET")
        req.add_header("Accept", "application/json")
        req.add_header("apikey", config.service_role_key)
        req.add_header("Authorization", f"Bearer {config.service_role_key}")

        try:
            with urlopen(req, timeout=timeout_seconds) as resp:
                raw = resp.read().decode("utf-8")
                payload = json.loads(raw) if raw else []
        except HTTPError as exc:
            body = exc.read().decode("utf-8") if exc.fp else None
            status = exc.code

            if status in RETRYABLE_STATUSES and retries < max_retries:
                time.sleep(backoff)
                retries += 1
                backoff *= 2
                continue

            raise SupabaseHttpError(status, exc.reason, body) from exc
        except URLError as exc:
            if retries < max_retries:
                time.sleep(backoff)
                retries += 1
                backoff *= 2
                continue
            raise SupabaseHttpError(0, str(exc)) from exc

        if not isinstance(payload, list):
            raise SupabaseHttpError(200, f"Expected a JSON array from {table}", raw)
        return payload


def _build_url(rest_url: str, table: str, params: dict[str, Any] | None) -> str:
    url = f"{rest_url}/{table.strip('/')}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url
