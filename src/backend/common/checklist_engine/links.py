from __future__ import annotations

from datetime import date
from typing import Optional
from urllib.parse import urlencode

from .config import ChecklistKindConfig

DASHBOARD_PATH = "/area/calidad/dashboard-quality"
HISTORIAL_PATH = "/area/calidad/historial"


def build_dashboard_url(kind_cfg: Optional[ChecklistKindConfig], day: date, base_url: str) -> str:
    iso = day.isoformat()
    params = {"startDate": iso, "endDate": iso}
    if kind_cfg is not None and kind_cfg.dashboard_name:
        params = {"checklist": kind_cfg.dashboard_name, **params}
    return f"{base_url.rstrip('/')}{DASHBOARD_PATH}?{urlencode(params)}"


def build_historial_url(kind_cfg: Optional[ChecklistKindConfig], day: date, base_url: str) -> str:
    iso = day.isoformat()
    params = {"fromDate": iso, "toDate": iso}
    if kind_cfg is not None and kind_cfg.historial_name:
        params = {"selected": kind_cfg.historial_name, **params}
    return f"{base_url.rstrip('/')}{HISTORIAL_PATH}?{urlencode(params)}"
