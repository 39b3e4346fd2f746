from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional, Tuple

MONTH_ABBREVIATIONS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")
_MONTH_INDEX = {name: idx + 1 for idx, name in enumerate(MONTH_ABBREVIATIONS)}


class DateFormat(str, Enum):
    MMM_DD_YYYY = "MMM-DD-YYYY"
    ISO = "YYYY-MM-DD"


def parse_mmm_dd_yyyy(value: str) -> Optional[date]:
    """Parse "JAN-05-2025" without relying on the process locale."""
    parts = value.strip().split("-")
    if len(parts) != 3:
        return None
    month = _MONTH_INDEX.get(parts[0].strip().upper())
    if month is None:
        return None
    try:
        return date(int(parts[2]), month, int(parts[1]))
    except (ValueError, OverflowError):
        return None


def parse_iso_date(value: str) -> Optional[date]:
    # Timestamps ("2025-01-05T14:00:00Z") are cut to their calendar day.
    text = value.strip()
    for sep in ("T", " "):
        if sep in text:
            text = text.split(sep, 1)[0]
    parts = text.split("-")
    if len(parts) != 3:
        return None
    try:
        return date(int(parts[0]), int(parts[1]), int(parts[2]))
    except (ValueError, OverflowError):
        return None


def parse_record_date(value: Any, fmt: DateFormat = DateFormat.MMM_DD_YYYY) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    if fmt == DateFormat.ISO:
        return parse_iso_date(value)
    return parse_mmm_dd_yyyy(value)


def format_mmm_dd_yyyy(value: date) -> str:
    return f"{MONTH_ABBREVIATIONS[value.month - 1]}-{value.day:02d}-{value.year}"


def default_report_date(today: Optional[date] = None) -> date:
    """Daily summaries cover the previous day unless a date is given."""
    return (today or date.today()) - timedelta(days=1)


def previous_month(today: Optional[date] = None) -> Tuple[int, int]:
    today = today or date.today()
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1
