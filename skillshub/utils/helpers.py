"""
Small value helpers used by routes and services.
"""

from datetime import datetime, date, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def safe_trim(value: Any) -> Optional[str]:
    """Trim strings; empty or non-string values become None."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse an ISO date or datetime string.

    Returns None for empty or unparseable input instead of raising.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return " ".join(p for p in (first_name, last_name) if p).strip()


def contains_pattern(text: str) -> str:
    """ILIKE pattern matching `text` literally anywhere; use with escape="\\"."""
    escaped = text.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
