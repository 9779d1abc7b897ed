"""Scalar coercion shared by the composition helpers.

Drivers disagree on what a timestamp column looks like (``datetime`` from
Postgres, ISO text from SQLite), so everything that reads dates goes through
these helpers.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def to_datetime(value: Any) -> Optional[datetime]:
    """Return an aware UTC datetime; naive values are read as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        raw = str(value).strip()
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_datetime(value).date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def isoformat(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime) or not isinstance(value, date):
        parsed = to_datetime(value)
        return parsed.isoformat() if parsed else str(value)
    return value.isoformat()


def parse_day(value: Optional[str]) -> Optional[date]:
    """Strict ``YYYY-MM-DD`` parser for query parameters."""
    if value is None:
        return None
    raw = value.strip()
    if len(raw) != 10:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None
