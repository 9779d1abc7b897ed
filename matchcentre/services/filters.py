"""Validation of the fixed query parameters the endpoints accept."""
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..composition.values import parse_day
from ..exceptions import QueryValidationError

COMPETITION_TYPES = ("league", "cup", "friendly")


def parse_day_filter(raw: Optional[str], *, name: str = "date") -> Optional[date]:
    if raw is None or not raw.strip():
        return None
    day = parse_day(raw)
    if day is None:
        raise QueryValidationError(f"'{name}' must be a YYYY-MM-DD date")
    return day


def parse_choice(raw: Optional[str], choices: Sequence[str], *, name: str) -> Optional[str]:
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value not in choices:
        raise QueryValidationError(f"'{name}' must be one of: {', '.join(choices)}")
    return value


def require_text(raw: Optional[str], *, name: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise QueryValidationError(f"'{name}' query param is required")
    return value
