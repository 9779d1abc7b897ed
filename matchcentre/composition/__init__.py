"""Read-model composition: turning flat catalog rows into nested responses."""

from .assembler import Pagination, parse_pagination
from .events import EVENT_KINDS, flat_timeline, group_events_by_match
from .player_form import PlayerFormEntry, Tenure, recent_form, tenure_at
from .seasons import (
    SeasonParseResult,
    SeasonYearRange,
    current_seasons,
    parse_season_label,
    resolve_seasons,
    sort_season_labels,
)
from .status import MatchStatus, classify_match, kickoff_countdown

__all__ = [
    "Pagination",
    "parse_pagination",
    "EVENT_KINDS",
    "flat_timeline",
    "group_events_by_match",
    "PlayerFormEntry",
    "Tenure",
    "recent_form",
    "tenure_at",
    "SeasonParseResult",
    "SeasonYearRange",
    "current_seasons",
    "parse_season_label",
    "resolve_seasons",
    "sort_season_labels",
    "MatchStatus",
    "classify_match",
    "kickoff_countdown",
]
