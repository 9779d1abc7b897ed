"""
Response shapes for the catalog endpoints.

Everything here is shape mapping over already-derived values: renaming
columns to API field names and nesting sub-objects. Pagination parameters are
parsed leniently: a value that is not an integer between 1 and its ceiling
(``MAX_PAGE``, ``MAX_LIMIT``) falls back to the endpoint default.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .status import MatchStatus
from .values import isoformat, to_date, to_int

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
TEAM_LIST_LIMIT = 20
MAX_LIMIT = 100
MAX_PAGE = 10_000


@dataclass(frozen=True)
class Pagination:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def envelope(self, data: List[Any]) -> Dict[str, Any]:
        return {"page": self.page, "limit": self.limit, "data": data}


def _bounded(value: Any, default: int, ceiling: int) -> int:
    parsed = to_int(value)
    if parsed is None or not 1 <= parsed <= ceiling:
        return default
    return parsed


def parse_pagination(
    page: Any = None,
    limit: Any = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
) -> Pagination:
    return Pagination(
        page=_bounded(page, DEFAULT_PAGE, MAX_PAGE),
        limit=_bounded(limit, default_limit, MAX_LIMIT),
    )


def competition_ref(row: Mapping[str, Any], prefix: str = "comp_") -> Dict[str, Any]:
    return {
        "id": to_int(row.get(f"{prefix}id")),
        "name": row.get(f"{prefix}name"),
        "type": row.get(f"{prefix}type"),
        "season": row.get(f"{prefix}season"),
    }


def team_ref(row: Mapping[str, Any], prefix: str) -> Dict[str, Any]:
    return {
        "id": to_int(row.get(f"{prefix}id")),
        "name": row.get(f"{prefix}name"),
        "short_name": row.get(f"{prefix}short_name"),
        "logo_url": row.get(f"{prefix}logo_url"),
        "country": row.get(f"{prefix}country"),
    }


def match_summary(
    row: Mapping[str, Any],
    status: MatchStatus,
    *,
    events: Optional[Any] = None,
    include_events: bool = False,
) -> Dict[str, Any]:
    summary: Dict[str, Any] = {
        "id": to_int(row.get("id")),
        "date": isoformat(row.get("date")),
        "venue": row.get("venue"),
        "status": status.value,
        "score": {
            "home": to_int(row.get("score_home")),
            "away": to_int(row.get("score_away")),
        },
        "competition": competition_ref(row),
        "home_team": team_ref(row, "home_"),
        "away_team": team_ref(row, "away_"),
    }
    if include_events:
        summary["events"] = events
    return summary


def homepage_match(
    row: Mapping[str, Any],
    status: MatchStatus,
    **extra: Any,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": to_int(row.get("id")),
        "date": isoformat(row.get("date")),
        "venue": row.get("venue"),
        "status": status.value,
        "score": {
            "home": to_int(row.get("score_home")),
            "away": to_int(row.get("score_away")),
        },
        "home_team": {"id": to_int(row.get("home_id")), "name": row.get("home_name")},
        "away_team": {"id": to_int(row.get("away_id")), "name": row.get("away_name")},
    }
    payload.update(extra)
    return payload


def homepage(
    latest: Optional[Dict[str, Any]],
    upcoming: Optional[Dict[str, Any]],
    competitions: List[Dict[str, Any]],
) -> Dict[str, Any]:
    return {"latest": latest, "next": upcoming, "competitions": competitions}


def competition_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": to_int(row.get("id")),
        "name": row.get("name"),
        "type": row.get("type"),
        "season": row.get("season"),
    }


def team_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": to_int(row.get("id")),
        "name": row.get("name"),
        "short_name": row.get("short_name"),
        "logo_url": row.get("logo_url"),
        "country": row.get("country"),
    }


def player_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": to_int(row.get("id")),
        "name": row.get("name"),
        "date_of_birth": isoformat(to_date(row.get("date_of_birth"))),
        "nationality": row.get("nationality"),
        "photo_url": row.get("photo_url"),
        "position": row.get("position"),
    }


def tenure_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "teamId": to_int(row.get("team_id")),
        "teamName": row.get("team_name"),
        "startDate": isoformat(to_date(row.get("start_date"))),
        "endDate": isoformat(to_date(row.get("end_date"))),
    }


def player_profile(
    player: Mapping[str, Any],
    stats: Mapping[str, Any],
    history: Iterable[Mapping[str, Any]],
    last_matches: Iterable[Mapping[str, Any]],
) -> Dict[str, Any]:
    profile = player_row(player)
    profile["stats"] = {
        "goalsScored": to_int(stats.get("goals_scored"), 0),
        "yellowCards": to_int(stats.get("yellow_cards"), 0),
        "redCards": to_int(stats.get("red_cards"), 0),
    }
    profile["history"] = [tenure_row(row) for row in history]
    profile["last_matches"] = list(last_matches)
    return profile
