"""Team directory, squads, match pages and competition participation."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..composition.assembler import Pagination, competition_row, player_row, team_row
from ..composition.events import GOAL_AND_RED_KINDS
from ..composition.seasons import current_seasons, sort_season_labels
from ..db import Row, RowFetcher
from ..exceptions import NotFoundError
from .matches import list_match_summaries
from .players import CURRENT_SQUAD_JOIN, PLAYER_COLUMNS

LOGGER = logging.getLogger(__name__)

CURRENT_SEASON = "current"


def list_teams(fetcher: RowFetcher, pagination: Pagination) -> Dict[str, Any]:
    rows = fetcher.fetch_all(
        """
        SELECT id, name, short_name, logo_url, country
        FROM teams
        ORDER BY name, id
        LIMIT :limit OFFSET :offset
        """,
        {"limit": pagination.limit, "offset": pagination.offset},
    )
    return pagination.envelope([team_row(row) for row in rows])


def get_team(fetcher: RowFetcher, team_id: int) -> Dict[str, Any]:
    row = fetcher.fetch_one(
        "SELECT id, name, short_name, logo_url, country FROM teams WHERE id = :team_id",
        {"team_id": team_id},
    )
    if row is None:
        raise NotFoundError("Team not found")
    return team_row(row)


def team_players(fetcher: RowFetcher, team_id: int, pagination: Pagination) -> Dict[str, Any]:
    """
    The team's current squad, by the same rule as ``/players?team_id=``.
    """
    rows = fetcher.fetch_all(
        f"""
        SELECT {PLAYER_COLUMNS}
        FROM players p
        {CURRENT_SQUAD_JOIN}
        ORDER BY p.name, p.id
        LIMIT :limit OFFSET :offset
        """,
        {"team_id": team_id, "limit": pagination.limit, "offset": pagination.offset},
    )
    return pagination.envelope([player_row(row) for row in rows])


def team_matches(
    fetcher: RowFetcher,
    team_id: int,
    now: datetime,
    pagination: Pagination,
    *,
    day: Optional[date] = None,
    with_events: bool = False,
) -> Dict[str, Any]:
    return list_match_summaries(
        fetcher,
        now,
        pagination,
        team_id=team_id,
        day=day,
        event_kinds=GOAL_AND_RED_KINDS if with_events else None,
    )


def fetch_team_competitions(
    fetcher: RowFetcher,
    team_id: int,
    *,
    season: Optional[str] = None,
) -> List[Row]:
    sql = """
        SELECT DISTINCT comp.id, comp.name, comp.type, comp.season
        FROM competitions comp
        JOIN matches m ON m.competition_id = comp.id
        WHERE (m.home_team_id = :team_id OR m.away_team_id = :team_id)
    """
    params: Dict[str, Any] = {"team_id": team_id}
    if season:
        sql += " AND comp.season = :season"
        params["season"] = season
    return fetcher.fetch_all(sql, params)


def only_current_seasons(rows: List[Row]) -> List[Row]:
    current = set(current_seasons(row["season"] for row in rows))
    if not current:
        LOGGER.warning("No parseable season among %d competitions", len(rows))
    return [row for row in rows if row["season"] in current]


def order_by_season(rows: List[Row]) -> List[Row]:
    """Latest season first, then competition name."""
    labels = list(dict.fromkeys(row["season"] for row in rows))
    rank = {label: idx for idx, label in enumerate(sort_season_labels(labels))}
    return sorted(rows, key=lambda row: (rank[row["season"]], row["name"], row["id"]))


def team_competitions(
    fetcher: RowFetcher,
    team_id: int,
    *,
    season: Optional[str] = None,
) -> Dict[str, Any]:
    if season and season.strip().lower() == CURRENT_SEASON:
        rows = only_current_seasons(fetch_team_competitions(fetcher, team_id))
    else:
        rows = fetch_team_competitions(fetcher, team_id, season=season)
    return {"data": [competition_row(row) for row in order_by_season(rows)]}
