"""
Match listings and match detail views.

The page of matches is fetched first; child events are then fetched with an
explicit ``match_id IN (...)`` over exactly the ids on that page, so dense
pages never lose events to a windowed prefetch.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..composition.assembler import Pagination, match_summary
from ..composition.events import (
    CARD_AND_GOAL_KINDS,
    EVENT_KINDS,
    group_events_by_match,
)
from ..composition.status import classify_match
from ..composition.values import to_int
from ..db import Row, RowFetcher
from ..exceptions import NotFoundError

LOGGER = logging.getLogger(__name__)

MATCH_SELECT = """
    SELECT m.id,
           m.date,
           m.venue,
           m.score_home,
           m.score_away,

           comp.id       AS comp_id,
           comp.name     AS comp_name,
           comp.type     AS comp_type,
           comp.season   AS comp_season,

           ht.id         AS home_id,
           ht.name       AS home_name,
           ht.short_name AS home_short_name,
           ht.logo_url   AS home_logo_url,
           ht.country    AS home_country,

           awt.id         AS away_id,
           awt.name       AS away_name,
           awt.short_name AS away_short_name,
           awt.logo_url   AS away_logo_url,
           awt.country    AS away_country
    FROM matches m
    JOIN competitions comp ON comp.id = m.competition_id
    JOIN teams ht ON ht.id = m.home_team_id
    JOIN teams awt ON awt.id = m.away_team_id
"""

EVENTS_FOR_MATCHES = """
    SELECT me.id,
           me.match_id,
           me.event_type,
           me.minute,
           me.player_id,
           p.name  AS player_name,
           me.assisting_player_id,
           ap.name AS assisting_player_name
    FROM match_events me
    JOIN players p ON p.id = me.player_id
    LEFT JOIN players ap ON ap.id = me.assisting_player_id
    WHERE me.match_id IN :match_ids
      AND me.event_type IN :kinds
    ORDER BY me.match_id, me.minute, me.id
"""

TEAM_CONDITION = "(m.home_team_id = :team_id OR m.away_team_id = :team_id)"
COMPETITION_CONDITION = "m.competition_id = :competition_id"
DAY_CONDITION = "DATE(m.date) = :day"


def match_conditions(
    *,
    competition_id: Optional[int] = None,
    team_id: Optional[int] = None,
    day: Optional[date] = None,
) -> tuple[List[str], Dict[str, Any]]:
    conditions: List[str] = []
    params: Dict[str, Any] = {}
    if competition_id is not None:
        conditions.append(COMPETITION_CONDITION)
        params["competition_id"] = competition_id
    if team_id is not None:
        conditions.append(TEAM_CONDITION)
        params["team_id"] = team_id
    if day is not None:
        conditions.append(DAY_CONDITION)
        params["day"] = day.isoformat()
    return conditions, params


def fetch_match_page(
    fetcher: RowFetcher,
    conditions: Sequence[str],
    params: Mapping[str, Any],
    pagination: Pagination,
) -> List[Row]:
    where = " AND ".join(conditions) if conditions else "1 = 1"
    sql = (
        f"{MATCH_SELECT} WHERE {where} "
        "ORDER BY m.date DESC, m.id DESC LIMIT :limit OFFSET :offset"
    )
    return fetcher.fetch_all(
        sql,
        {**params, "limit": pagination.limit, "offset": pagination.offset},
    )


def fetch_events_for_matches(
    fetcher: RowFetcher,
    match_ids: Sequence[int],
    kinds: Sequence[str],
) -> List[Row]:
    if not match_ids:
        return []
    return fetcher.fetch_all(
        EVENTS_FOR_MATCHES,
        {"match_ids": list(match_ids), "kinds": list(kinds)},
        expanding=("match_ids", "kinds"),
    )


def compose_match_page(
    fetcher: RowFetcher,
    rows: Sequence[Row],
    now: datetime,
    *,
    event_kinds: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """Turn match rows into summaries, attaching grouped events when asked."""
    grouped = None
    if event_kinds is not None:
        match_ids = [to_int(row["id"]) for row in rows]
        event_rows = fetch_events_for_matches(fetcher, match_ids, event_kinds)
        grouped = group_events_by_match(event_rows, match_ids, kinds=event_kinds)

    summaries = []
    for row in rows:
        status = classify_match(row.get("date"), row.get("score_home"), row.get("score_away"), now)
        if grouped is None:
            summaries.append(match_summary(row, status))
        else:
            summaries.append(
                match_summary(row, status, events=grouped[to_int(row["id"])], include_events=True)
            )
    return summaries


def list_match_summaries(
    fetcher: RowFetcher,
    now: datetime,
    pagination: Pagination,
    *,
    competition_id: Optional[int] = None,
    team_id: Optional[int] = None,
    day: Optional[date] = None,
    event_kinds: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    conditions, params = match_conditions(competition_id=competition_id, team_id=team_id, day=day)
    rows = fetch_match_page(fetcher, conditions, params, pagination)
    LOGGER.debug("Match page %s/%s returned %d rows", pagination.page, pagination.limit, len(rows))
    return pagination.envelope(compose_match_page(fetcher, rows, now, event_kinds=event_kinds))


def _fetch_match_row(fetcher: RowFetcher, match_id: int) -> Row:
    row = fetcher.fetch_one(f"{MATCH_SELECT} WHERE m.id = :match_id", {"match_id": match_id})
    if row is None:
        raise NotFoundError("Match not found")
    return row


def get_match(fetcher: RowFetcher, match_id: int, now: datetime) -> Dict[str, Any]:
    row = _fetch_match_row(fetcher, match_id)
    status = classify_match(row.get("date"), row.get("score_home"), row.get("score_away"), now)
    return match_summary(row, status)


def get_match_details(fetcher: RowFetcher, match_id: int, now: datetime) -> Dict[str, Any]:
    """Match summary plus its goals, yellow cards and red cards."""
    row = _fetch_match_row(fetcher, match_id)
    return compose_match_page(fetcher, [row], now, event_kinds=CARD_AND_GOAL_KINDS)[0]


def get_match_events(
    fetcher: RowFetcher,
    match_id: int,
    *,
    event_type: Optional[str] = None,
    player_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    _fetch_match_row(fetcher, match_id)

    kinds = [event_type] if event_type else list(EVENT_KINDS)
    sql = """
        SELECT me.id,
               me.event_type,
               me.minute,
               me.player_id,
               p.name  AS player_name,
               me.assisting_player_id,
               ap.name AS assisting_player_name
        FROM match_events me
        JOIN players p ON p.id = me.player_id
        LEFT JOIN players ap ON ap.id = me.assisting_player_id
        WHERE me.match_id = :match_id
          AND me.event_type IN :kinds
    """
    params: Dict[str, Any] = {"match_id": match_id, "kinds": kinds}
    if player_id is not None:
        sql += " AND me.player_id = :player_id"
        params["player_id"] = player_id
    sql += " ORDER BY me.minute, me.id"

    rows = fetcher.fetch_all(sql, params, expanding=("kinds",))
    return [
        {
            "id": to_int(row.get("id")),
            "event_type": row.get("event_type"),
            "minute": to_int(row.get("minute"), 0),
            "player_id": to_int(row.get("player_id")),
            "player_name": row.get("player_name"),
            "assisting_player_id": to_int(row.get("assisting_player_id")),
            "assisting_player_name": row.get("assisting_player_name"),
        }
        for row in rows
    ]
