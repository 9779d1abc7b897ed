"""Competition listings and per-competition match pages."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..composition.assembler import Pagination, competition_row
from ..composition.events import CARD_AND_GOAL_KINDS
from ..db import RowFetcher
from ..exceptions import NotFoundError
from .matches import list_match_summaries


def list_competitions(
    fetcher: RowFetcher,
    pagination: Pagination,
    *,
    competition_type: Optional[str] = None,
    season: Optional[str] = None,
) -> Dict[str, Any]:
    conditions: List[str] = []
    params: Dict[str, Any] = {"limit": pagination.limit, "offset": pagination.offset}
    if competition_type:
        conditions.append("type = :competition_type")
        params["competition_type"] = competition_type
    if season:
        conditions.append("season = :season")
        params["season"] = season
    where = f"WHERE {' AND '.join(conditions)}" if conditions else ""

    rows = fetcher.fetch_all(
        f"""
        SELECT id, name, type, season
        FROM competitions
        {where}
        ORDER BY name, id
        LIMIT :limit OFFSET :offset
        """,
        params,
    )
    return pagination.envelope([competition_row(row) for row in rows])


def get_competition(fetcher: RowFetcher, competition_id: int) -> Dict[str, Any]:
    row = fetcher.fetch_one(
        "SELECT id, name, type, season FROM competitions WHERE id = :competition_id",
        {"competition_id": competition_id},
    )
    if row is None:
        raise NotFoundError("Competition not found")
    return competition_row(row)


def competition_matches(
    fetcher: RowFetcher,
    competition_id: int,
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
        competition_id=competition_id,
        day=day,
        event_kinds=CARD_AND_GOAL_KINDS if with_events else None,
    )
