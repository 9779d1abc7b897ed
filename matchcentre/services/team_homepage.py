"""Helpers for building the team homepage block."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..composition.assembler import competition_row, homepage, homepage_match
from ..composition.events import HOMEPAGE_KINDS, flat_timeline
from ..composition.status import classify_match, kickoff_countdown
from ..composition.values import to_datetime
from ..db import Row, RowFetcher
from .matches import MATCH_SELECT, TEAM_CONDITION, fetch_events_for_matches
from .teams import fetch_team_competitions, get_team, only_current_seasons

LOGGER = logging.getLogger(__name__)


def _latest_finished(fetcher: RowFetcher, team_id: int) -> Optional[Row]:
    return fetcher.fetch_one(
        f"""
        {MATCH_SELECT}
        WHERE {TEAM_CONDITION}
          AND m.score_home IS NOT NULL
        ORDER BY m.date DESC, m.id DESC
        LIMIT 1
        """,
        {"team_id": team_id},
    )


def _next_unplayed(fetcher: RowFetcher, team_id: int, now: datetime) -> Optional[Row]:
    # unplayed fixtures from earlier days are stale data, not the next match
    return fetcher.fetch_one(
        f"""
        {MATCH_SELECT}
        WHERE {TEAM_CONDITION}
          AND m.score_home IS NULL
          AND DATE(m.date) >= :today
        ORDER BY m.date ASC, m.id ASC
        LIMIT 1
        """,
        {"team_id": team_id, "today": to_datetime(now).date().isoformat()},
    )


def load_team_homepage(fetcher: RowFetcher, team_id: int, now: datetime) -> Dict[str, Any]:
    """
    Latest finished match with its goal/corner timeline, the next fixture
    with a kickoff countdown, and the team's current-season competitions.
    """
    get_team(fetcher, team_id)

    latest = None
    latest_row = _latest_finished(fetcher, team_id)
    if latest_row is not None:
        event_rows = fetch_events_for_matches(fetcher, [latest_row["id"]], HOMEPAGE_KINDS)
        latest = homepage_match(
            latest_row,
            classify_match(latest_row["date"], latest_row["score_home"], latest_row["score_away"], now),
            events=flat_timeline(event_rows, kinds=HOMEPAGE_KINDS),
        )

    upcoming = None
    next_row = _next_unplayed(fetcher, team_id, now)
    if next_row is not None:
        upcoming = homepage_match(
            next_row,
            classify_match(next_row["date"], next_row["score_home"], next_row["score_away"], now),
            kickoffIn=kickoff_countdown(next_row["date"], now),
        )

    competitions = only_current_seasons(fetch_team_competitions(fetcher, team_id))
    competitions.sort(key=lambda row: (row["name"], row["id"]))
    LOGGER.debug(
        "Homepage for team %s: latest=%s next=%s competitions=%d",
        team_id,
        latest and latest["id"],
        upcoming and upcoming["id"],
        len(competitions),
    )
    return homepage(latest, upcoming, [competition_row(row) for row in competitions])
