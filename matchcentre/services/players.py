"""
Player directory, name search and the player profile view.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..composition.assembler import Pagination, player_profile, player_row
from ..composition.player_form import RECENT_MATCH_COUNT, recent_form
from ..composition.values import to_int
from ..db import RowFetcher
from ..exceptions import NotFoundError

LOGGER = logging.getLogger(__name__)

SEARCH_LIMIT = 50

PLAYER_COLUMNS = "p.id, p.name, p.date_of_birth, p.nationality, p.photo_url, p.position"

# current squad: the player's latest tenure is with :team_id and has not ended
CURRENT_SQUAD_JOIN = """
    JOIN player_team_history h
      ON h.player_id = p.id
     AND h.team_id = :team_id
     AND h.end_date IS NULL
     AND NOT EXISTS (
         SELECT 1
         FROM player_team_history later
         WHERE later.player_id = p.id
           AND later.start_date > h.start_date
     )
"""


def list_players(
    fetcher: RowFetcher,
    pagination: Pagination,
    *,
    team_id: Optional[int] = None,
    position: Optional[str] = None,
) -> Dict[str, Any]:
    """Players ordered by name, optionally limited to a team's current squad."""
    joins = ""
    conditions: List[str] = []
    params: Dict[str, Any] = {"limit": pagination.limit, "offset": pagination.offset}
    if team_id is not None:
        joins = CURRENT_SQUAD_JOIN
        params["team_id"] = team_id
    if position:
        conditions.append("p.position = :position")
        params["position"] = position
    where = f"WHERE {' AND '.join(conditions)}" if conditions else ""

    rows = fetcher.fetch_all(
        f"""
        SELECT {PLAYER_COLUMNS}
        FROM players p
        {joins}
        {where}
        ORDER BY p.name, p.id
        LIMIT :limit OFFSET :offset
        """,
        params,
    )
    return pagination.envelope([player_row(row) for row in rows])


def search_players(fetcher: RowFetcher, name: str) -> List[Dict[str, Any]]:
    rows = fetcher.fetch_all(
        f"""
        SELECT {PLAYER_COLUMNS}
        FROM players p
        WHERE LOWER(p.name) LIKE :pattern
        ORDER BY p.name, p.id
        LIMIT :limit
        """,
        {"pattern": f"%{name.lower()}%", "limit": SEARCH_LIMIT},
    )
    return [player_row(row) for row in rows]


def get_player_profile(fetcher: RowFetcher, player_id: int) -> Dict[str, Any]:
    """
    Identity, career counts, tenure history and recent form for one player.
    """
    params = {"player_id": player_id}
    player = fetcher.fetch_one(
        f"SELECT {PLAYER_COLUMNS} FROM players p WHERE p.id = :player_id",
        params,
    )
    if player is None:
        raise NotFoundError("Player not found")

    stats = fetcher.fetch_one(
        """
        SELECT
          SUM(CASE WHEN e.event_type = 'goal' THEN 1 ELSE 0 END)        AS goals_scored,
          SUM(CASE WHEN e.event_type = 'yellow_card' THEN 1 ELSE 0 END) AS yellow_cards,
          SUM(CASE WHEN e.event_type = 'red_card' THEN 1 ELSE 0 END)    AS red_cards
        FROM match_events e
        WHERE e.player_id = :player_id
        """,
        params,
    ) or {}

    history = fetcher.fetch_all(
        """
        SELECT h.team_id, t.name AS team_name, h.start_date, h.end_date
        FROM player_team_history h
        JOIN teams t ON t.id = h.team_id
        WHERE h.player_id = :player_id
        ORDER BY h.start_date DESC
        """,
        params,
    )

    event_rows = fetcher.fetch_all(
        """
        SELECT e.id AS event_id,
               e.event_type,
               e.minute,
               e.match_id,
               e.player_id,
               e.assisting_player_id,
               m.date           AS match_date,
               m.competition_id,
               m.home_team_id,
               m.away_team_id,
               m.score_home,
               m.score_away,
               m.venue
        FROM match_events e
        JOIN matches m ON m.id = e.match_id
        WHERE e.player_id = :player_id OR e.assisting_player_id = :player_id
        ORDER BY m.date DESC, e.minute, e.id
        """,
        params,
    )

    team_ids = set()
    for row in event_rows:
        team_ids.add(to_int(row.get("home_team_id")))
        team_ids.add(to_int(row.get("away_team_id")))
    team_ids.discard(None)
    team_names: Dict[int, str] = {}
    if team_ids:
        name_rows = fetcher.fetch_all(
            "SELECT id, name FROM teams WHERE id IN :team_ids",
            {"team_ids": sorted(team_ids)},
            expanding=("team_ids",),
        )
        team_names = {to_int(row["id"]): row["name"] for row in name_rows}

    form = recent_form(event_rows, history, team_names, limit=RECENT_MATCH_COUNT)
    LOGGER.debug("Player %s: %d events, %d recent matches", player_id, len(event_rows), len(form))
    return player_profile(player, stats, history, [entry.to_dict() for entry in form])
