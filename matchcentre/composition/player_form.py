"""
Recent-form summaries for a single player.

A player's last N matches are taken from their scoring/assisting history.
Team, opponent and result are resolved from the tenure that covered each
match date, so a transferred player's old matches are attributed to the old
club. Missing tenure coverage leaves those fields null instead of dropping
the match.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .values import isoformat, to_date, to_datetime, to_int

LOGGER = logging.getLogger(__name__)

RECENT_MATCH_COUNT = 5

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class Tenure:
    team_id: int
    start_date: date
    end_date: Optional[date] = None
    team_name: Optional[str] = None

    def contains(self, day: date) -> bool:
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Optional["Tenure"]:
        team_id = to_int(row.get("team_id"))
        start = to_date(row.get("start_date"))
        if team_id is None or start is None:
            return None
        return cls(
            team_id=team_id,
            start_date=start,
            end_date=to_date(row.get("end_date")),
            team_name=row.get("team_name"),
        )


@dataclass
class PlayerFormEntry:
    match_id: int
    date: Optional[datetime]
    competition_id: Optional[int]
    home_team_id: Optional[int]
    away_team_id: Optional[int]
    home_score: Optional[int]
    away_score: Optional[int]
    venue: Optional[str]
    events: List[Dict[str, Any]] = field(default_factory=list)
    team_id: Optional[int] = None
    team_name: Optional[str] = None
    opponent_id: Optional[int] = None
    opponent_name: Optional[str] = None
    result: Optional[str] = None
    outcome: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.match_id,
            "date": isoformat(self.date),
            "events": self.events,
            "competitionId": self.competition_id,
            "homeTeamId": self.home_team_id,
            "awayTeamId": self.away_team_id,
            "homeTeamScore": self.home_score,
            "awayTeamScore": self.away_score,
            "matchVenue": self.venue,
            "teamId": self.team_id,
            "teamName": self.team_name,
            "opponentId": self.opponent_id,
            "opponentName": self.opponent_name,
            "result": self.result,
            "outcome": self.outcome,
        }


def tenure_at(tenures: Sequence[Tenure], day: Optional[date]) -> Optional[Tenure]:
    """Return the tenure covering ``day``; the latest start wins on overlap."""
    if day is None:
        return None
    covering = [tenure for tenure in tenures if tenure.contains(day)]
    if not covering:
        return None
    if len(covering) > 1:
        LOGGER.warning(
            "Overlapping tenures cover %s (teams %s); using the latest start",
            day,
            [tenure.team_id for tenure in covering],
        )
    return max(covering, key=lambda tenure: tenure.start_date)


def _outcome(goals_for: int, goals_against: int) -> str:
    if goals_for > goals_against:
        return "W"
    if goals_for < goals_against:
        return "L"
    return "D"


def _attribute(entry: PlayerFormEntry, tenure: Optional[Tenure], team_names: Mapping[int, str]) -> None:
    if tenure is None:
        LOGGER.warning("No tenure covers match %s; team fields left empty", entry.match_id)
        return
    if tenure.team_id == entry.home_team_id:
        is_home = True
    elif tenure.team_id == entry.away_team_id:
        is_home = False
    else:
        LOGGER.warning(
            "Tenure team %s played neither side of match %s", tenure.team_id, entry.match_id
        )
        return

    entry.team_id = tenure.team_id
    entry.team_name = tenure.team_name or team_names.get(tenure.team_id)
    entry.opponent_id = entry.away_team_id if is_home else entry.home_team_id
    if entry.opponent_id is not None:
        entry.opponent_name = team_names.get(entry.opponent_id)

    if entry.home_score is None or entry.away_score is None:
        return
    goals_for = entry.home_score if is_home else entry.away_score
    goals_against = entry.away_score if is_home else entry.home_score
    entry.result = f"{goals_for}-{goals_against}"
    entry.outcome = _outcome(goals_for, goals_against)


def recent_form(
    event_rows: Iterable[Mapping[str, Any]],
    tenure_rows: Iterable[Mapping[str, Any]],
    team_names: Mapping[int, str],
    *,
    limit: int = RECENT_MATCH_COUNT,
) -> List[PlayerFormEntry]:
    """
    Build the player's ``limit`` most recent distinct matches, newest first.

    ``event_rows`` are the player's events as scorer or assister, each joined
    to its match (``match_date``, ``competition_id``, ``home_team_id``,
    ``away_team_id``, ``score_home``, ``score_away``, ``venue``).
    """
    rows = list(event_rows)
    # stable: keeps the driver's order for events sharing a kickoff
    rows.sort(
        key=lambda row: (to_datetime(row.get("match_date")) or _EPOCH, to_int(row.get("match_id"), 0)),
        reverse=True,
    )

    entries: Dict[int, PlayerFormEntry] = {}
    order: List[int] = []
    for row in rows:
        match_id = to_int(row.get("match_id"))
        if match_id is None or match_id in entries:
            continue
        if len(order) >= limit:
            break
        entries[match_id] = PlayerFormEntry(
            match_id=match_id,
            date=to_datetime(row.get("match_date")),
            competition_id=to_int(row.get("competition_id")),
            home_team_id=to_int(row.get("home_team_id")),
            away_team_id=to_int(row.get("away_team_id")),
            home_score=to_int(row.get("score_home")),
            away_score=to_int(row.get("score_away")),
            venue=row.get("venue"),
        )
        order.append(match_id)

    own_events: Dict[int, List[Mapping[str, Any]]] = {match_id: [] for match_id in order}
    for row in rows:
        match_id = to_int(row.get("match_id"))
        if match_id in own_events:
            own_events[match_id].append(row)

    tenures = [tenure for tenure in (Tenure.from_row(row) for row in tenure_rows) if tenure]

    result: List[PlayerFormEntry] = []
    for match_id in order:
        entry = entries[match_id]
        events = sorted(
            own_events[match_id],
            key=lambda row: (to_int(row.get("minute"), 0), to_int(row.get("event_id"), 0)),
        )
        entry.events = [
            {
                "type": row.get("event_type"),
                "minute": to_int(row.get("minute"), 0),
                "player_id": to_int(row.get("player_id")),
                "assisting_player_id": to_int(row.get("assisting_player_id")),
            }
            for row in events
        ]
        match_day = entry.date.date() if entry.date else None
        _attribute(entry, tenure_at(tenures, match_day), team_names)
        result.append(entry)
    return result
