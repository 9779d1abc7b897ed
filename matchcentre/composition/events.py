"""Grouping of match-event rows under the matches being rendered."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .values import to_int

LOGGER = logging.getLogger(__name__)

EVENT_KINDS: Tuple[str, ...] = ("goal", "yellow_card", "red_card", "corner")

PARTITIONS: Dict[str, str] = {
    "goal": "goals",
    "yellow_card": "yellow_cards",
    "red_card": "red_cards",
    "corner": "corners",
}

CARD_AND_GOAL_KINDS: Tuple[str, ...] = ("goal", "yellow_card", "red_card")
GOAL_AND_RED_KINDS: Tuple[str, ...] = ("goal", "red_card")
HOMEPAGE_KINDS: Tuple[str, ...] = ("goal", "corner")

GroupedEvents = Dict[str, List[Dict[str, Any]]]


def _player_ref(player_id: Any, name: Any) -> Optional[Dict[str, Any]]:
    if player_id is None:
        return None
    return {"id": to_int(player_id), "name": name}


def serialize_event(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Render one event row; only goals carry an assisting player."""
    event: Dict[str, Any] = {
        "id": to_int(row.get("id")),
        "minute": to_int(row.get("minute"), 0),
        "player": _player_ref(row.get("player_id"), row.get("player_name")),
    }
    if row.get("event_type") == "goal":
        event["assisting_player"] = _player_ref(
            row.get("assisting_player_id"), row.get("assisting_player_name")
        )
    return event


def _chronological(rows: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    return sorted(
        rows,
        key=lambda row: (to_int(row.get("minute"), 0), to_int(row.get("id"), 0)),
    )


def empty_partitions(kinds: Sequence[str]) -> GroupedEvents:
    return {PARTITIONS[kind]: [] for kind in kinds}


def group_events_by_match(
    rows: Iterable[Mapping[str, Any]],
    match_ids: Iterable[Any],
    *,
    kinds: Sequence[str] = CARD_AND_GOAL_KINDS,
) -> Dict[int, GroupedEvents]:
    """
    Partition event rows by owning match and event kind.

    Every id in ``match_ids`` is present in the result with every partition
    for ``kinds`` (possibly empty). Rows for other matches or other kinds
    are dropped. Each partition is ordered by minute, ties by event id.
    """
    unknown = [kind for kind in kinds if kind not in PARTITIONS]
    if unknown:
        raise ValueError(f"Unknown event kinds: {unknown}")

    grouped: Dict[int, GroupedEvents] = {}
    for match_id in match_ids:
        key = to_int(match_id)
        if key is not None:
            grouped[key] = empty_partitions(kinds)

    dropped = 0
    for row in _chronological(rows):
        match_id = to_int(row.get("match_id"))
        kind = row.get("event_type")
        bucket = grouped.get(match_id)
        if bucket is None or kind not in kinds:
            dropped += 1
            continue
        bucket[PARTITIONS[kind]].append(serialize_event(row))

    if dropped:
        LOGGER.debug("Dropped %d event rows outside the rendered matches/kinds", dropped)
    return grouped


def flat_timeline(
    rows: Iterable[Mapping[str, Any]],
    *,
    kinds: Sequence[str] = HOMEPAGE_KINDS,
) -> List[Dict[str, Any]]:
    """Minute-ordered flat list used by the team homepage."""
    return [
        {
            "event_type": row.get("event_type"),
            "minute": to_int(row.get("minute"), 0),
            "player_name": row.get("player_name"),
            "assist_name": row.get("assisting_player_name"),
        }
        for row in _chronological(rows)
        if row.get("event_type") in kinds
    ]
