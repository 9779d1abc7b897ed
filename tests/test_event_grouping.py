import pytest

from matchcentre.composition.events import (
    CARD_AND_GOAL_KINDS,
    GOAL_AND_RED_KINDS,
    flat_timeline,
    group_events_by_match,
)


def _event(event_id, match_id, kind, minute, player_id=7, assist_id=None):
    return {
        "id": event_id,
        "match_id": match_id,
        "event_type": kind,
        "minute": minute,
        "player_id": player_id,
        "player_name": f"Player {player_id}",
        "assisting_player_id": assist_id,
        "assisting_player_name": f"Player {assist_id}" if assist_id else None,
    }


def test_every_rendered_match_gets_every_partition():
    grouped = group_events_by_match([], [1, 2], kinds=CARD_AND_GOAL_KINDS)

    assert grouped == {
        1: {"goals": [], "yellow_cards": [], "red_cards": []},
        2: {"goals": [], "yellow_cards": [], "red_cards": []},
    }


def test_events_for_other_matches_are_dropped():
    rows = [
        _event(1, 1, "goal", 10),
        _event(2, 99, "goal", 11),
        _event(3, 2, "red_card", 50),
    ]

    grouped = group_events_by_match(rows, [1, 2], kinds=GOAL_AND_RED_KINDS)

    assert set(grouped) == {1, 2}
    assert [event["id"] for event in grouped[1]["goals"]] == [1]
    assert grouped[2]["goals"] == []
    assert [event["id"] for event in grouped[2]["red_cards"]] == [3]


def test_kinds_outside_the_endpoint_set_are_dropped():
    rows = [_event(1, 1, "corner", 3), _event(2, 1, "yellow_card", 40)]

    grouped = group_events_by_match(rows, [1], kinds=GOAL_AND_RED_KINDS)

    assert grouped[1] == {"goals": [], "red_cards": []}


def test_partitions_are_ordered_by_minute_then_id():
    rows = [
        _event(9, 1, "goal", 80),
        _event(5, 1, "goal", 20),
        _event(3, 1, "goal", 20),
    ]

    grouped = group_events_by_match(rows, [1], kinds=("goal",))

    assert [event["id"] for event in grouped[1]["goals"]] == [3, 5, 9]


def test_only_goals_carry_an_assisting_player():
    rows = [_event(1, 1, "goal", 10, 7, 8), _event(2, 1, "yellow_card", 12, 8)]

    grouped = group_events_by_match(rows, [1])

    goal = grouped[1]["goals"][0]
    assert goal["player"] == {"id": 7, "name": "Player 7"}
    assert goal["assisting_player"] == {"id": 8, "name": "Player 8"}
    assert "assisting_player" not in grouped[1]["yellow_cards"][0]


def test_unassisted_goal_has_null_assister():
    grouped = group_events_by_match([_event(1, 1, "goal", 10)], [1], kinds=("goal",))

    assert grouped[1]["goals"][0]["assisting_player"] is None


def test_unknown_kind_is_rejected():
    with pytest.raises(ValueError):
        group_events_by_match([], [1], kinds=("penalty",))


def test_flat_timeline_keeps_goals_and_corners():
    rows = [
        _event(1, 1, "goal", 30, 7, 8),
        _event(2, 1, "corner", 5, 8),
        _event(3, 1, "yellow_card", 10, 7),
    ]

    assert flat_timeline(rows) == [
        {"event_type": "corner", "minute": 5, "player_name": "Player 8", "assist_name": None},
        {"event_type": "goal", "minute": 30, "player_name": "Player 7", "assist_name": "Player 8"},
    ]
