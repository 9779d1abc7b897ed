import pytest

from matchcentre.composition.assembler import (
    TEAM_LIST_LIMIT,
    match_summary,
    parse_pagination,
    player_profile,
)
from matchcentre.composition.status import MatchStatus


def test_pagination_offset():
    pagination = parse_pagination("2", "10")

    assert pagination.offset == 10
    assert pagination.envelope([]) == {"page": 2, "limit": 10, "data": []}


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (None, None, (1, 10)),
        ("abc", "xyz", (1, 10)),
        ("0", "-5", (1, 10)),
        ("3", "100", (3, 100)),
        ("3", "101", (3, 10)),
        ("10000", "5", (10000, 5)),
        ("10001", "5", (1, 5)),
        ("99999999999999999999", "99999999999999999999", (1, 10)),
    ],
)
def test_pagination_fallbacks(page, limit, expected):
    pagination = parse_pagination(page, limit)

    assert (pagination.page, pagination.limit) == expected


def test_team_listing_default_limit():
    assert parse_pagination(None, None, default_limit=TEAM_LIST_LIMIT).limit == 20


def test_oversized_limit_falls_back_to_team_default():
    assert parse_pagination(None, "500", default_limit=TEAM_LIST_LIMIT).limit == TEAM_LIST_LIMIT


def test_match_summary_shape():
    row = {
        "id": 4,
        "date": "2025-10-01 19:45:00",
        "venue": "Emirates Stadium",
        "score_home": 3,
        "score_away": 1,
        "comp_id": 12,
        "comp_name": "EFL Cup",
        "comp_type": "cup",
        "comp_season": "2025/26",
        "home_id": 1,
        "home_name": "Arsenal",
        "home_short_name": "ARS",
        "home_logo_url": None,
        "home_country": "England",
        "away_id": 4,
        "away_name": "Liverpool",
        "away_short_name": "LIV",
        "away_logo_url": None,
        "away_country": "England",
    }

    summary = match_summary(row, MatchStatus.FT)

    assert summary["date"] == "2025-10-01T19:45:00+00:00"
    assert summary["status"] == "FT"
    assert summary["score"] == {"home": 3, "away": 1}
    assert summary["competition"] == {"id": 12, "name": "EFL Cup", "type": "cup", "season": "2025/26"}
    assert summary["home_team"]["short_name"] == "ARS"
    assert summary["away_team"]["id"] == 4
    assert "events" not in summary


def test_player_profile_defaults_missing_stats_to_zero():
    player = {"id": 1, "name": "A", "date_of_birth": "2001-09-05", "nationality": None, "photo_url": None, "position": None}

    profile = player_profile(player, {"goals_scored": None}, [], [])

    assert profile["date_of_birth"] == "2001-09-05"
    assert profile["stats"] == {"goalsScored": 0, "yellowCards": 0, "redCards": 0}
    assert profile["history"] == []
    assert profile["last_matches"] == []
