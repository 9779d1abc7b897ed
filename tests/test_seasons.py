import pytest

from matchcentre.composition.seasons import (
    SeasonYearRange,
    current_seasons,
    parse_season_label,
    resolve_seasons,
    sort_season_labels,
)


@pytest.mark.parametrize(
    "label, start, end",
    [
        ("2025/26", 2025, 2026),
        ("2025-2026", 2025, 2026),
        ("2025", 2025, None),
        ("1999/00", 1999, 2000),
        ("25-26", 2025, 2026),
        ("Season 2023/24", 2023, 2024),
        ("2025/2024", 2025, None),
    ],
)
def test_parse_season_label(label, start, end):
    result = parse_season_label(label)

    assert result.ok
    assert result.years == SeasonYearRange(start, end)


@pytest.mark.parametrize("label", ["", None, "Summer Tour", "20/20/20"])
def test_unparseable_labels_resolve_to_empty_range(label):
    result = parse_season_label(label)

    assert not result.ok
    assert result.years.to_dict() == {"startYear": None, "endYear": None}


def test_single_year_and_split_season_share_start():
    years = resolve_seasons(["2025/26", "2025"])

    assert years["2025/26"].start_year == years["2025"].start_year == 2025
    assert years["2025/26"].end_year == 2026


def test_current_seasons_picks_latest():
    assert current_seasons(["2023/24", "2024/25", "2025/26"]) == ["2025/26"]


def test_current_seasons_returns_all_ties_in_input_order():
    assert current_seasons(["2026", "2024/25", "2025/26", "2025/26"]) == ["2026", "2025/26"]


def test_current_seasons_skips_unparseable(caplog):
    with caplog.at_level("WARNING"):
        assert current_seasons(["Summer Tour", "2024/25"]) == ["2024/25"]
    assert "Summer Tour" in caplog.text
    assert current_seasons(["Summer Tour"]) == []


def test_sort_season_labels_puts_malformed_last():
    labels = ["2023/24", "Summer Tour", "2025/26", "2024/25"]

    assert sort_season_labels(labels) == ["2025/26", "2024/25", "2023/24", "Summer Tour"]
    assert sort_season_labels(labels, descending=False) == [
        "2023/24",
        "2024/25",
        "2025/26",
        "Summer Tour",
    ]
