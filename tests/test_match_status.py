from datetime import datetime, timedelta, timezone

import pytest

from matchcentre.composition.status import MatchStatus, classify_match, kickoff_countdown

NOW = datetime(2025, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "kickoff, home, away, expected",
    [
        (NOW + timedelta(minutes=1), None, None, MatchStatus.UPCOMING),
        (NOW + timedelta(days=3), 1, 0, MatchStatus.UPCOMING),
        (NOW - timedelta(hours=1), None, None, MatchStatus.LIVE),
        (NOW - timedelta(hours=1), 2, 1, MatchStatus.FT),
        (NOW - timedelta(days=1), None, None, MatchStatus.FT),
        (NOW, None, None, MatchStatus.LIVE),
    ],
)
def test_classify_match(kickoff, home, away, expected):
    assert classify_match(kickoff, home, away, NOW) is expected


def test_classify_match_reads_text_timestamps():
    assert classify_match("2025-10-18 09:30:00", None, None, NOW) is MatchStatus.LIVE
    assert classify_match("2025-10-18T19:00:00Z", None, None, NOW) is MatchStatus.UPCOMING


def test_kickoff_countdown_formats_days_and_hours():
    assert kickoff_countdown(NOW + timedelta(days=2, hours=5, minutes=59), NOW) == "2d 5h"
    assert kickoff_countdown("2025-10-18 19:00:00", NOW) == "0d 7h"


def test_kickoff_countdown_clamps_past_kickoff():
    assert kickoff_countdown(NOW - timedelta(hours=3), NOW) == "0d 0h"


def test_kickoff_countdown_without_date():
    assert kickoff_countdown(None, NOW) is None
