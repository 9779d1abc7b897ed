"""
Match lifecycle classification and kickoff countdowns.

Both are pure functions of the match row and ``now``; nothing here is stored.
The LIVE rule cannot tell an in-progress match from one whose score was never
entered, because the data model has no explicit lifecycle column.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from .values import to_datetime

DAY_SECONDS = 86_400
HOUR_SECONDS = 3_600


class MatchStatus(str, Enum):
    UPCOMING = "UPCOMING"
    LIVE = "LIVE"
    FT = "FT"


def classify_match(
    kickoff: Any,
    score_home: Optional[int],
    score_away: Optional[int],
    now: datetime,
) -> MatchStatus:
    """
    Derive the status of a match at ``now``.

    Rules, in order: kickoff later than now is UPCOMING; kickoff on today's
    calendar day with no score is LIVE; everything else is FT.
    """
    moment = to_datetime(now)
    when = to_datetime(kickoff)
    if when is None or moment is None:
        return MatchStatus.FT
    if when > moment:
        return MatchStatus.UPCOMING
    if when.date() == moment.date() and score_home is None and score_away is None:
        return MatchStatus.LIVE
    return MatchStatus.FT


def kickoff_countdown(kickoff: Any, now: datetime) -> Optional[str]:
    """
    Format the time until kickoff as ``"<days>d <hours>h"``.

    A kickoff that has already passed is clamped to ``"0d 0h"``.
    """
    when = to_datetime(kickoff)
    moment = to_datetime(now)
    if when is None or moment is None:
        return None
    remaining = max(0, int((when - moment).total_seconds()))
    days, rest = divmod(remaining, DAY_SECONDS)
    hours = rest // HOUR_SECONDS
    return f"{days}d {hours}h"
