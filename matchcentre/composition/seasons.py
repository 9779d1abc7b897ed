"""
Season label parsing and "current season" resolution.

Competition seasons are stored as free text ("2025/26", "2024-2025", "2025",
"25-26"). This module turns a label into a comparable year range and picks
the latest label(s) out of a set. Parsing never raises: an unreadable label
resolves to an empty range, is left out of "current" comparisons and sorts
last.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

LOGGER = logging.getLogger(__name__)

_FIRST_YEAR = re.compile(r"(?<!\d)(\d{4})(?!\d)")
_END_FRAGMENT = re.compile(r"^\s*[/\-–\\]\s*(\d{4}|\d{2})(?!\d)")
_SHORT_PAIR = re.compile(r"^\s*(\d{2})\s*[/\-–\\]\s*(\d{2})\s*$")


@dataclass(frozen=True)
class SeasonYearRange:
    start_year: Optional[int] = None
    end_year: Optional[int] = None

    @property
    def sort_key(self) -> Optional[int]:
        """End year when known, otherwise the start year."""
        if self.end_year is not None:
            return self.end_year
        return self.start_year

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {"startYear": self.start_year, "endYear": self.end_year}


@dataclass(frozen=True)
class SeasonParseResult:
    label: str
    years: SeasonYearRange
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _continue_century(start: int, fragment: str) -> int:
    if len(fragment) == 4:
        return int(fragment)
    end = start // 100 * 100 + int(fragment)
    if end <= start:
        end += 100
    return end


def parse_season_label(label: Optional[str]) -> SeasonParseResult:
    """
    Parse a season label into a start/end year pair.

    The first standalone four-digit year is the start. A second fragment
    directly after a separator sets the end: four digits as-is, two digits
    as a same-century continuation of the start ("1999/00" ends in 2000).
    """
    text = (label or "").strip()
    if not text:
        return SeasonParseResult(text, SeasonYearRange(), error="empty label")

    first = _FIRST_YEAR.search(text)
    if first is None:
        short = _SHORT_PAIR.match(text)
        if short is None:
            return SeasonParseResult(text, SeasonYearRange(), error="no year found")
        start = 2000 + int(short.group(1))
        end = _continue_century(start, short.group(2))
        return SeasonParseResult(text, SeasonYearRange(start, end))

    start = int(first.group(1))
    end: Optional[int] = None
    tail = _END_FRAGMENT.match(text[first.end():])
    if tail:
        end = _continue_century(start, tail.group(1))
        if end < start:
            LOGGER.debug("Ignoring end year %s before start in season %r", end, text)
            end = None
    return SeasonParseResult(text, SeasonYearRange(start, end))


def resolve_seasons(labels: Iterable[str]) -> Dict[str, SeasonYearRange]:
    return {label: parse_season_label(label).years for label in labels}


def current_seasons(labels: Iterable[str]) -> List[str]:
    """
    Return every label sharing the latest comparison key, in input order.
    """
    parsed: List[SeasonParseResult] = []
    seen: set[str] = set()
    for label in labels:
        if label in seen:
            continue
        seen.add(label)
        result = parse_season_label(label)
        if not result.ok:
            LOGGER.warning("Unparseable season label %r: %s", label, result.error)
            continue
        parsed.append(result)

    if not parsed:
        return []
    latest = max(result.years.sort_key for result in parsed)
    return [result.label for result in parsed if result.years.sort_key == latest]


def sort_season_labels(labels: Sequence[str], *, descending: bool = True) -> List[str]:
    """
    Order labels by comparison key; unparseable labels always go last.
    """
    keyed = [(parse_season_label(label).years.sort_key, idx, label) for idx, label in enumerate(labels)]
    known = [item for item in keyed if item[0] is not None]
    unknown = [item for item in keyed if item[0] is None]
    known.sort(key=lambda item: (-item[0] if descending else item[0], item[1]))
    return [label for _key, _idx, label in known] + [label for _key, _idx, label in unknown]
