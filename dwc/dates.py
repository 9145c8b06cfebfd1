"""Observation dates to ISO 8601 intervals.

Source dates are written day-first with the month usually as a roman
numeral, and leading parts may be missing::

    "3.V.2009"  -> 2009-05-03
    "V.2009"    -> 2009-05
    "2009"      -> 2009

The ``from`` and ``to`` values of a record are combined into
``start/end``; when only one of them can be read it is used for both ends.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from qc.report import INVERTED_DATE_RANGE, UNPARSEABLE_DATE, QualityReport

ROMAN_MONTHS = {
    "I": 1,
    "II": 2,
    "III": 3,
    "IV": 4,
    "V": 5,
    "VI": 6,
    "VII": 7,
    "VIII": 8,
    "IX": 9,
    "X": 10,
    "XI": 11,
    "XII": 12,
}

_SEPARATOR_RE = re.compile(r"[\s,/.]+")
YEAR_RE = re.compile(r"^\d{4}$")


@dataclass(frozen=True)
class PartialDate:
    """A date known to year, month or day precision."""

    year: int
    month: Optional[int] = None
    day: Optional[int] = None

    def isoformat(self) -> str:
        parts = [f"{self.year:04d}"]
        if self.month is not None:
            parts.append(f"{self.month:02d}")
            if self.day is not None:
                parts.append(f"{self.day:02d}")
        return "-".join(parts)

    def is_after(self, other: "PartialDate") -> bool:
        """Compare at the precision both dates share, so 2009 is never after 2009-05."""
        pairs = ((self.year, other.year), (self.month, other.month), (self.day, other.day))
        for mine, theirs in pairs:
            if mine is None or theirs is None:
                return False
            if mine != theirs:
                return mine > theirs
        return False


def tokenize(raw: str) -> List[str]:
    return [token for token in _SEPARATOR_RE.split(raw.strip()) if token]


def _month(token: str) -> int:
    if token.isdigit():
        value = int(token)
    else:
        value = ROMAN_MONTHS.get(token.upper(), 0)
    if not 1 <= value <= 12:
        raise ValueError(f"invalid month {token!r}")
    return value


def _parse(raw: str) -> PartialDate:
    tokens = tokenize(raw)
    if not tokens or len(tokens) > 3:
        raise ValueError(f"expected 1 to 3 date parts, got {len(tokens)}")

    # Read right to left: year, month, day
    tokens.reverse()
    if not YEAR_RE.match(tokens[0]):
        raise ValueError(f"invalid year {tokens[0]!r}")
    year = int(tokens[0])
    month = _month(tokens[1]) if len(tokens) > 1 else None
    day = None
    if len(tokens) > 2:
        if not tokens[2].isdigit():
            raise ValueError(f"invalid day {tokens[2]!r}")
        day = int(tokens[2])
        date(year, month, day)  # raises ValueError for impossible days
    return PartialDate(year, month, day)


def parse_date(
    raw: Optional[str],
    report: QualityReport | None = None,
    field: str = "eventDate",
    scientific_name: Optional[str] = None,
) -> Optional[PartialDate]:
    """Parse one raw date, returning ``None`` when it is empty or unreadable.

    Unreadable values are reported rather than raised.
    """

    if raw is None or not raw.strip():
        return None
    try:
        return _parse(raw)
    except ValueError as exc:
        if report is not None:
            report.warn(UNPARSEABLE_DATE, field, raw, scientific_name, str(exc))
        return None


def normalize_date(raw: Optional[str], report: QualityReport | None = None) -> str:
    parsed = parse_date(raw, report)
    return parsed.isoformat() if parsed else ""


def normalize_range(
    from_raw: Optional[str],
    to_raw: Optional[str],
    report: QualityReport | None = None,
    scientific_name: Optional[str] = None,
) -> str:
    """Return ``start/end`` for a pair of raw dates, or ``""``.

    >>> normalize_range("3.V.2009", "2009")
    '2009-05-03/2009'
    >>> normalize_range("V.2009", "")
    '2009-05/2009-05'
    """

    start = parse_date(from_raw, report, "from", scientific_name)
    end = parse_date(to_raw, report, "to", scientific_name)
    if start is None and end is None:
        return ""
    if start is None:
        start = end
    elif end is None:
        end = start
    elif report is not None and start.is_after(end):
        report.warn(
            INVERTED_DATE_RANGE,
            "eventDate",
            f"{from_raw} / {to_raw}",
            scientific_name,
            "start is after end",
        )
    return f"{start.isoformat()}/{end.isoformat()}"
