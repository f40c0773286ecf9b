"""Date manipulation utilities for DD/MM/YYYY anchors and month-keys"""

import re
from datetime import date
from typing import List, Tuple

from household_ledger.domain.exceptions import InvalidDateFormatError

# ASCII digits only; fullmatch so a trailing newline is rejected
_ANCHOR_DATE_RE = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")
_MONTH_KEY_RE = re.compile(r"([0-9]{4})-([0-9]{1,2})")


def parse_anchor_date(value: str, transaction_id: str | None = None) -> date:
    """
    Parse a DD/MM/YYYY string into a date.

    Raises:
        InvalidDateFormatError: Wrong separators, non-numeric parts, or a day/month
            that does not exist in the calendar (e.g. 31/02/2024)
    """
    match = _ANCHOR_DATE_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidDateFormatError(value, transaction_id)

    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateFormatError(value, transaction_id) from e


def month_key(year: int, month: int) -> str:
    """Canonical month-key: "{year}-{month}", month 1..12 unpadded"""
    return f"{year}-{month}"


def parse_month_key(key: str) -> Tuple[int, int]:
    """Inverse of month_key; raises ValueError on malformed keys"""
    match = _MONTH_KEY_RE.fullmatch(key) if isinstance(key, str) else None
    if match is None:
        raise ValueError(f"Invalid month-key {key!r}: expected YEAR-MONTH")
    year, month = (int(part) for part in match.groups())
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month-key {key!r}: month out of range")
    return year, month


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move a (year, month) pair by delta months, crossing year boundaries"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trailing_months(year: int, month: int, count: int) -> List[Tuple[int, int]]:
    """The target month and the count-1 months before it, oldest first"""
    return [shift_month(year, month, -offset) for offset in range(count - 1, -1, -1)]
