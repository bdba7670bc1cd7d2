"""
Numeric and date normalization for bureau report values.

Bureau reports mix locale conventions freely: the same report may carry
"1442083.34", "$ 1.234.567,89" and "1,234,567.89". Every function here is
total: malformed input resolves to None (or an empty result), never to an
exception, so callers can fall back to neutral defaults.
"""

import math
import re
import sys
from datetime import date
from functools import lru_cache
from typing import Any, Iterable, List, Optional, Tuple, TypeVar

from .settings import NSE_CODES

T = TypeVar("T")

# Weakest to strongest socioeconomic level
NSE_RANK = {
    "D2": 0,
    "D1": 1,
    "C3": 2,
    "C2": 3,
    "C1": 4,
    "B": 5,
    "A": 6,
}

_PLAIN_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_TRAILING_DECIMAL_COMMA = re.compile(r",\d{1,2}$", re.ASCII)
_TRAILING_DECIMAL_DOT = re.compile(r"\.\d{1,2}$", re.ASCII)
_NSE_PREFIX = re.compile(
    r"^(" + "|".join(sorted(NSE_CODES, key=len, reverse=True)) + r")\b",
    re.ASCII,
)
_DATE_TOKENS = {
    "DD": r"(?P<day>\d{2})",
    "MM": r"(?P<month>\d{2})",
    "YYYY": r"(?P<year>\d{4})",
}


def _parse_plain(text: str) -> Optional[float]:
    if not _PLAIN_NUMBER.match(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def to_number(raw: Any) -> Optional[float]:
    """
    Convert a bureau value to a finite number.

    Separator resolution:
        - Both '.' and ',' present: the one appearing last is the decimal
          separator, the other is thousands grouping.
        - Only ',': decimal when followed by exactly 1-2 trailing digits
          ("1234,5"), otherwise grouping ("1,234,567").
        - Only '.': same rule ("1442083.34" vs "1.234.567").

    Args:
        raw: Any JSON value

    Returns:
        The parsed number, or None if it is not a finite number
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        try:
            float(raw)
        except OverflowError:
            return None
        return raw
    if isinstance(raw, float):
        return raw if math.isfinite(raw) else None
    if not isinstance(raw, str):
        return None

    text = re.sub(r"\s+", "", raw.replace("$", ""))
    if not text:
        return None

    has_dot = "." in text
    has_comma = "," in text

    if has_dot and has_comma:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif has_comma:
        if _TRAILING_DECIMAL_COMMA.search(text):
            text = text.replace(",", ".")
        else:
            text = text.replace(",", "")
    elif has_dot and not _TRAILING_DECIMAL_DOT.search(text):
        text = text.replace(".", "")

    return _parse_plain(text)


def parse_nse_code(raw: Any) -> Optional[str]:
    """
    Extract the socioeconomic level code from a bureau NSE value.

    "c2", "C2 - Clase media" and "B" are recognized; anything whose leading
    token is not a known code resolves to None.
    """
    if raw is None:
        return None
    match = _NSE_PREFIX.match(str(raw).strip().upper())
    return match.group(1) if match else None


def nse_rank(code: Optional[str]) -> Optional[int]:
    """Position of an NSE code on the D2 < ... < A scale."""
    if code is None:
        return None
    return NSE_RANK.get(code)


@lru_cache(maxsize=8)
def _date_pattern(fmt: str) -> "re.Pattern[str]":
    pattern = re.escape(fmt)
    for token, group in _DATE_TOKENS.items():
        pattern = pattern.replace(token, group)
    return re.compile(f"^{pattern}$", re.ASCII)


def parse_strict_date(raw: Any, fmt: str = "DD/MM/YYYY") -> Optional[date]:
    """
    Parse a date with exact digit grouping.

    Dates that would roll over (31/04/2024, 29/02/2023) are rejected rather
    than normalized into the following month.

    Args:
        raw: Value to parse, usually a "27/01/2024" string
        fmt: Layout built from the DD, MM and YYYY tokens

    Returns:
        The calendar date, or None if raw is malformed
    """
    if not isinstance(raw, str):
        return None
    match = _date_pattern(fmt).match(raw.strip())
    if not match:
        return None

    parts = match.groupdict()
    if not all(key in parts for key in ("day", "month", "year")):
        return None
    try:
        return date(int(parts["year"]), int(parts["month"]), int(parts["day"]))
    except ValueError:
        return None


def merge_intervals(intervals: Iterable[Tuple[T, T]]) -> List[Tuple[T, T]]:
    """
    Merge overlapping or touching intervals into a minimal disjoint set.

    Two intervals touch when the next one starts on or before the current
    end. The input is not modified.

    Args:
        intervals: (start, end) pairs, in any order

    Returns:
        Disjoint (start, end) pairs sorted by start
    """
    ordered = sorted((tuple(interval) for interval in intervals), key=lambda i: i[0])
    if not ordered:
        return []

    merged: List[Tuple[T, T]] = []
    current_start, current_end = ordered[0]

    for start, end in ordered[1:]:
        if start <= current_end:
            if end > current_end:
                current_end = end
        else:
            merged.append((current_start, current_end))
            current_start, current_end = start, end

    merged.append((current_start, current_end))
    return merged


def days_between(start: date, end: date) -> int:
    """Elapsed days from start to end."""
    return (end - start).days


def clamp_finite(value: float) -> float:
    """Saturate an overflowed result at the largest finite float, keeping its sign."""
    try:
        value = float(value)
    except OverflowError:
        value = math.inf if value > 0 else -math.inf
    if math.isinf(value):
        return math.copysign(sys.float_info.max, value)
    return value
