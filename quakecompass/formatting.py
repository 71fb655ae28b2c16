"""Display formatting for popups, sidebar entries and reports.

Uses em-dash ('—') as the sentinel for missing or invalid values
(None, NaN, inf), so a renderer never shows ``nan`` to a reader.

Usage::

    from quakecompass.formatting import fmt, fmt_mag, fmt_num, fmt_date_range

    fmt(1.23456, 2)      # '1.23'
    fmt_mag(6.0)         # '6.0'
    fmt_mag(6.23)        # '6.23'
    fmt_num(12345)       # '12,345'
"""

import math
from typing import Optional, Union

# Sentinel for missing/invalid values
_DASH = "—"

Numeric = Optional[Union[int, float]]


def _is_missing(x: Numeric) -> bool:
    """Check if a value is None, NaN, or infinite."""
    if x is None:
        return True
    if isinstance(x, float) and (math.isnan(x) or math.isinf(x)):
        return True
    return False


def fmt(x: Numeric, decimals: int = 1) -> str:
    """Format a number with fixed decimal places.

    Examples:
        >>> fmt(11.0)
        '11.0'
        >>> fmt(None)
        '—'
    """
    if _is_missing(x):
        return _DASH
    return f"{x:.{decimals}f}"


def fmt_mag(x: Numeric) -> str:
    """Format a magnitude with one decimal, or two when the second is significant.

    Examples:
        >>> fmt_mag(6.4)
        '6.4'
        >>> fmt_mag(6)
        '6.0'
        >>> fmt_mag(6.23)
        '6.23'
    """
    if _is_missing(x):
        return _DASH
    text = f"{x:.2f}"
    return text[:-1] if text.endswith("0") else text


def fmt_num(x: Numeric) -> str:
    """Format a count with comma separators.

    Examples:
        >>> fmt_num(1234567)
        '1,234,567'
    """
    if _is_missing(x):
        return _DASH
    if isinstance(x, float):
        return f"{x:,.1f}"
    return f"{x:,}"


def fmt_coord(lat: Numeric, lon: Numeric, decimals: int = 2) -> str:
    """Format a coordinate pair with hemisphere letters.

    Examples:
        >>> fmt_coord(64.9631, -19.0208)
        '64.96°N, 19.02°W'
    """
    if _is_missing(lat) or _is_missing(lon):
        return _DASH
    ns = "N" if lat >= 0 else "S"
    ew = "E" if lon >= 0 else "W"
    return f"{abs(lat):.{decimals}f}°{ns}, {abs(lon):.{decimals}f}°{ew}"


def fmt_date_range(start: Optional[str], end: Optional[str]) -> str:
    """Join two dates, collapsing a single-day range.

    Examples:
        >>> fmt_date_range("2020-01-07", "2020-01-19")
        '2020-01-07 to 2020-01-19'
        >>> fmt_date_range("2020-01-07", "2020-01-07")
        '2020-01-07'
    """
    if not start and not end:
        return _DASH
    if start == end or not end:
        return start
    if not start:
        return end
    return f"{start} to {end}"
