"""Numeric helpers shared by the aggregator and the global summarizer.

Magnitude averages are reported to one decimal using round-half-away-from
zero on the decimal representation of the mean, so a mean of 6.25 shows
as 6.3 and -2.25 as -2.3 (the built-in ``round`` gives 6.2 and -2.2).

Usage::

    from quakecompass.stats import round_half_away, magnitude_summary

    round_half_away(6.25)                       # 6.3
    magnitude_summary([6.0, 6.4], 1, False)     # {'mean': 6.2, 'max': 6.4, 'min': 6.0}
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Sequence

import numpy as np


def round_half_away(value: float, decimals: int = 1) -> float:
    """Round *value* to *decimals* places, ties away from zero.

    Examples:
        >>> round_half_away(0.05)
        0.1
        >>> round_half_away(-0.05)
        -0.1
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # enough digits for the integer part plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return float(exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP))


def mean(values: Sequence[float]) -> float:
    """Unweighted arithmetic mean as a plain float.

    Raises:
        ValueError: If *values* is empty.
    """
    if len(values) == 0:
        raise ValueError("mean of an empty sequence is undefined")
    return _finite_mean(np.asarray(values, dtype=float))


def magnitude_summary(
    magnitudes: Sequence[float],
    decimals: int = 1,
    round_extrema: bool = False,
) -> dict:
    """Rounded mean plus extrema of a non-empty set of magnitudes.

    Args:
        magnitudes: Finite magnitudes, at least one.
        decimals: Decimal places for the mean (and extrema if rounded).
        round_extrema: If True, max and min are rounded like the mean.

    Returns:
        Dict with keys ``mean``, ``max``, ``min``.
    """
    mags = np.asarray(magnitudes, dtype=float)
    if mags.size == 0:
        raise ValueError("magnitude summary of an empty sequence is undefined")
    hi = float(mags.max())
    lo = float(mags.min())
    if round_extrema:
        hi = round_half_away(hi, decimals)
        lo = round_half_away(lo, decimals)
    return {
        "mean": round_half_away(_finite_mean(mags), decimals),
        "max": hi,
        "min": lo,
    }


def _finite_mean(values: np.ndarray) -> float:
    # the plain sum overflows for magnitudes near the float limit
    with np.errstate(over="ignore"):
        result = float(np.mean(values))
    if not math.isfinite(result):
        result = float(np.sum(values / values.size))
    return result
