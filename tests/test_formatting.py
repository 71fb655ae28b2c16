"""Tests for quakecompass.formatting — display helpers.

Missing values (None, NaN, inf) always render as an em-dash.
"""

import math

import pytest

from quakecompass.formatting import fmt, fmt_coord, fmt_date_range, fmt_mag, fmt_num


class TestFmt:
    def test_default_one_decimal(self):
        assert fmt(11.0) == "11.0"

    def test_decimals(self):
        assert fmt(-0.567, 2) == "-0.57"

    @pytest.mark.parametrize("value", [None, float("nan"), math.inf, -math.inf])
    def test_missing_returns_dash(self, value):
        assert fmt(value) == "—"


class TestFmtMag:
    @pytest.mark.parametrize("value,expected", [
        (6.4, "6.4"),
        (6, "6.0"),
        (6.0, "6.0"),
        (6.23, "6.23"),
        (5.9, "5.9"),
        (None, "—"),
        (float("nan"), "—"),
    ])
    def test_values(self, value, expected):
        assert fmt_mag(value) == expected


class TestFmtNum:
    def test_integer_commas(self):
        assert fmt_num(1234567) == "1,234,567"

    def test_float_one_decimal(self):
        assert fmt_num(1234.5) == "1,234.5"

    def test_none(self):
        assert fmt_num(None) == "—"


class TestFmtCoord:
    def test_hemispheres(self):
        assert fmt_coord(64.9631, -19.0208) == "64.96°N, 19.02°W"
        assert fmt_coord(-5.2046, 151.2659) == "5.20°S, 151.27°E"

    def test_missing(self):
        assert fmt_coord(None, 10.0) == "—"


class TestFmtDateRange:
    def test_range(self):
        assert fmt_date_range("2020-01-07", "2020-01-19") == "2020-01-07 to 2020-01-19"

    def test_single_day(self):
        assert fmt_date_range("2020-01-07", "2020-01-07") == "2020-01-07"

    def test_missing(self):
        assert fmt_date_range(None, None) == "—"
