"""Tests for quakecompass.risk — tiers, colors and marker sizes."""

import pytest

from quakecompass.aggregator import RegionStats
from quakecompass.config import COUNTRY_PRESET, DISTRICT_PRESET, DateRange
from quakecompass.risk import (
    FREQUENCY_TIERS,
    MarkerBounds,
    RiskTier,
    classify,
    frequency_tier,
    magnitude_tier,
    marker_size,
)


def stats(count=1, max_mag=6.0):
    return RegionStats(
        region="X",
        record_count=count,
        centroid_lat=0.0,
        centroid_lon=0.0,
        avg_magnitude=max_mag,
        max_magnitude=max_mag,
        min_magnitude=max_mag,
        date_range=DateRange("N/A", "N/A"),
    )


class TestFrequencyTier:
    """Inclusive lower bounds 20/15/10/7, LOW below."""

    @pytest.mark.parametrize("count,tier", [
        (0, RiskTier.LOW),
        (6, RiskTier.LOW),
        (7, RiskTier.MEDIUM),
        (9, RiskTier.MEDIUM),
        (10, RiskTier.MODERATE),
        (14, RiskTier.MODERATE),
        (15, RiskTier.HIGH),
        (19, RiskTier.HIGH),
        (20, RiskTier.VERY_HIGH),
        (10_000, RiskTier.VERY_HIGH),
    ])
    def test_boundaries(self, count, tier):
        assert frequency_tier(count) is tier

    def test_partition_of_non_negative_integers(self):
        """Every count maps to exactly one band of the table."""
        for count in range(0, 200):
            matching = [t for lower, t in FREQUENCY_TIERS if count >= lower]
            assert frequency_tier(count) is matching[0]

    def test_tiers_never_decrease(self):
        order = [t for _, t in reversed(FREQUENCY_TIERS)]
        ranks = [order.index(frequency_tier(c)) for c in range(0, 50)]
        assert ranks == sorted(ranks)

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            frequency_tier(-1)


class TestMagnitudeTier:
    """Original dashboard thresholds: 6.3 red, 6.1 amber."""

    @pytest.mark.parametrize("mag,tier", [
        (5.0, RiskTier.NORMAL),
        (6.09, RiskTier.NORMAL),
        (6.1, RiskTier.ELEVATED),
        (6.29, RiskTier.ELEVATED),
        (6.3, RiskTier.SEVERE),
        (9.1, RiskTier.SEVERE),
        (-1.0, RiskTier.NORMAL),
    ])
    def test_boundaries(self, mag, tier):
        assert magnitude_tier(mag) is tier


class TestMarkerSize:
    """Clamped linear scale."""

    def test_clamped_to_minimum(self):
        assert marker_size(1, MarkerBounds(18, 40), 4) == 18

    def test_linear_between_bounds(self):
        assert marker_size(7, MarkerBounds(18, 40), 4) == 28

    def test_clamped_to_maximum(self):
        assert marker_size(1_000_000, MarkerBounds(18, 40), 4) == 40

    def test_monotonic_and_bounded(self):
        bounds = MarkerBounds(12, 36)
        sizes = [marker_size(c, bounds, 2.5) for c in range(0, 100)]
        assert sizes == sorted(sizes)
        assert all(12 <= s <= 36 for s in sizes)


class TestClassify:
    """Full encoding per preset."""

    def test_country_preset_uses_max_magnitude(self):
        enc = classify(stats(count=3, max_mag=6.4), COUNTRY_PRESET)
        assert enc.tier is RiskTier.SEVERE
        assert enc.color == "#ef4444"
        assert enc.marker_size == 18

    def test_country_preset_green_below_6_1(self):
        enc = classify(stats(count=5, max_mag=6.0), COUNTRY_PRESET)
        assert enc.tier is RiskTier.NORMAL
        assert enc.color == "#10b981"
        assert enc.marker_size == 20

    def test_district_preset_uses_frequency(self):
        enc = classify(stats(count=16, max_mag=4.2), DISTRICT_PRESET)
        assert enc.tier is RiskTier.HIGH
        assert enc.color == DISTRICT_PRESET.tier_colors[RiskTier.HIGH]
        assert enc.marker_size == 32

    def test_idempotent(self):
        s = stats(count=12, max_mag=6.2)
        assert classify(s, DISTRICT_PRESET) == classify(s, DISTRICT_PRESET)

    def test_every_tier_has_one_color(self):
        for config in (COUNTRY_PRESET, DISTRICT_PRESET):
            for count in range(0, 30):
                enc = classify(stats(count=count), config)
                assert enc.color == config.tier_colors[enc.tier]


class TestRiskTierParse:
    @pytest.mark.parametrize("name", ["VeryHigh", "very_high", "Very High", "VERY_HIGH"])
    def test_spellings(self, name):
        assert RiskTier.parse(name) is RiskTier.VERY_HIGH

    def test_unknown(self):
        with pytest.raises(ValueError):
            RiskTier.parse("Apocalyptic")
