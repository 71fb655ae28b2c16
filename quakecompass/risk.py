"""Risk tiers and marker encoding for aggregated regions.

Two risk models are supported:

- ``frequency``: tier from the number of events recorded in the region.
- ``magnitude``: tier from the largest magnitude recorded in the region.

Tier tables are inclusive lower bounds evaluated top-down; the first
matching row wins. Colors come from a fixed tier -> hex mapping held in
the engine configuration, and marker size is a clamped linear scale of
the event count.

Usage::

    from quakecompass.risk import frequency_tier, marker_size, MarkerBounds

    frequency_tier(16)                       # RiskTier.HIGH
    marker_size(3, MarkerBounds(18, 40), 4)  # 18.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quakecompass.aggregator import RegionStats
    from quakecompass.config import EngineConfig


class RiskModel(str, Enum):
    """Which regional signal drives the risk tier."""

    FREQUENCY = "frequency"
    MAGNITUDE = "magnitude"


class RiskTier(str, Enum):
    """Discrete risk label attached to a region."""

    # frequency model
    VERY_HIGH = "Very High"
    HIGH = "High"
    MODERATE = "Moderate"
    MEDIUM = "Medium"
    LOW = "Low"
    # magnitude model
    SEVERE = "Severe"
    ELEVATED = "Elevated"
    NORMAL = "Normal"

    @classmethod
    def parse(cls, name: str | RiskTier) -> RiskTier:
        """Look up a tier by value or member name, ignoring case, spaces and underscores.

        ``"VeryHigh"``, ``"very_high"`` and ``"Very High"`` all resolve to
        ``RiskTier.VERY_HIGH``.

        Raises:
            ValueError: If no tier matches.
        """
        if isinstance(name, cls):
            return name
        key = str(name).replace(" ", "").replace("_", "").lower()
        for tier in cls:
            if key == tier.name.replace("_", "").lower():
                return tier
        raise ValueError(f"Unknown risk tier: {name!r}")


# (inclusive lower bound, tier), highest first
FREQUENCY_TIERS = (
    (20, RiskTier.VERY_HIGH),
    (15, RiskTier.HIGH),
    (10, RiskTier.MODERATE),
    (7, RiskTier.MEDIUM),
    (0, RiskTier.LOW),
)

MAGNITUDE_TIERS = (
    (6.3, RiskTier.SEVERE),
    (6.1, RiskTier.ELEVATED),
    (-math.inf, RiskTier.NORMAL),
)

MODEL_TIERS = {
    RiskModel.FREQUENCY: tuple(tier for _, tier in FREQUENCY_TIERS),
    RiskModel.MAGNITUDE: tuple(tier for _, tier in MAGNITUDE_TIERS),
}

DEFAULT_TIER_COLORS = {
    RiskTier.VERY_HIGH: "#991b1b",
    RiskTier.HIGH: "#ef4444",
    RiskTier.MODERATE: "#f97316",
    RiskTier.MEDIUM: "#f59e0b",
    RiskTier.LOW: "#10b981",
    RiskTier.SEVERE: "#ef4444",
    RiskTier.ELEVATED: "#f59e0b",
    RiskTier.NORMAL: "#10b981",
}


@dataclass(frozen=True)
class MarkerBounds:
    """Legible size range for region markers, in pixels."""

    min: float = 18
    max: float = 40


@dataclass(frozen=True)
class MarkerEncoding:
    """Visual encoding of one region: tier, fill color and marker diameter."""

    tier: RiskTier
    color: str
    marker_size: float


def frequency_tier(count: int) -> RiskTier:
    """Map an event count to a frequency-model tier.

    Raises:
        ValueError: If *count* is negative.
    """
    if count < 0:
        raise ValueError(f"Event count must be non-negative, got {count}")
    for lower, tier in FREQUENCY_TIERS:
        if count >= lower:
            return tier
    return RiskTier.LOW


def magnitude_tier(magnitude: float) -> RiskTier:
    """Map a region's maximum magnitude to a magnitude-model tier."""
    for lower, tier in MAGNITUDE_TIERS:
        if magnitude >= lower:
            return tier
    return RiskTier.NORMAL


def marker_size(count: int, bounds: MarkerBounds, scale_factor: float) -> float:
    """Clamp ``count * scale_factor`` into ``[bounds.min, bounds.max]``."""
    return float(max(bounds.min, min(bounds.max, count * scale_factor)))


def tier_for(stats: RegionStats, model: RiskModel) -> RiskTier:
    if model is RiskModel.FREQUENCY:
        return frequency_tier(stats.record_count)
    return magnitude_tier(stats.max_magnitude)


def classify(stats: RegionStats, config: EngineConfig) -> MarkerEncoding:
    """Derive the risk tier, color and marker size for one region.

    Pure function of ``stats.record_count`` (and ``stats.max_magnitude``
    under the magnitude model) plus the configuration.
    """
    tier = tier_for(stats, config.risk_model)
    return MarkerEncoding(
        tier=tier,
        color=config.tier_colors[tier],
        marker_size=marker_size(
            stats.record_count, config.marker_size_bounds, config.scale_factor
        ),
    )
