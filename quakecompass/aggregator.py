"""Region aggregator: validated events -> per-region statistics.

Events are grouped on the exact (trimmed, case-sensitive) region key.
For each group the aggregator reports the event count, the unweighted
coordinate centroid (an approximation, not a geodesic centre), the mean
magnitude rounded to one decimal, the magnitude extrema and the span of
event dates.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from quakecompass.config import COUNTRY_PRESET, DateRange, EngineConfig
from quakecompass.records import ValidatedEvent, format_date
from quakecompass.risk import RiskTier
from quakecompass.stats import magnitude_summary, mean

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionStats:
    """Aggregated statistics for one region.

    ``risk_tier`` is None straight out of ``aggregate`` and is filled in
    by the pipeline once the region has been classified.
    """

    region: str
    record_count: int
    centroid_lat: float
    centroid_lon: float
    avg_magnitude: float
    max_magnitude: float
    min_magnitude: float
    date_range: DateRange
    risk_tier: RiskTier | None = None


def group_by_region(validated: Iterable[ValidatedEvent]) -> dict[str, list[ValidatedEvent]]:
    """Bucket events by trimmed region key, preserving event order within a bucket."""
    groups = defaultdict(list)
    for event in validated:
        groups[event.region.strip()].append(event)
    return dict(groups)


def aggregate(
    validated: Iterable[ValidatedEvent],
    config: EngineConfig = COUNTRY_PRESET,
) -> dict[str, RegionStats]:
    """Compute ``RegionStats`` for every region present in *validated*.

    An empty input gives an empty mapping.
    """
    stats = {}
    for region, events in group_by_region(validated).items():
        stats[region] = region_stats(region, events, config)
    logger.debug(f"Aggregated {sum(s.record_count for s in stats.values())} events into {len(stats)} regions")
    return stats


def region_stats(
    region: str,
    events: list[ValidatedEvent],
    config: EngineConfig = COUNTRY_PRESET,
) -> RegionStats:
    """Statistics for a single non-empty group of events."""
    mags = magnitude_summary(
        [e.magnitude for e in events], round_extrema=config.round_extrema
    )
    return RegionStats(
        region=region,
        record_count=len(events),
        centroid_lat=mean([e.latitude for e in events]),
        centroid_lon=mean([e.longitude for e in events]),
        avg_magnitude=mags["mean"],
        max_magnitude=mags["max"],
        min_magnitude=mags["min"],
        date_range=date_range(events, config.default_date_range),
    )


def date_range(events: list[ValidatedEvent], default: DateRange) -> DateRange:
    """Earliest and latest event dates, or *default* if none are usable.

    A timestamp of 0 counts as missing, like an empty cell.
    """
    moments = [e.occurred_at for e in events if e.timestamp]
    moments = [m for m in moments if m is not None]
    if not moments:
        return default
    return DateRange(start=format_date(min(moments)), end=format_date(max(moments)))
