"""Global summarizer: headline totals over the whole validated batch."""

from dataclasses import dataclass
from typing import Iterable

from quakecompass.config import COUNTRY_PRESET, EngineConfig
from quakecompass.errors import DegenerateInputError
from quakecompass.records import ValidatedEvent
from quakecompass.stats import magnitude_summary


@dataclass(frozen=True)
class GlobalStats:
    """Totals across every region.

    ``total_valid_events`` always equals the sum of the regions' record
    counts and ``regions_affected`` the number of regions.
    """

    total_valid_events: int
    regions_affected: int
    avg_magnitude: float
    max_magnitude: float
    min_magnitude: float


def summarize(
    validated: Iterable[ValidatedEvent],
    config: EngineConfig = COUNTRY_PRESET,
) -> GlobalStats:
    """Reduce the validated batch to ``GlobalStats``.

    Raises:
        DegenerateInputError: If there are no events, since the mean and
            extrema of an empty set are undefined.
    """
    events = list(validated)
    if not events:
        raise DegenerateInputError("No valid events to summarize")
    mags = magnitude_summary(
        [e.magnitude for e in events], round_extrema=config.round_extrema
    )
    return GlobalStats(
        total_valid_events=len(events),
        regions_affected=len({e.region.strip() for e in events}),
        avg_magnitude=mags["mean"],
        max_magnitude=mags["max"],
        min_magnitude=mags["min"],
    )
