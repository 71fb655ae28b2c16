"""Renderer-facing region markers.

A ``RegionMarker`` bundles a region's statistics (with its risk tier
filled in) with the visual encoding and the popup content the map
renderer needs. Markers are circles labelled with the event count.
"""

from dataclasses import dataclass, replace

from quakecompass.aggregator import RegionStats
from quakecompass.formatting import fmt_mag, fmt_num
from quakecompass.risk import MarkerEncoding

MIN_LABEL_FONT_SIZE = 9


@dataclass(frozen=True)
class RegionMarker:
    """Stats, encoding and popup fields for one region."""

    stats: RegionStats
    encoding: MarkerEncoding

    @property
    def region(self) -> str:
        return self.stats.region

    @property
    def latitude(self) -> float:
        return self.stats.centroid_lat

    @property
    def longitude(self) -> float:
        return self.stats.centroid_lon

    @property
    def label(self) -> str:
        """Text drawn inside the marker: the event count."""
        return str(self.stats.record_count)

    @property
    def label_font_size(self) -> float:
        return max(MIN_LABEL_FONT_SIZE, self.encoding.marker_size / 3)

    @property
    def popup(self) -> tuple[tuple[str, str], ...]:
        """Popup rows as ``(label, value)`` pairs, titled by ``region``."""
        return (
            ("Avg Mag", fmt_mag(self.stats.avg_magnitude)),
            ("Max Mag", fmt_mag(self.stats.max_magnitude)),
            ("Freq", fmt_num(self.stats.record_count)),
        )


def build_marker(stats: RegionStats, encoding: MarkerEncoding) -> RegionMarker:
    """Attach *encoding* to *stats*, recording the tier on the stats."""
    return RegionMarker(stats=replace(stats, risk_tier=encoding.tier), encoding=encoding)
