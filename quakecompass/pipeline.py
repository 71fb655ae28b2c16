"""End-to-end engine: raw rows -> ``DashboardData`` for the map renderer.

    raw rows -> validate -> aggregate -> classify (per region)
                         -> summarize (once)
    + static annotations -> merge -> render layers

Every call recomputes everything from the batch it is given; nothing is
kept between calls.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from quakecompass.aggregator import aggregate
from quakecompass.annotations import Overlay, merge
from quakecompass.config import COUNTRY_PRESET, EngineConfig
from quakecompass.errors import DegenerateInputError
from quakecompass.markers import RegionMarker, build_marker
from quakecompass.records import PredictionAnnotation
from quakecompass.risk import classify
from quakecompass.sources import fallback_records
from quakecompass.summary import GlobalStats, summarize
from quakecompass.validator import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardData:
    """Everything the renderer needs for one render pass.

    Args:
        region_stats: Read-only mapping of region -> ``RegionMarker``.
        global_stats: Headline totals.
        overlays: Static predicted events, as configured.
        layers: Observed and predicted points in draw order.
    """

    region_stats: Mapping[str, RegionMarker]
    global_stats: GlobalStats
    overlays: tuple[PredictionAnnotation, ...]
    layers: tuple[Overlay, ...]


def run_pipeline(raw_records, config: EngineConfig = COUNTRY_PRESET) -> DashboardData:
    """Run the full engine over one batch of raw rows.

    Raises:
        InvalidInputError: If *raw_records* is not a sequence of rows.
        DegenerateInputError: If no row survives validation.
    """
    validated = validate(raw_records, config)
    global_stats = summarize(validated, config)

    markers = {}
    for region, stats in aggregate(validated, config).items():
        markers[region] = build_marker(stats, classify(stats, config))

    layers = merge(markers, config.static_annotations)
    logger.info(
        f"{global_stats.total_valid_events} valid events across "
        f"{global_stats.regions_affected} regions, "
        f"max M{global_stats.max_magnitude}"
    )
    return DashboardData(
        region_stats=MappingProxyType(markers),
        global_stats=global_stats,
        overlays=tuple(config.static_annotations),
        layers=tuple(layers),
    )


def run_with_fallback(raw_records, config: EngineConfig = COUNTRY_PRESET) -> DashboardData:
    """Like ``run_pipeline``, but uses the built-in fallback catalog when no row is valid.

    The fallback catalog has no ``district`` column, so under the district
    preset this still raises ``DegenerateInputError``.
    """
    try:
        return run_pipeline(raw_records, config)
    except DegenerateInputError:
        logger.warning("No valid events in batch, using fallback catalog")
        return run_pipeline(fallback_records(), config)


def ranked_regions(dashboard: DashboardData) -> list[RegionMarker]:
    """Regions for the sidebar list: most events first, then by name."""
    return sorted(
        dashboard.region_stats.values(),
        key=lambda m: (-m.stats.record_count, m.region),
    )
