"""Engine configuration and the two built-in presets.

The country preset reproduces the original Quake Compass dashboard:
events grouped by country, no magnitude floor, markers colored by the
largest magnitude in the country, extrema reported unrounded.

The district preset groups a single country's events by district, drops
events below M4.0, colors markers by event frequency and rounds extrema
to one decimal.

Usage::

    from quakecompass.config import EngineConfig, COUNTRY_PRESET

    config = EngineConfig.from_mapping({"regionField": "state", "minMagnitude": 5})
"""

from __future__ import annotations

import dataclasses
import math
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from quakecompass.errors import ConfigError
from quakecompass.records import PredictionAnnotation
from quakecompass.risk import (
    DEFAULT_TIER_COLORS,
    MODEL_TIERS,
    MarkerBounds,
    RiskModel,
    RiskTier,
)

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class DateRange:
    """First and last event dates of a region, as display strings."""

    start: str
    end: str


DEFAULT_DATE_RANGE = DateRange(start="N/A", end="N/A")

ICELAND_2026 = PredictionAnnotation(
    latitude=64.9631,
    longitude=-19.0208,
    year=2026,
    magnitude=6.23,
    label="Iceland",
    basis="Based on trend projection",
)

DEFAULT_ANNOTATIONS = (ICELAND_2026,)

# camelCase option names accepted by EngineConfig.from_mapping
_OPTION_NAMES = {
    "regionField": "region_field",
    "countryFilter": "country_filter",
    "filterField": "filter_field",
    "minMagnitude": "min_magnitude",
    "riskModel": "risk_model",
    "markerSizeBounds": "marker_size_bounds",
    "scaleFactor": "scale_factor",
    "tierColors": "tier_colors",
    "defaultDateRange": "default_date_range",
    "staticAnnotations": "static_annotations",
    "roundExtrema": "round_extrema",
    "latitudeField": "latitude_field",
    "longitudeField": "longitude_field",
    "magnitudeField": "magnitude_field",
    "timestampField": "timestamp_field",
}


@dataclass(frozen=True)
class EngineConfig:
    """Options controlling validation, aggregation and encoding.

    Args:
        region_field: Column holding the region key.
        country_filter: If set, only rows whose ``filter_field`` equals
            this value (after trimming) are kept.
        filter_field: Column checked by ``country_filter``.
        min_magnitude: Magnitude floor; 0 disables the filter.
        risk_model: ``"frequency"`` or ``"magnitude"``.
        marker_size_bounds: Smallest and largest marker diameter.
        scale_factor: Marker pixels per recorded event before clamping.
        tier_colors: Hex color for every tier of the active risk model.
        default_date_range: Shown for regions without usable timestamps.
        static_annotations: Predicted events overlaid on the map.
        round_extrema: Round region and global max/min magnitude to one
            decimal instead of reporting them exactly.
        latitude_field, longitude_field, magnitude_field, timestamp_field:
            Raw column names.
    """

    region_field: str = "country"
    country_filter: str | None = None
    filter_field: str = "country"
    min_magnitude: float = 0.0
    risk_model: RiskModel = RiskModel.MAGNITUDE
    marker_size_bounds: MarkerBounds = MarkerBounds(18, 40)
    scale_factor: float = 4.0
    tier_colors: Mapping[RiskTier, str] = field(
        default_factory=lambda: dict(DEFAULT_TIER_COLORS)
    )
    default_date_range: DateRange = DEFAULT_DATE_RANGE
    static_annotations: tuple[PredictionAnnotation, ...] = DEFAULT_ANNOTATIONS
    round_extrema: bool = False
    latitude_field: str = "latitude"
    longitude_field: str = "longitude"
    magnitude_field: str = "mag"
    timestamp_field: str = "time"

    def __post_init__(self):
        try:
            model = RiskModel(self.risk_model)
        except ValueError:
            raise ConfigError(f"Unknown risk model: {self.risk_model!r}") from None
        object.__setattr__(self, "risk_model", model)

        try:
            colors = {RiskTier.parse(k): v for k, v in dict(self.tier_colors).items()}
        except (TypeError, ValueError) as exc:
            raise ConfigError(str(exc)) from None
        object.__setattr__(self, "tier_colors", colors)
        try:
            object.__setattr__(self, "static_annotations", tuple(self.static_annotations))
        except TypeError:
            raise ConfigError(
                f"static_annotations must be a sequence, got {self.static_annotations!r}"
            ) from None

        if not self.region_field:
            raise ConfigError("region_field must be a non-empty column name")
        if (
            isinstance(self.min_magnitude, bool)
            or not isinstance(self.min_magnitude, (int, float))
            or not math.isfinite(self.min_magnitude)
        ):
            raise ConfigError(f"min_magnitude must be finite, got {self.min_magnitude}")

        bounds = self.marker_size_bounds
        try:
            bounds_ok = 0 < bounds.min <= bounds.max
        except (AttributeError, TypeError):
            bounds_ok = False
        if not bounds_ok:
            raise ConfigError(f"marker_size_bounds must satisfy 0 < min <= max, got {bounds!r}")
        try:
            scale_ok = self.scale_factor > 0
        except TypeError:
            scale_ok = False
        if not scale_ok:
            raise ConfigError(f"scale_factor must be a positive number, got {self.scale_factor!r}")

        for tier in MODEL_TIERS[model]:
            color = colors.get(tier)
            if color is None:
                raise ConfigError(f"No color configured for tier {tier.value!r}")
            if not isinstance(color, str) or not _HEX_COLOR_RE.match(color):
                raise ConfigError(f"Color for tier {tier.value!r} is not #rrggbb: {color!r}")

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, Any],
        base: EngineConfig | None = None,
    ) -> EngineConfig:
        """Build a configuration from camelCase (or snake_case) options.

        Unspecified options are taken from *base* (the country preset by
        default). ``markerSizeBounds`` and ``defaultDateRange`` may be
        given as ``{"min", "max"}`` / ``{"start", "end"}`` mappings and
        ``staticAnnotations`` as a list of mappings.

        Raises:
            ConfigError: On unknown option names or invalid values.
        """
        base = base if base is not None else COUNTRY_PRESET
        known = {f.name for f in dataclasses.fields(cls)}
        changes: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_NAMES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown configuration option: {key!r}")
            changes[name] = value

        try:
            bounds = changes.get("marker_size_bounds")
            if isinstance(bounds, Mapping):
                changes["marker_size_bounds"] = MarkerBounds(bounds["min"], bounds["max"])
            date_range = changes.get("default_date_range")
            if isinstance(date_range, Mapping):
                changes["default_date_range"] = DateRange(date_range["start"], date_range["end"])
            if "static_annotations" in changes:
                changes["static_annotations"] = tuple(
                    a if isinstance(a, PredictionAnnotation) else PredictionAnnotation.from_mapping(a)
                    for a in changes["static_annotations"]
                )
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid configuration value: {exc!r}") from exc
        return dataclasses.replace(base, **changes)


COUNTRY_PRESET = EngineConfig()

DISTRICT_PRESET = EngineConfig(
    region_field="district",
    country_filter="India",
    filter_field="country",
    min_magnitude=4.0,
    risk_model=RiskModel.FREQUENCY,
    marker_size_bounds=MarkerBounds(12, 36),
    scale_factor=2.0,
    round_extrema=True,
)
