"""Tests for quakecompass.config — options, presets and validation."""

import pytest

from quakecompass.config import (
    COUNTRY_PRESET,
    DISTRICT_PRESET,
    ICELAND_2026,
    DateRange,
    EngineConfig,
)
from quakecompass.errors import ConfigError
from quakecompass.records import PredictionAnnotation
from quakecompass.risk import MarkerBounds, RiskModel, RiskTier


class TestPresets:
    def test_country_preset_matches_dashboard(self):
        assert COUNTRY_PRESET.region_field == "country"
        assert COUNTRY_PRESET.country_filter is None
        assert COUNTRY_PRESET.min_magnitude == 0
        assert COUNTRY_PRESET.risk_model is RiskModel.MAGNITUDE
        assert COUNTRY_PRESET.marker_size_bounds == MarkerBounds(18, 40)
        assert COUNTRY_PRESET.scale_factor == 4
        assert COUNTRY_PRESET.round_extrema is False
        assert COUNTRY_PRESET.static_annotations == (ICELAND_2026,)

    def test_district_preset(self):
        assert DISTRICT_PRESET.region_field == "district"
        assert DISTRICT_PRESET.country_filter == "India"
        assert DISTRICT_PRESET.risk_model is RiskModel.FREQUENCY
        assert DISTRICT_PRESET.round_extrema is True


class TestValidation:
    """Inconsistent configurations fail at construction."""

    def test_risk_model_from_string(self):
        assert EngineConfig(risk_model="frequency").risk_model is RiskModel.FREQUENCY

    def test_unknown_risk_model(self):
        with pytest.raises(ConfigError):
            EngineConfig(risk_model="vibes")

    def test_inverted_bounds(self):
        with pytest.raises(ConfigError):
            EngineConfig(marker_size_bounds=MarkerBounds(40, 18))

    def test_non_positive_scale(self):
        with pytest.raises(ConfigError):
            EngineConfig(scale_factor=0)

    def test_missing_tier_color(self):
        colors = {RiskTier.SEVERE: "#ef4444", RiskTier.ELEVATED: "#f59e0b"}
        with pytest.raises(ConfigError, match="Normal"):
            EngineConfig(tier_colors=colors)

    def test_colors_only_needed_for_active_model(self):
        colors = {"Severe": "#ef4444", "Elevated": "#f59e0b", "Normal": "#10b981"}
        config = EngineConfig(tier_colors=colors)
        assert config.tier_colors[RiskTier.NORMAL] == "#10b981"

    def test_bad_hex_color(self):
        colors = {"Severe": "red", "Elevated": "#f59e0b", "Normal": "#10b981"}
        with pytest.raises(ConfigError):
            EngineConfig(tier_colors=colors)

    def test_unknown_tier_name(self):
        with pytest.raises(ConfigError):
            EngineConfig(tier_colors={"Catastrophic": "#000000"})

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            EngineConfig(region_field="")


class TestFromMapping:
    """camelCase configuration surface."""

    def test_options_applied(self):
        config = EngineConfig.from_mapping({
            "regionField": "state",
            "countryFilter": "USA",
            "minMagnitude": 4.5,
            "riskModel": "frequency",
            "markerSizeBounds": {"min": 10, "max": 30},
            "scaleFactor": 3,
            "defaultDateRange": {"start": "2020-01-01", "end": "2020-12-31"},
            "roundExtrema": True,
        })
        assert config.region_field == "state"
        assert config.country_filter == "USA"
        assert config.min_magnitude == 4.5
        assert config.risk_model is RiskModel.FREQUENCY
        assert config.marker_size_bounds == MarkerBounds(10, 30)
        assert config.default_date_range == DateRange("2020-01-01", "2020-12-31")
        assert config.round_extrema is True

    def test_unspecified_options_from_base(self):
        config = EngineConfig.from_mapping({"minMagnitude": 5}, base=DISTRICT_PRESET)
        assert config.region_field == "district"
        assert config.min_magnitude == 5

    def test_annotations_from_mappings(self):
        config = EngineConfig.from_mapping({
            "staticAnnotations": [
                {"latitude": 38.3, "longitude": 142.4, "year": 2030, "magnitude": 7.1, "label": "Tohoku"},
            ],
        })
        assert config.static_annotations == (
            PredictionAnnotation(latitude=38.3, longitude=142.4, year=2030, magnitude=7.1, label="Tohoku"),
        )

    def test_tier_colors_by_name(self):
        config = EngineConfig.from_mapping({"tierColors": {"Severe": "#000000", "Elevated": "#111111", "Normal": "#222222"}})
        assert config.tier_colors[RiskTier.SEVERE] == "#000000"

    def test_unknown_option(self):
        with pytest.raises(ConfigError, match="tileServer"):
            EngineConfig.from_mapping({"tileServer": "https://tile.openstreetmap.org"})

    def test_invalid_value_rejected(self):
        with pytest.raises(ConfigError):
            EngineConfig.from_mapping({"scaleFactor": -1})

    @pytest.mark.parametrize("options", [
        {"markerSizeBounds": {"min": 10}},
        {"markerSizeBounds": {"min": "small", "max": 30}},
        {"markerSizeBounds": [10, 30]},
        {"defaultDateRange": {"start": "2020-01-01"}},
        {"staticAnnotations": [{"latitude": 38.3}]},
        {"staticAnnotations": [{"latitude": "north", "longitude": 142.4, "year": 2030, "magnitude": 7.1, "label": "Tohoku"}]},
        {"staticAnnotations": 7},
        {"scaleFactor": "big"},
        {"minMagnitude": "4.5"},
        {"tierColors": 3},
        {"tierColors": {"Severe": 1, "Elevated": "#f59e0b", "Normal": "#10b981"}},
    ])
    def test_malformed_values_raise_config_error(self, options):
        with pytest.raises(ConfigError):
            EngineConfig.from_mapping(options)
