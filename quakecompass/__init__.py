"""Quake Compass regional aggregation engine.

Turns a batch of raw earthquake catalog rows into per-region statistics,
risk tiers and map marker encodings for the Quake Compass dashboard.

Usage::

    from quakecompass import COUNTRY_PRESET, run_pipeline
    from quakecompass.sources import fallback_records

    dashboard = run_pipeline(fallback_records(), COUNTRY_PRESET)
    dashboard.global_stats.total_valid_events   # 7
"""

from quakecompass.config import COUNTRY_PRESET, DISTRICT_PRESET, EngineConfig
from quakecompass.errors import (
    ConfigError,
    DegenerateInputError,
    EngineError,
    InvalidInputError,
)
from quakecompass.pipeline import DashboardData, ranked_regions, run_pipeline

__version__ = "0.1.0"

__all__ = [
    "COUNTRY_PRESET",
    "DISTRICT_PRESET",
    "ConfigError",
    "DashboardData",
    "DegenerateInputError",
    "EngineConfig",
    "EngineError",
    "InvalidInputError",
    "ranked_regions",
    "run_pipeline",
]
