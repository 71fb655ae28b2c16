"""Shared pytest configuration and fixtures for quakecompass tests."""

import sys
from pathlib import Path

import pytest

# Ensure the quakecompass package is importable when running tests from the repo root
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def worked_example_rows():
    """Three events in two regions: A twice, B once."""
    return [
        {"country": "A", "latitude": 10, "longitude": 10, "mag": 6.0},
        {"country": "A", "latitude": 12, "longitude": 12, "mag": 6.4},
        {"country": "B", "latitude": 0, "longitude": 0, "mag": 5.9},
    ]


@pytest.fixture
def district_rows():
    """District-level rows, some outside the country filter or below M4.0."""
    return [
        {"district": "Kutch", "country": "India", "latitude": 23.4, "longitude": 70.2, "mag": 4.8, "time": "2023-03-01T10:00:00Z"},
        {"district": "Kutch", "country": "India", "latitude": 23.6, "longitude": 70.4, "mag": 5.04, "time": "2023-05-12T08:30:00Z"},
        {"district": "Chamoli", "country": "India", "latitude": 30.4, "longitude": 79.3, "mag": 4.26, "time": "2022-11-20"},
        {"district": "Chamoli", "country": "India", "latitude": 30.5, "longitude": 79.2, "mag": 3.9, "time": "2022-11-21"},
        {"district": "Sindhupalchok", "country": "Nepal", "latitude": 27.9, "longitude": 85.7, "mag": 5.2, "time": "2023-01-01"},
        {"district": "", "country": "India", "latitude": 22.0, "longitude": 72.0, "mag": 4.5},
    ]
