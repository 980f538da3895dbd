"""
Pytest configuration for AQI Visualizer tests.

Registers custom markers and provides shared WAQI payload fixtures.
"""

import pytest


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def api_key(monkeypatch):
    """Provide a WAQI token through the environment."""
    monkeypatch.setenv("WAQI_API_KEY", "test-token")
    return "test-token"


@pytest.fixture
def no_api_key(monkeypatch):
    """Remove the WAQI token from both the environment and the loaded config."""
    from backend import config

    monkeypatch.delenv("WAQI_API_KEY", raising=False)
    monkeypatch.setattr(config, "WAQI_API_KEY", None)


@pytest.fixture
def feed_payload():
    """A WAQI /feed/@uid/ data object."""
    return {
        "idx": 8012,
        "aqi": 87,
        "city": {"name": "Bandra, Mumbai", "geo": [19.0596, 72.8295]},
        "iaqi": {
            "pm25": {"v": 29.0},
            "pm10": {"v": 61},
            "no2": {"v": 12.4},
            "co": {"v": 3.1},
            "o3": {"v": 18},
            "so2": {"v": 4.2},
        },
        "time": {"iso": "2026-10-19T10:00:00+05:30"},
    }


@pytest.fixture
def bounds_payload():
    """A WAQI /map/bounds/ data list."""
    return [
        {"uid": 1, "lat": 19.07, "lon": 72.87, "aqi": "57", "station": {"name": "Colaba"}},
        {"uid": 2, "lat": 19.11, "lon": 72.91, "aqi": "-", "station": {"name": "Powai"}},
        {"uid": 3, "lat": None, "lon": 72.80, "aqi": "40", "station": {"name": "Nowhere"}},
    ]
