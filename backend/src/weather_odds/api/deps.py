"""FastAPI dependency injection."""

from __future__ import annotations

from weather_odds.compute.analysis import ObservationSource
from weather_odds.ingest.nasa_power import fetch_observations


def get_observation_source() -> ObservationSource:
    """Provide the daily observation fetcher (overridden in tests)."""
    return fetch_observations
