"""Shared test fixtures."""

import numpy as np
import pandas as pd
import pytest

from weather_odds.models import AnalysisRequest


def _daily_index(start_year: int, end_year: int) -> pd.DatetimeIndex:
    return pd.date_range(f"{start_year}-01-01", f"{end_year}-12-31", freq="D")


@pytest.fixture
def alternating_series() -> pd.Series:
    """1981-2023 daily values: 20.0 every day of even years, 30.0 of odd years."""
    index = _daily_index(1981, 2023)
    values = np.where(index.year % 2 == 0, 20.0, 30.0)
    return pd.Series(values, index=index, name="T2M_MAX")


@pytest.fixture
def seasonal_series() -> pd.Series:
    """1981-2023 daily values with a seasonal cycle plus noise."""
    index = _daily_index(1981, 2023)
    rng = np.random.default_rng(42)
    doy = index.dayofyear
    values = 10 + 15 * np.sin((doy - 80) * 2 * np.pi / 365) + rng.normal(0, 3, len(index))
    return pd.Series(values.round(2), index=index, name="T2M_MAX")


@pytest.fixture
def sample_request() -> AnalysisRequest:
    return AnalysisRequest(
        latitude=43.65,
        longitude=-79.38,
        month=7,
        day=15,
        window=3,
        threshold=25.0,
        variable="T2M_MAX",
    )


@pytest.fixture
def power_payload() -> dict:
    """Small NASA POWER response: Jan 1-5 2020, one fill value."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [-79.38, 43.65, 100.0]},
        "header": {
            "title": "NASA/POWER CERES/MERRA2 Native Resolution Daily Data",
            "fill_value": -999.0,
            "start": "20200101",
            "end": "20200105",
        },
        "properties": {
            "parameter": {
                "T2M_MAX": {
                    "20200101": 1.5,
                    "20200102": -999.0,
                    "20200103": 3.25,
                    "20200104": -2.0,
                    "20200105": 0.0,
                },
            },
        },
    }
