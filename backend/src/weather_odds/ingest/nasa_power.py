"""NASA POWER daily point fetcher: the historical data source.

One GET per analysis request covering the full year range. The response
carries ``properties.parameter[<code>][YYYYMMDD] -> value``, with missing days
encoded as a fill value (-999) rather than omitted. Fill values are turned into
NaN here so nothing downstream can mistake them for measurements.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd
import requests

from weather_odds.config import (
    END_YEAR,
    NASA_POWER_COMMUNITY,
    NASA_POWER_FILL_VALUE,
    NASA_POWER_URL,
    REQUEST_TIMEOUT,
    START_YEAR,
)
from weather_odds.errors import MalformedUpstreamPayload, UpstreamUnavailable

logger = logging.getLogger(__name__)


def build_power_params(
    parameter: str,
    lat: float,
    lon: float,
    start_year: int = START_YEAR,
    end_year: int = END_YEAR,
) -> dict[str, Any]:
    """Query parameters for a daily point request spanning whole years."""
    return {
        "parameters": parameter,
        "community": NASA_POWER_COMMUNITY,
        "longitude": lon,
        "latitude": lat,
        "start": f"{start_year}0101",
        "end": f"{end_year}1231",
        "format": "JSON",
    }


def fetch_power_daily(
    parameter: str,
    lat: float,
    lon: float,
    start_year: int = START_YEAR,
    end_year: int = END_YEAR,
    timeout: float = REQUEST_TIMEOUT,
) -> dict[str, Any]:
    """Fetch the raw NASA POWER daily payload for one parameter and location.

    Raises:
        UpstreamUnavailable: on network errors, timeouts or non-2xx status.
        MalformedUpstreamPayload: if the body is not a JSON object.
    """
    params = build_power_params(parameter, lat, lon, start_year, end_year)
    logger.info(
        "Fetching NASA POWER %s: lat=%.4f lon=%.4f %d-%d",
        parameter, lat, lon, start_year, end_year,
    )

    try:
        resp = requests.get(NASA_POWER_URL, params=params, timeout=timeout)
    except requests.RequestException as exc:
        logger.exception("NASA POWER request failed")
        raise UpstreamUnavailable(f"NASA POWER API unreachable: {exc}") from exc

    if not resp.ok:
        logger.error("NASA POWER API error: %s %s", resp.status_code, resp.text[:500])
        raise UpstreamUnavailable(
            f"NASA POWER API request failed: {resp.status_code}",
            status_code=resp.status_code,
            details={"upstream_message": resp.text[:500]},
        )

    try:
        data = resp.json()
    except ValueError as exc:
        raise MalformedUpstreamPayload("NASA POWER response is not valid JSON") from exc

    if not isinstance(data, dict):
        raise MalformedUpstreamPayload("NASA POWER response is not a JSON object")
    return data


def parse_power_series(payload: dict[str, Any], parameter: str) -> pd.Series:
    """Extract one parameter's daily values as a date-indexed float Series.

    Fill values and nulls become NaN.

    Raises:
        MalformedUpstreamPayload: if ``properties.parameter.<parameter>`` is
            missing, or a date key or value cannot be parsed.
    """
    try:
        daily = payload["properties"]["parameter"][parameter]
    except (KeyError, TypeError) as exc:
        raise MalformedUpstreamPayload(
            f"NASA POWER response has no daily values for {parameter}",
            details={"parameter": parameter},
        ) from exc

    if not isinstance(daily, dict):
        raise MalformedUpstreamPayload(
            f"NASA POWER values for {parameter} are not a date mapping",
            details={"parameter": parameter},
        )

    fill_value = _fill_value(payload)

    try:
        index = pd.to_datetime(list(daily.keys()), format="%Y%m%d")
    except (ValueError, TypeError) as exc:
        raise MalformedUpstreamPayload(
            "NASA POWER response has unparsable date keys",
            details={"parameter": parameter},
        ) from exc

    values = pd.to_numeric(pd.Series(list(daily.values()), index=index), errors="coerce")
    if values.isna().sum() > sum(v is None for v in daily.values()):
        raise MalformedUpstreamPayload(
            "NASA POWER response has non-numeric values",
            details={"parameter": parameter},
        )

    series = values.astype(float).replace(fill_value, np.nan).sort_index()
    series = series[~series.index.duplicated(keep="first")]
    series.name = parameter

    n_missing = int(series.isna().sum())
    logger.info(
        "Parsed %d daily %s values (%d missing)", len(series), parameter, n_missing,
    )
    return series


def fetch_observations(
    parameter: str,
    lat: float,
    lon: float,
    start_year: int = START_YEAR,
    end_year: int = END_YEAR,
) -> pd.Series:
    """Fetch and parse daily observations in one step."""
    payload = fetch_power_daily(parameter, lat, lon, start_year, end_year)
    return parse_power_series(payload, parameter)


def _fill_value(payload: dict[str, Any]) -> float:
    header = payload.get("header")
    if isinstance(header, dict):
        try:
            return float(header["fill_value"])
        except (KeyError, TypeError, ValueError):
            pass
    return NASA_POWER_FILL_VALUE
