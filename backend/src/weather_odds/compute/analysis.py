"""Single-shot exceedance analysis.

Orchestrates: request -> date window -> one upstream fetch -> yearly maxima
-> summary statistics -> assembled result.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import pandas as pd

from weather_odds.compute.date_window import resolve_date_window
from weather_odds.compute.statistics import INTERVAL_METHODS, Summary, summarize
from weather_odds.compute.yearly_extremes import compute_yearly_maximums
from weather_odds.config import DATA_SOURCE_NAME, DATA_SOURCE_URL, END_YEAR, START_YEAR
from weather_odds.errors import InvalidRequest
from weather_odds.ingest.nasa_power import fetch_observations
from weather_odds.models import (
    AnalysisMetadata,
    AnalysisRequest,
    AnalysisResult,
    YearlyExtremum,
)
from weather_odds.variables import require_variable

logger = logging.getLogger(__name__)

# (parameter, lat, lon, start_year, end_year) -> daily values indexed by date
ObservationSource = Callable[[str, float, float, int, int], pd.Series]


def run_analysis(
    request: AnalysisRequest,
    fetch: ObservationSource = fetch_observations,
    start_year: int = START_YEAR,
    end_year: int = END_YEAR,
    interval_method: str = "wald",
) -> AnalysisResult:
    """Compute the exceedance probability for one request.

    All input checks run before the upstream fetch.

    Raises:
        InvalidRequest: bad year range or interval method.
        UpstreamUnavailable, MalformedUpstreamPayload: from ``fetch``.
        InsufficientData: no year has valid in-window data.
    """
    variable = require_variable(request.variable)
    if start_year > end_year:
        raise InvalidRequest(
            "start_year must not be after end_year",
            details={"start_year": start_year, "end_year": end_year},
        )
    if interval_method not in INTERVAL_METHODS:
        raise InvalidRequest(
            f"Unknown interval method {interval_method!r}",
            details={"supported": sorted(INTERVAL_METHODS)},
        )

    window = resolve_date_window(request.month, request.day, request.window)

    observations = fetch(
        variable.power_parameter,
        request.latitude,
        request.longitude,
        start_year,
        end_year,
    )
    extremes = compute_yearly_maximums(observations, window, start_year, end_year)
    summary = summarize(extremes, request.threshold, interval_method)

    result = assemble_result(
        request, summary, extremes, start_year, end_year, interval_method,
    )
    logger.info(
        "Analysis complete for %s at (%.4f, %.4f): probability %.1f%%",
        request.variable, request.latitude, request.longitude, result.probability,
    )
    return result


def assemble_result(
    request: AnalysisRequest,
    summary: Summary,
    extremes: Sequence[YearlyExtremum],
    start_year: int = START_YEAR,
    end_year: int = END_YEAR,
    interval_method: str = "wald",
) -> AnalysisResult:
    """Package the summary, yearly series and provenance into an AnalysisResult."""
    yearly_data = tuple(sorted(extremes, key=lambda e: e.year))
    metadata = AnalysisMetadata(
        latitude=request.latitude,
        longitude=request.longitude,
        month=request.month,
        day=request.day,
        window_days=request.window,
        threshold=request.threshold,
        variable=request.variable,
        start_year=start_year,
        end_year=end_year,
        data_source=DATA_SOURCE_NAME,
        api_url=DATA_SOURCE_URL,
        interval_method=interval_method,
    )
    return AnalysisResult(
        probability=summary.probability,
        confidence_interval=summary.confidence_interval,
        years_analyzed=len(yearly_data),
        percentiles=summary.percentiles,
        yearly_data=yearly_data,
        metadata=metadata,
    )
