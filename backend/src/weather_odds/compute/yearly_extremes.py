"""Per-year extreme reduction.

For each year in the analysis range, takes the maximum of all valid daily
observations inside that year's date window. Years without a single valid
observation are left out entirely so missing data cannot bias the statistics.
"""

from __future__ import annotations

import logging

import pandas as pd

from weather_odds.compute.date_window import DateWindow
from weather_odds.config import END_YEAR, START_YEAR
from weather_odds.errors import InvalidRequest
from weather_odds.models import YearlyExtremum

logger = logging.getLogger(__name__)


def compute_yearly_maximums(
    observations: pd.Series,
    window: DateWindow,
    start_year: int = START_YEAR,
    end_year: int = END_YEAR,
) -> list[YearlyExtremum]:
    """Reduce daily observations to one in-window maximum per year.

    Args:
        observations: Daily values indexed by date. Missing days are NaN
            (or absent); they never count as a valid low value.
        window: Resolved date window.
        start_year: First year to scan (inclusive).
        end_year: Last year to scan (inclusive).

    Returns:
        YearlyExtremum list in ascending year order, one per year with at
        least one valid in-window observation.
    """
    if start_year > end_year:
        raise InvalidRequest(
            "start_year must not be after end_year",
            details={"start_year": start_year, "end_year": end_year},
        )

    if observations.empty:
        logger.warning("No observations to reduce")
        return []

    series = observations.copy()
    series.index = pd.DatetimeIndex(series.index)
    series = series[~series.index.duplicated(keep="first")].sort_index()
    series = pd.to_numeric(series, errors="coerce")

    per_year: list[YearlyExtremum] = []
    skipped: list[int] = []
    for year in range(start_year, end_year + 1):
        first, last = window.bounds_for_year(year)
        in_window = series.loc[pd.Timestamp(first):pd.Timestamp(last)].dropna()

        if in_window.empty:
            skipped.append(year)
            continue

        per_year.append(YearlyExtremum(year=year, max_value=float(in_window.max())))

    if skipped:
        logger.warning(
            "Dropped %d year(s) with no valid in-window data: %s",
            len(skipped), ", ".join(str(y) for y in skipped),
        )
    logger.info(
        "Reduced %d-%d to %d yearly maxima", start_year, end_year, len(per_year),
    )
    return per_year
