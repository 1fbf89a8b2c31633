"""Domain types for an exceedance analysis.

All types are frozen: a request is validated once on construction and a
result is never mutated after assembly.
"""

from __future__ import annotations

from dataclasses import dataclass
import math

from weather_odds.config import DEFAULT_VARIABLE, MAX_WINDOW_DAYS
from weather_odds.errors import InvalidRequest
from weather_odds.variables import require_variable

# Longest each month can be in any year (Feb 29 is a valid target date)
_MAX_DAYS_IN_MONTH = [31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


@dataclass(frozen=True)
class AnalysisRequest:
    latitude: float
    longitude: float
    month: int
    day: int
    window: int
    threshold: float
    variable: str = DEFAULT_VARIABLE

    def __post_init__(self) -> None:
        _check_number("latitude", self.latitude, -90.0, 90.0)
        _check_number("longitude", self.longitude, -180.0, 180.0)
        _check_number("threshold", self.threshold)
        _check_int("month", self.month, 1, 12)
        _check_int("day", self.day, 1, _MAX_DAYS_IN_MONTH[self.month - 1])
        _check_int("window", self.window, 0, MAX_WINDOW_DAYS)
        require_variable(self.variable)


@dataclass(frozen=True)
class YearlyExtremum:
    year: int
    max_value: float


@dataclass(frozen=True)
class Percentiles:
    p25: float
    p50: float
    p75: float
    p90: float


@dataclass(frozen=True)
class AnalysisMetadata:
    latitude: float
    longitude: float
    month: int
    day: int
    window_days: int
    threshold: float
    variable: str
    start_year: int
    end_year: int
    data_source: str
    api_url: str
    interval_method: str = "wald"


@dataclass(frozen=True)
class AnalysisResult:
    probability: float
    confidence_interval: tuple[float, float]
    years_analyzed: int
    percentiles: Percentiles
    yearly_data: tuple[YearlyExtremum, ...]
    metadata: AnalysisMetadata


def _check_number(
    name: str,
    value: float,
    low: float | None = None,
    high: float | None = None,
) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidRequest(f"{name} must be a finite number", details={name: value})
    if (low is not None and value < low) or (high is not None and value > high):
        raise InvalidRequest(
            f"{name} must be between {low} and {high}",
            details={name: value},
        )


def _check_int(name: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequest(f"{name} must be an integer", details={name: value})
    if not low <= value <= high:
        raise InvalidRequest(
            f"{name} must be between {low} and {high}",
            details={name: value},
        )
