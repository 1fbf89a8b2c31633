"""Exceedance statistics over yearly maxima.

Empirical frequency and nearest-rank percentiles only; no distribution fitting.

The default 95% interval is the Wald (normal) approximation, which is known to
be poor for small samples or probabilities near 0 or 100. The Wilson score
interval is available as a drop-in alternative with the same output shape.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, Iterable, Sequence

import numpy as np

from weather_odds.config import CONFIDENCE_Z, PERCENTILES
from weather_odds.errors import InsufficientData, InvalidRequest
from weather_odds.models import Percentiles, YearlyExtremum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Summary:
    probability: float
    confidence_interval: tuple[float, float]
    years_analyzed: int
    exceeding_years: int
    percentiles: Percentiles


def exceedance_probability(values: Sequence[float], threshold: float) -> tuple[float, int]:
    """Percentage of values strictly greater than ``threshold``.

    Values equal to the threshold do not count as exceeding.

    Returns:
        (probability in percent, number of exceeding values) tuple.
    """
    n = len(values)
    if n == 0:
        raise InsufficientData("Cannot compute a probability from zero years of data")
    exceeding = int(np.count_nonzero(np.asarray(values, dtype=float) > threshold))
    return 100 * exceeding / n, exceeding


def wald_interval(probability: float, n: int, z: float = CONFIDENCE_Z) -> tuple[float, float]:
    """Normal-approximation interval around ``probability`` (percent), clamped to [0, 100]."""
    p = probability / 100
    standard_error = math.sqrt(p * (1 - p) / n)
    margin = z * standard_error * 100
    return _clamp_interval(probability, probability - margin, probability + margin)


def wilson_interval(probability: float, n: int, z: float = CONFIDENCE_Z) -> tuple[float, float]:
    """Wilson score interval around ``probability`` (percent), clamped to [0, 100]."""
    p = probability / 100
    z2 = z * z
    denominator = 1 + z2 / n
    center = (p + z2 / (2 * n)) / denominator
    half_width = z * math.sqrt(p * (1 - p) / n + z2 / (4 * n * n)) / denominator
    return _clamp_interval(
        probability, (center - half_width) * 100, (center + half_width) * 100,
    )


INTERVAL_METHODS: dict[str, Callable[[float, int, float], tuple[float, float]]] = {
    "wald": wald_interval,
    "wilson": wilson_interval,
}


def confidence_interval(
    probability: float,
    n: int,
    method: str = "wald",
    z: float = CONFIDENCE_Z,
) -> tuple[float, float]:
    if n <= 0:
        raise InsufficientData("Cannot compute a confidence interval from zero years of data")
    try:
        interval_fn = INTERVAL_METHODS[method]
    except KeyError:
        raise InvalidRequest(
            f"Unknown interval method {method!r}",
            details={"supported": sorted(INTERVAL_METHODS)},
        ) from None
    return interval_fn(probability, n, z)


def nearest_rank_percentile(sorted_values: Sequence[float], q: float) -> float:
    """Nearest-rank percentile of already-sorted values.

    index = ceil(q/100 * n) - 1, clamped to [0, n-1]. For n=42, q=25 this is
    ceil(10.5) - 1 = 10, the 11th smallest value.
    """
    n = len(sorted_values)
    if n == 0:
        raise InsufficientData("Cannot compute a percentile from zero values")
    index = math.ceil((q / 100) * n) - 1
    index = min(max(index, 0), n - 1)
    return float(sorted_values[index])


def compute_percentiles(
    values: Iterable[float],
    quantiles: Sequence[int] = PERCENTILES,
) -> dict[str, float]:
    """Nearest-rank percentiles keyed "p25", "p50", ..."""
    sorted_values = np.sort(np.asarray(list(values), dtype=float))
    return {f"p{q}": nearest_rank_percentile(sorted_values, q) for q in quantiles}


def summarize(
    extremes: Sequence[YearlyExtremum],
    threshold: float,
    interval_method: str = "wald",
) -> Summary:
    """Probability, confidence interval and percentiles for a set of yearly maxima.

    Raises:
        InsufficientData: if ``extremes`` is empty.
    """
    if not extremes:
        raise InsufficientData(
            "No year has a valid observation inside the date window",
            details={"years_analyzed": 0},
        )

    values = [e.max_value for e in extremes]
    n = len(values)

    probability, exceeding = exceedance_probability(values, threshold)
    interval = confidence_interval(probability, n, interval_method)
    percentiles = Percentiles(**compute_percentiles(values, PERCENTILES))

    logger.info(
        "%d of %d years exceed %.2f: probability %.1f%% (95%% CI %.1f-%.1f, %s)",
        exceeding, n, threshold, probability, interval[0], interval[1], interval_method,
    )
    return Summary(
        probability=probability,
        confidence_interval=interval,
        years_analyzed=n,
        exceeding_years=exceeding,
        percentiles=percentiles,
    )


def _clamp_interval(probability: float, low: float, high: float) -> tuple[float, float]:
    low = min(max(low, 0.0), 100.0, probability)
    high = max(min(high, 100.0), 0.0, probability)
    return low, high
