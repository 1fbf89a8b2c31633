"""Tests for exceedance statistics."""

import math

import pytest

from weather_odds.compute.statistics import (
    compute_percentiles,
    confidence_interval,
    exceedance_probability,
    nearest_rank_percentile,
    summarize,
    wald_interval,
    wilson_interval,
)
from weather_odds.errors import InsufficientData, InvalidRequest
from weather_odds.models import YearlyExtremum


def _extremes(values, start_year: int = 1981) -> list[YearlyExtremum]:
    return [YearlyExtremum(year=start_year + i, max_value=v) for i, v in enumerate(values)]


class TestExceedanceProbability:
    def test_basic(self):
        probability, exceeding = exceedance_probability([10.0, 20.0, 30.0, 40.0], 25.0)
        assert probability == 50.0
        assert exceeding == 2

    def test_equal_to_threshold_does_not_exceed(self):
        probability, exceeding = exceedance_probability([25.0, 25.0, 25.1], 25.0)
        assert exceeding == 1
        assert probability == pytest.approx(100 / 3)

    def test_none_exceed(self):
        assert exceedance_probability([1.0, 2.0], 5.0) == (0.0, 0)

    def test_all_exceed(self):
        assert exceedance_probability([6.0, 7.0], 5.0) == (100.0, 2)

    def test_empty_raises(self):
        with pytest.raises(InsufficientData):
            exceedance_probability([], 5.0)


class TestConfidenceInterval:
    def test_wald_formula(self):
        low, high = wald_interval(50.0, 100)
        margin = 1.96 * math.sqrt(0.25 / 100) * 100
        assert low == pytest.approx(50.0 - margin)
        assert high == pytest.approx(50.0 + margin)

    def test_wald_clamps_to_bounds(self):
        low, high = wald_interval(95.0, 5)
        assert high == 100.0
        assert low < 95.0
        low, high = wald_interval(5.0, 5)
        assert low == 0.0

    def test_wald_degenerate_at_extremes(self):
        assert wald_interval(0.0, 43) == (0.0, 0.0)
        assert wald_interval(100.0, 43) == (100.0, 100.0)

    @pytest.mark.parametrize("probability", [0.0, 2.5, 33.3, 50.0, 97.0, 100.0])
    @pytest.mark.parametrize("n", [1, 5, 43])
    def test_containment(self, probability, n):
        for interval_fn in (wald_interval, wilson_interval):
            low, high = interval_fn(probability, n)
            assert 0.0 <= low <= probability <= high <= 100.0

    def test_wilson_not_degenerate_at_zero(self):
        low, high = wilson_interval(0.0, 43)
        assert low == 0.0
        assert high > 0.0

    def test_unknown_method(self):
        with pytest.raises(InvalidRequest):
            confidence_interval(50.0, 10, method="bootstrap")

    def test_zero_n_raises(self):
        with pytest.raises(InsufficientData):
            confidence_interval(50.0, 0)


class TestNearestRankPercentile:
    def test_n42_q25_is_11th_smallest(self):
        values = list(range(1, 43))  # 1..42
        assert nearest_rank_percentile(values, 25) == 11

    def test_single_value(self):
        for q in (25, 50, 75, 90):
            assert nearest_rank_percentile([7.5], q) == 7.5

    def test_known_ranks(self):
        values = [float(v) for v in range(1, 11)]  # 1..10
        assert nearest_rank_percentile(values, 25) == 3.0  # ceil(2.5)-1 = 2
        assert nearest_rank_percentile(values, 50) == 5.0  # ceil(5)-1 = 4
        assert nearest_rank_percentile(values, 75) == 8.0  # ceil(7.5)-1 = 7
        assert nearest_rank_percentile(values, 90) == 9.0  # ceil(9)-1 = 8

    def test_no_interpolation(self):
        assert nearest_rank_percentile([1.0, 100.0], 50) == 1.0

    def test_empty_raises(self):
        with pytest.raises(InsufficientData):
            nearest_rank_percentile([], 50)

    def test_compute_percentiles_sorts_first(self):
        result = compute_percentiles([9.0, 1.0, 5.0, 3.0, 7.0])
        assert result == {"p25": 3.0, "p50": 5.0, "p75": 7.0, "p90": 9.0}


class TestSummarize:
    def test_alternating_scenario(self):
        # 1981-2023: odd years 30.0, even years 20.0 -> 22 odd years
        extremes = [
            YearlyExtremum(year=y, max_value=30.0 if y % 2 else 20.0)
            for y in range(1981, 2024)
        ]
        summary = summarize(extremes, 25.0)

        assert summary.years_analyzed == 43
        assert summary.exceeding_years == 22
        assert summary.probability == 100 * 22 / 43
        # 21 values of 20.0 then 22 of 30.0; median index ceil(21.5)-1 = 21
        assert summary.percentiles.p50 == 30.0
        # p25 index ceil(10.75)-1 = 10
        assert summary.percentiles.p25 == 20.0
        assert summary.percentiles.p90 == 30.0

    def test_percentile_monotonicity(self):
        summary = summarize(_extremes([5.0, -1.0, 12.5, 3.3, 8.8, 0.0, 7.1]), 4.0)
        p = summary.percentiles
        assert p.p25 <= p.p50 <= p.p75 <= p.p90

    def test_interval_contains_probability(self):
        summary = summarize(_extremes([1.0, 2.0, 3.0, 4.0, 5.0]), 3.5)
        low, high = summary.confidence_interval
        assert 0.0 <= low <= summary.probability <= high <= 100.0

    def test_wilson_method(self):
        extremes = _extremes([1.0, 2.0, 3.0, 4.0, 5.0])
        wald = summarize(extremes, 3.5, interval_method="wald")
        wilson = summarize(extremes, 3.5, interval_method="wilson")
        assert wald.probability == wilson.probability
        assert wald.confidence_interval != wilson.confidence_interval

    def test_empty_raises_insufficient_data(self):
        with pytest.raises(InsufficientData) as exc_info:
            summarize([], 25.0)
        assert exc_info.value.details["years_analyzed"] == 0
