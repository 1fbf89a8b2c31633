"""Tests for request validation."""

import math

import pytest

from weather_odds.errors import InvalidRequest
from weather_odds.models import AnalysisRequest

VALID = dict(
    latitude=43.65,
    longitude=-79.38,
    month=7,
    day=15,
    window=3,
    threshold=25.0,
    variable="T2M_MAX",
)


def _request(**overrides) -> AnalysisRequest:
    return AnalysisRequest(**{**VALID, **overrides})


class TestAnalysisRequest:
    def test_valid(self):
        request = _request()
        assert request.month == 7
        assert request.variable == "T2M_MAX"

    def test_default_variable(self):
        kwargs = dict(VALID)
        del kwargs["variable"]
        assert AnalysisRequest(**kwargs).variable == "T2M_MAX"

    @pytest.mark.parametrize("lat", [-90.0, 0.0, 90.0])
    def test_latitude_bounds_inclusive(self, lat):
        assert _request(latitude=lat).latitude == lat

    @pytest.mark.parametrize("lat", [-90.01, 91.0, math.nan, math.inf])
    def test_bad_latitude(self, lat):
        with pytest.raises(InvalidRequest):
            _request(latitude=lat)

    @pytest.mark.parametrize("lon", [-180.5, 180.01, math.nan])
    def test_bad_longitude(self, lon):
        with pytest.raises(InvalidRequest):
            _request(longitude=lon)

    def test_negative_threshold_allowed(self):
        assert _request(threshold=-40.0).threshold == -40.0

    def test_non_finite_threshold(self):
        with pytest.raises(InvalidRequest):
            _request(threshold=math.inf)

    @pytest.mark.parametrize("month", [0, 13])
    def test_bad_month(self, month):
        with pytest.raises(InvalidRequest):
            _request(month=month)

    @pytest.mark.parametrize("month,day", [(2, 30), (4, 31), (6, 31), (1, 32), (3, 0)])
    def test_day_not_in_month(self, month, day):
        with pytest.raises(InvalidRequest) as exc_info:
            _request(month=month, day=day)
        assert exc_info.value.details == {"day": day}

    def test_feb_29_is_valid(self):
        assert _request(month=2, day=29).day == 29

    @pytest.mark.parametrize("window", [0, 30])
    def test_window_bounds_inclusive(self, window):
        assert _request(window=window).window == window

    @pytest.mark.parametrize("window", [-1, 31])
    def test_bad_window(self, window):
        with pytest.raises(InvalidRequest):
            _request(window=window)

    def test_non_integer_day(self):
        with pytest.raises(InvalidRequest):
            _request(day=15.5)

    def test_bool_is_not_an_integer(self):
        with pytest.raises(InvalidRequest):
            _request(window=True)

    def test_unknown_variable(self):
        with pytest.raises(InvalidRequest):
            _request(variable="SNOW")

    def test_frozen(self):
        request = _request()
        with pytest.raises(AttributeError):
            request.threshold = 30.0
