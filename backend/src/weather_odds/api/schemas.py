"""Pydantic request/response models for the API.

Responses serialize with camelCase keys (``yearsAnalyzed``, ``yearlyData``...)
for the browser front-end; fields also accept their snake_case names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from weather_odds.config import (
    DEFAULT_DAY,
    DEFAULT_MONTH,
    DEFAULT_THRESHOLD,
    DEFAULT_VARIABLE,
    DEFAULT_WINDOW,
    MAX_WINDOW_DAYS,
)
from weather_odds.models import (
    AnalysisMetadata,
    AnalysisRequest,
    AnalysisResult,
    Percentiles,
    YearlyExtremum,
)
from weather_odds.variables import WeatherVariable


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisRequestBody(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    month: int = Field(DEFAULT_MONTH, ge=1, le=12)
    day: int = Field(DEFAULT_DAY, ge=1, le=31)
    window: int = Field(DEFAULT_WINDOW, ge=0, le=MAX_WINDOW_DAYS)
    threshold: float = DEFAULT_THRESHOLD
    variable: str = DEFAULT_VARIABLE

    def to_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            latitude=self.latitude,
            longitude=self.longitude,
            month=self.month,
            day=self.day,
            window=self.window,
            threshold=self.threshold,
            variable=self.variable,
        )


class YearlyPoint(CamelModel):
    year: int
    max_value: float


class PercentileValues(CamelModel):
    p25: float
    p50: float
    p75: float
    p90: float


class Location(CamelModel):
    latitude: float
    longitude: float


class DateWindowInfo(CamelModel):
    month: int
    day: int
    window_days: int


class DateRange(CamelModel):
    start_year: int
    end_year: int


class AnalysisMetadataResponse(CamelModel):
    location: Location
    date_window: DateWindowInfo
    threshold: float
    variable: str
    data_source: str
    api_url: str
    date_range: DateRange
    interval_method: str = "wald"


class AnalysisResponse(CamelModel):
    probability: float
    confidence_interval: tuple[float, float]
    years_analyzed: int
    percentiles: PercentileValues
    yearly_data: list[YearlyPoint]
    metadata: AnalysisMetadataResponse

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalysisResponse:
        meta = result.metadata
        return cls(
            probability=result.probability,
            confidence_interval=result.confidence_interval,
            years_analyzed=result.years_analyzed,
            percentiles=PercentileValues(
                p25=result.percentiles.p25,
                p50=result.percentiles.p50,
                p75=result.percentiles.p75,
                p90=result.percentiles.p90,
            ),
            yearly_data=[
                YearlyPoint(year=e.year, max_value=e.max_value) for e in result.yearly_data
            ],
            metadata=AnalysisMetadataResponse(
                location=Location(latitude=meta.latitude, longitude=meta.longitude),
                date_window=DateWindowInfo(
                    month=meta.month, day=meta.day, window_days=meta.window_days,
                ),
                threshold=meta.threshold,
                variable=meta.variable,
                data_source=meta.data_source,
                api_url=meta.api_url,
                date_range=DateRange(start_year=meta.start_year, end_year=meta.end_year),
                interval_method=meta.interval_method,
            ),
        )

    def to_result(self) -> AnalysisResult:
        meta = self.metadata
        return AnalysisResult(
            probability=self.probability,
            confidence_interval=(self.confidence_interval[0], self.confidence_interval[1]),
            years_analyzed=self.years_analyzed,
            percentiles=Percentiles(
                p25=self.percentiles.p25,
                p50=self.percentiles.p50,
                p75=self.percentiles.p75,
                p90=self.percentiles.p90,
            ),
            yearly_data=tuple(
                YearlyExtremum(year=p.year, max_value=p.max_value) for p in self.yearly_data
            ),
            metadata=AnalysisMetadata(
                latitude=meta.location.latitude,
                longitude=meta.location.longitude,
                month=meta.date_window.month,
                day=meta.date_window.day,
                window_days=meta.date_window.window_days,
                threshold=meta.threshold,
                variable=meta.variable,
                start_year=meta.date_range.start_year,
                end_year=meta.date_range.end_year,
                data_source=meta.data_source,
                api_url=meta.api_url,
                interval_method=meta.interval_method,
            ),
        )


class VariableResponse(BaseModel):
    id: str
    name: str
    power_parameter: str
    unit: str
    description: str
    category: str

    @classmethod
    def from_variable(cls, variable: WeatherVariable) -> VariableResponse:
        return cls(
            id=variable.id,
            name=variable.name,
            power_parameter=variable.power_parameter,
            unit=variable.unit,
            description=variable.description,
            category=variable.category.value,
        )


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict = {}
