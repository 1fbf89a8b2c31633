"""Supported weather variables.

A fixed registry binding each variable id to its NASA POWER parameter code,
display unit and description. Built once at import; there is no mutation path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from weather_odds.errors import InvalidRequest


class Category(str, Enum):
    TEMPERATURE = "temperature"
    PRECIPITATION = "precipitation"
    WIND = "wind"
    ATMOSPHERE = "atmosphere"
    OTHER = "other"


@dataclass(frozen=True)
class WeatherVariable:
    id: str
    name: str
    power_parameter: str
    unit: str
    description: str
    category: Category


WEATHER_VARIABLES: tuple[WeatherVariable, ...] = (
    WeatherVariable(
        id="T2M_MAX",
        name="Maximum Temperature",
        power_parameter="T2M_MAX",
        unit="°C",
        description="Daily maximum temperature at 2 meters above ground",
        category=Category.TEMPERATURE,
    ),
    WeatherVariable(
        id="T2M_MIN",
        name="Minimum Temperature",
        power_parameter="T2M_MIN",
        unit="°C",
        description="Daily minimum temperature at 2 meters above ground",
        category=Category.TEMPERATURE,
    ),
    WeatherVariable(
        id="PRECTOTCORR",
        name="Precipitation",
        power_parameter="PRECTOTCORR",
        unit="mm/day",
        description="Precipitation (bias-corrected)",
        category=Category.PRECIPITATION,
    ),
    WeatherVariable(
        id="WS2M",
        name="Wind Speed",
        power_parameter="WS2M",
        unit="m/s",
        description="Wind speed at 2 meters above ground",
        category=Category.WIND,
    ),
    WeatherVariable(
        id="RH2M",
        name="Relative Humidity",
        power_parameter="RH2M",
        unit="%",
        description="Relative humidity at 2 meters above ground",
        category=Category.ATMOSPHERE,
    ),
    WeatherVariable(
        id="CLOUD_AMT",
        name="Cloud Cover",
        power_parameter="CLOUD_AMT",
        unit="%",
        description="Total cloud amount",
        category=Category.ATMOSPHERE,
    ),
)

_BY_ID = MappingProxyType({v.id: v for v in WEATHER_VARIABLES})


def get_variable(variable_id: str) -> WeatherVariable | None:
    """Look up a variable by id. Returns None if unknown."""
    return _BY_ID.get(variable_id)


def get_variables_by_category(category: Category | str) -> list[WeatherVariable]:
    """All variables in a category, in registry order."""
    category = Category(category)
    return [v for v in WEATHER_VARIABLES if v.category == category]


def require_variable(variable_id: str) -> WeatherVariable:
    """Like get_variable(), but raise InvalidRequest for unknown ids."""
    variable = get_variable(variable_id)
    if variable is None:
        raise InvalidRequest(
            f"Unknown variable {variable_id!r}",
            details={"supported": sorted(_BY_ID)},
        )
    return variable
