"""Result export: flat CSV and structured JSON.

CSV rounds values to 2 decimals and coordinates to 4; this is presentation
only. JSON keeps full float precision and parses back into an equal result.
"""

from __future__ import annotations

import io

import pandas as pd

from weather_odds.api.schemas import AnalysisResponse
from weather_odds.models import AnalysisResult
from weather_odds.variables import WeatherVariable, get_variable


def result_to_json(result: AnalysisResult, indent: int | None = 2) -> str:
    return AnalysisResponse.from_result(result).model_dump_json(by_alias=True, indent=indent)


def result_from_json(text: str | bytes) -> AnalysisResult:
    return AnalysisResponse.model_validate_json(text).to_result()


def value_column_label(variable_id: str, variable: WeatherVariable | None = None) -> str:
    """Header for the yearly value column, e.g. "Maximum Temperature (°C)"."""
    variable = variable or get_variable(variable_id)
    if variable is None:
        return variable_id
    return f"{variable.name} ({variable.unit})"


def yearly_dataframe(result: AnalysisResult, variable: WeatherVariable | None = None) -> pd.DataFrame:
    label = value_column_label(result.metadata.variable, variable)
    return pd.DataFrame({
        "Year": [e.year for e in result.yearly_data],
        label: [e.max_value for e in result.yearly_data],
    })


def metadata_rows(result: AnalysisResult) -> list[tuple[str, str]]:
    meta = result.metadata
    low, high = result.confidence_interval
    return [
        ("Latitude", f"{meta.latitude:.4f}"),
        ("Longitude", f"{meta.longitude:.4f}"),
        ("Month", str(meta.month)),
        ("Day", str(meta.day)),
        ("Window (days)", str(meta.window_days)),
        ("Threshold", f"{meta.threshold:.2f}"),
        ("Variable", meta.variable),
        ("Probability (%)", f"{result.probability:.2f}"),
        ("95% CI Low (%)", f"{low:.2f}"),
        ("95% CI High (%)", f"{high:.2f}"),
        ("Interval Method", meta.interval_method),
        ("Years Analyzed", str(result.years_analyzed)),
        ("P25", f"{result.percentiles.p25:.2f}"),
        ("P50", f"{result.percentiles.p50:.2f}"),
        ("P75", f"{result.percentiles.p75:.2f}"),
        ("P90", f"{result.percentiles.p90:.2f}"),
        ("Data Source", meta.data_source),
        ("Source URL", meta.api_url),
        ("Date Range", f"{meta.start_year}-{meta.end_year}"),
    ]


def result_to_csv(result: AnalysisResult, variable: WeatherVariable | None = None) -> str:
    """Year/value rows, a blank line, then a Field/Value metadata footer."""
    buf = io.StringIO()
    yearly_dataframe(result, variable).to_csv(
        buf, index=False, float_format="%.2f", lineterminator="\n",
    )
    buf.write("\n")
    footer = pd.DataFrame(metadata_rows(result), columns=["Field", "Value"])
    footer.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()
