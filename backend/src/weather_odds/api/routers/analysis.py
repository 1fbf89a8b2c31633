"""Exceedance probability endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from weather_odds.api.deps import get_observation_source
from weather_odds.api.schemas import AnalysisRequestBody, AnalysisResponse
from weather_odds.compute.analysis import ObservationSource, run_analysis
from weather_odds.export import result_to_csv

router = APIRouter()


@router.post("", response_model=AnalysisResponse)
def analyze(
    body: AnalysisRequestBody,
    interval: str = Query("wald", pattern="^(wald|wilson)$"),
    fetch: ObservationSource = Depends(get_observation_source),
) -> AnalysisResponse:
    """Probability that the in-window yearly maximum exceeds the threshold.

    Orchestrates: validate -> fetch history -> yearly maxima -> statistics.
    """
    result = run_analysis(body.to_request(), fetch=fetch, interval_method=interval)
    return AnalysisResponse.from_result(result)


@router.post("/csv", response_class=Response)
def analyze_csv(
    body: AnalysisRequestBody,
    interval: str = Query("wald", pattern="^(wald|wilson)$"),
    fetch: ObservationSource = Depends(get_observation_source),
) -> Response:
    """Same analysis, returned as a CSV download."""
    result = run_analysis(body.to_request(), fetch=fetch, interval_method=interval)
    filename = f"weather-analysis-{date.today().isoformat()}.csv"
    return Response(
        content=result_to_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
