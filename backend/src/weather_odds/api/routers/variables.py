"""Weather variable registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from weather_odds.api.schemas import VariableResponse
from weather_odds.variables import (
    WEATHER_VARIABLES,
    Category,
    get_variable,
    get_variables_by_category,
)

router = APIRouter()


@router.get("", response_model=list[VariableResponse])
def list_variables(
    category: str | None = Query(None),
) -> list[VariableResponse]:
    """List supported variables, optionally filtered by category."""
    if category is None:
        variables = list(WEATHER_VARIABLES)
    else:
        try:
            variables = get_variables_by_category(category)
        except ValueError:
            valid = ", ".join(c.value for c in Category)
            raise HTTPException(400, f"category must be one of: {valid}")
    return [VariableResponse.from_variable(v) for v in variables]


@router.get("/{variable_id}", response_model=VariableResponse)
def get_variable_detail(variable_id: str) -> VariableResponse:
    variable = get_variable(variable_id)
    if variable is None:
        raise HTTPException(404, f"Variable {variable_id} not found")
    return VariableResponse.from_variable(variable)
