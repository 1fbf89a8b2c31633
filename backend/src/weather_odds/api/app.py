"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_odds.config import CORS_ORIGINS
from weather_odds.errors import (
    AnalysisError,
    InsufficientData,
    InvalidRequest,
    MalformedUpstreamPayload,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidRequest: 400,
    InsufficientData: 404,
    UpstreamUnavailable: 502,
    MalformedUpstreamPayload: 502,
}


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    status = ERROR_STATUS.get(type(exc), 500)
    logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Weather Odds API",
        version="0.1.0",
        description="Historical probability of weather exceeding a threshold",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AnalysisError, analysis_error_handler)

    from weather_odds.api.routers import analysis, variables

    app.include_router(analysis.router, prefix="/probability", tags=["analysis"])
    app.include_router(variables.router, prefix="/variables", tags=["variables"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
