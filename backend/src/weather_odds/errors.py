"""Error taxonomy for a single analysis request.

Every error here is terminal for the request: no partial results are returned.

    AnalysisError (base)
    ├── InvalidRequest            bad input, raised before any upstream call
    ├── UpstreamUnavailable       data source unreachable or non-2xx
    ├── MalformedUpstreamPayload  response lacks the expected variable/date structure
    └── InsufficientData          no year has a valid in-window observation
"""

from __future__ import annotations

from typing import Any


class AnalysisError(Exception):
    """Base class for all analysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def error_code(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidRequest(AnalysisError):
    pass


class UpstreamUnavailable(AnalysisError):
    """The historical data source failed or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if status_code is not None:
            details["upstream_status"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class MalformedUpstreamPayload(AnalysisError):
    pass


class InsufficientData(AnalysisError):
    pass
