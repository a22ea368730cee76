"""Error taxonomy for the home feed.

Every error the feed raises on purpose derives from :class:`FeedError` and
carries the HTTP status the API layer should answer with.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    INVALID_COORDINATES = "INVALID_COORDINATES"
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
    ENRICHMENT_FAILURE = "ENRICHMENT_FAILURE"
    TIMEOUT = "TIMEOUT"


class FeedError(Exception):
    code: ErrorCode = ErrorCode.DEPENDENCY_FAILURE
    http_status: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def model_dump(self) -> dict:
        return {"success": False, "message": self.message, "code": self.code.value}


class FeedValidationError(FeedError):
    """Bad or missing query input. Raised before any I/O happens."""

    code = ErrorCode.INVALID_COORDINATES
    http_status = 400


class DependencyFailure(FeedError):
    """Venue provider, catalog store or record builder failed."""

    code = ErrorCode.DEPENDENCY_FAILURE
    http_status = 502


class EnrichmentFailure(FeedError):
    """A single favorite lookup failed. Recoverable, never reaches the client."""

    code = ErrorCode.ENRICHMENT_FAILURE
    http_status = 500


class FeedTimeout(FeedError):
    code = ErrorCode.TIMEOUT
    http_status = 504
