"""API Pydantic models."""

from .responses import (
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    IntervalResponse,
    JobSubmission,
    SubmissionResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "IntervalResponse",
    "JobSubmission",
    "SubmissionResponse",
]
