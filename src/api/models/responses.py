"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    database_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class JobSubmission(BaseModel):
    """JSON body for a new job."""

    date: str  # YYYY-MM-DD
    intervals: str = ""
    house_number: str | None = None
    extras: str | None = None
    overtime: str | None = None
    travel_time: str | None = None


class IntervalResponse(BaseModel):
    """One parsed interval."""

    start: str
    end: str
    duration: float


class SubmissionResponse(BaseModel):
    """Result of a saved job."""

    job_id: int
    intervals: list[IntervalResponse]
    total_hours: float


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
