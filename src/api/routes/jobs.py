"""Job submission and overview endpoints (JSON)."""

import asyncio
import sqlite3
import time
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_db, require_api_user
from api.logging import RequestLog, log_request
from api.models.responses import (
    ErrorCodes,
    IntervalResponse,
    JobSubmission,
    SubmissionResponse,
)
from core.database import PersistenceError
from core.intervals import FormatError
from models.jobs import MonthView
from services.overview import build_overview
from services.submissions import SubmissionResult, submit_job

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def parse_job_date(date_str: str | None) -> str:
    """Validate a YYYY-MM-DD job date and return it normalized."""
    try:
        return date.fromisoformat((date_str or "").strip()).isoformat()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid date format",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Expected format: YYYY-MM-DD"],
            },
        )


def parse_month(month_str: str | None) -> str | None:
    """Validate an optional YYYY-MM month filter."""
    if not month_str:
        return None
    try:
        return date.fromisoformat(f"{month_str.strip()}-01").strftime("%Y-%m")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid month format",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Expected format: YYYY-MM"],
            },
        )


def record_submission(
    request: Request,
    conn: sqlite3.Connection,
    username: str,
    submission: JobSubmission,
) -> SubmissionResult:
    """
    Run a submission and log it.

    Shared by the HTML form and the JSON endpoint.

    Raises:
        HTTPException: 400 bad date, 422 malformed interval, 500 storage failure
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
        username=username,
    )

    try:
        job_date = parse_job_date(submission.date)

        result = submit_job(
            conn,
            username=username,
            job_date=job_date,
            intervals_text=submission.intervals,
            house_number=submission.house_number,
            extras=submission.extras,
            overtime=submission.overtime,
            travel_time=submission.travel_time,
        )

        request_log.status_code = 200
        request_log.intervals_parsed = len(result.intervals)
        request_log.total_hours = result.total_hours
        for interval in result.intervals:
            request_log.details.append(("interval_saved", f"{interval.start}-{interval.end}"))
        return result

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(e.detail)
        raise

    except FormatError as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = str(e)
        request_log.details.append(("validation_error", e.token))

        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Interval validation failed",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": [e.message_de],
            },
        )

    except PersistenceError as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.DATABASE_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Could not save job",
                "code": ErrorCodes.DATABASE_ERROR,
                "details": [str(e)],
            },
        )

    except Exception as e:
        # Unexpected errors
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        # Always log the request
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass


@router.post("/jobs", response_model=SubmissionResponse)
async def create_job(
    request: Request,
    submission: JobSubmission,
    username: str = Depends(require_api_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Save one job with its intervals and return the parsed result."""
    result = await asyncio.to_thread(record_submission, request, conn, username, submission)
    return SubmissionResponse(
        job_id=result.job_id,
        intervals=[
            IntervalResponse(start=i.start, end=i.end, duration=i.duration)
            for i in result.intervals
        ],
        total_hours=result.total_hours,
    )


@router.get("/months", response_model=list[MonthView])
async def list_months(
    month: str | None = None,
    username: str = Depends(require_api_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    """All jobs of the logged-in user, grouped by month."""
    try:
        return await asyncio.to_thread(build_overview, conn, username, parse_month(month))
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Could not load jobs",
                "code": ErrorCodes.DATABASE_ERROR,
                "details": [str(e)],
            },
        )
