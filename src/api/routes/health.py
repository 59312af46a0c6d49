"""Health check endpoint."""

import sqlite3
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION
from core.database import PersistenceError, get_connection

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if the database cannot be queried.
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        conn = get_connection()
        try:
            conn.execute("SELECT 1 FROM jobs LIMIT 1").fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(str(e)) from e
        finally:
            conn.close()
    except PersistenceError as e:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                database_available=False,
                timestamp=timestamp,
                error=f"Database not available: {e}",
            ).model_dump(),
        )

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        database_available=True,
        timestamp=timestamp,
    )
