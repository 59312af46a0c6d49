"""FastAPI dependencies for authentication and shared resources."""

import sqlite3
from collections.abc import Iterator

from fastapi import HTTPException, Request, status
from fastapi.templating import Jinja2Templates

from api.models.responses import ErrorCodes
from core.config import TEMPLATES_DIR
from core.database import get_connection

SESSION_USER_KEY = "username"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class LoginRequired(Exception):
    """Raised by HTML routes when nobody is logged in; answered with a redirect."""


def get_db() -> Iterator[sqlite3.Connection]:
    """Database connection for the duration of one request."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def get_session_user(request: Request) -> str | None:
    """Username stored in the session cookie, if any."""
    return request.session.get(SESSION_USER_KEY)


def require_user(request: Request) -> str:
    """
    Logged-in username for HTML pages.

    Raises:
        LoginRequired: redirects to the login page
    """
    username = get_session_user(request)
    if not username:
        raise LoginRequired()
    return username


def require_api_user(request: Request) -> str:
    """
    Logged-in username for JSON endpoints.

    Raises:
        HTTPException: 401 if there is no session
    """
    username = get_session_user(request)
    if not username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Not logged in",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )
    return username
