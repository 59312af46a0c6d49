"""FastAPI application entry point."""

import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from api.dependencies import LoginRequired, templates
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import auth_router, health_router, jobs_router, pages_router
from core.config import API_DEBUG, API_VERSION, SESSION_MAX_AGE, SESSION_SECRET, USERS
from core.database import PersistenceError, get_connection, init_schema


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: make sure the tables exist
    conn = get_connection()
    try:
        init_schema(conn)
    finally:
        conn.close()

    if not USERS:
        warnings.warn("No users configured (set TIMELOG_USER_<NAME>=<password>)")

    yield


app = FastAPI(
    title="Arbeitszeiten",
    description="Personal work-hours log: free-text intervals per job, monthly totals",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=SESSION_SECRET,
    max_age=SESSION_MAX_AGE,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    """Send anonymous visitors of HTML pages to the login form."""
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    """Database failures on HTML pages."""
    return templates.TemplateResponse(
        request,
        "message.html",
        {
            "title": "Fehler beim Laden",
            "lines": [str(exc)],
            "back_url": "/dashboard",
            "back_label": "Zurück zum Dashboard",
        },
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(pages_router)
app.include_router(jobs_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
