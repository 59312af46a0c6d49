"""API route modules."""

from .auth import router as auth_router
from .health import router as health_router
from .jobs import router as jobs_router
from .pages import router as pages_router

__all__ = ["auth_router", "health_router", "jobs_router", "pages_router"]
