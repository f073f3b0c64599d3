"""
Gateway route modules.

Each module handles one area of the REST surface and exposes a `router`.
"""

from .analytics import router as analytics_router
from .applications import router as applications_router
from .candidates import router as candidates_router
from .graphql_proxy import router as graphql_router
from .health import router as health_router
from .jobs import router as jobs_router
from .uploads import router as uploads_router

__all__ = [
    "analytics_router",
    "applications_router",
    "candidates_router",
    "graphql_router",
    "health_router",
    "jobs_router",
    "uploads_router",
]
