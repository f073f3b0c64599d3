"""
FastAPI application for the career portal gateway.

Relays the public job board, the application form and the recruiter
dashboard to the upstream HRMS over GraphQL, and hosts the resume upload
and notification glue that sits beside it.
"""

import asyncio
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from . import __version__
from .auth import get_auth_context
from .config import get_settings, validate_config_on_startup
from .dependencies import shutdown_resources
from .errors import error_response, register_error_handlers
from .logger import get_logger, setup_logging
from .routes import (
    analytics_router,
    applications_router,
    candidates_router,
    graphql_router,
    health_router,
    jobs_router,
    uploads_router,
)

setup_logging(level=get_settings().log_level, format=get_settings().log_format)
logger = logging.getLogger(__name__)

# Validate configuration at startup
settings = validate_config_on_startup()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Career portal gateway {__version__} starting (environment={settings.environment})")
    yield
    logger.info("Shutting down, waiting for pending notifications")
    await shutdown_resources()


app = FastAPI(
    title="Career Portal Gateway",
    version=__version__,
    lifespan=lifespan,
    dependencies=[Depends(get_auth_context)],
)

register_error_handlers(app)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag the request with an id, bound it by the server timeout, log it."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
    request_logger = get_logger(__name__, request_id)

    started = time.perf_counter()
    try:
        response = await asyncio.wait_for(
            call_next(request), timeout=settings.request_timeout_seconds
        )
    except asyncio.TimeoutError:
        request_logger.error(f"{request.method} {request.url.path} timed out")
        response = error_response(504, "Request timed out")

    duration_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Request-ID"] = request_id
    request_logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f}ms)"
    )
    return response


app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=5)

# Added last so it wraps everything, including error responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Accept", "Authorization", "Content-Type", "X-CSRF-Token", "X-Request-ID"],
    expose_headers=["Link", "X-Total-Count", "X-Request-ID"],
    max_age=300,
)

app.include_router(health_router)
app.include_router(graphql_router)
app.include_router(jobs_router)
app.include_router(applications_router)
app.include_router(candidates_router)
app.include_router(analytics_router)
app.include_router(uploads_router)
