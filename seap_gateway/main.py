"""
SEAP Gateway - Main Application Entry Point

A short-term loan eligibility service: operators submit an applicant and
receive an approved, rejected or pending result with a per-stage audit
trail and the maximum approvable amount.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from seap_gateway import __version__
from seap_gateway.core.config import resolve_bureau_token, settings
from seap_gateway.core.logging import setup_logging
from seap_gateway.core.metrics import get_metrics, get_metrics_content_type
from seap_gateway.presentation.api import api_router
from seap_gateway.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Sets up logging and reports whether the credit bureau runs live or
    simulated.
    """
    setup_logging()

    logger = structlog.get_logger(__name__)
    logger.info(
        "application_started",
        version=__version__,
        bureau_mode="live" if resolve_bureau_token() else "simulated",
        history_capacity=settings.history_capacity,
    )

    yield

    logger.info("application_stopped")


app = FastAPI(
    title="SEAP Gateway",
    description="Short-term loan eligibility service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


if settings.metrics_enabled:

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(
            content=get_metrics(),
            media_type=get_metrics_content_type(),
        )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "seap_gateway.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
