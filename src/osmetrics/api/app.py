# src/osmetrics/api/app.py
"""
FastAPI application factory for the osmetrics exporter.

Uses the factory pattern so tests can build the app and override its
dependencies without a cluster.
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from osmetrics import __version__
from osmetrics.api.routers import health, metrics
from osmetrics.core.config import config
from osmetrics.core.exceptions import (
    ConfigError,
    OsMetricsError,
    ParseError,
    PoolFailure,
)

logger = logging.getLogger(__name__)


def error_status(exc: OsMetricsError) -> int:
    """HTTP status for a failed collection: 500 for local faults, 502 for upstream ones."""
    if isinstance(exc, PoolFailure):
        exc = exc.error
    if isinstance(exc, (ParseError, ConfigError)) or not isinstance(exc, OsMetricsError):
        return 500
    return 502


async def handle_osmetrics_error(request: Request, exc: OsMetricsError) -> JSONResponse:
    logger.error(f"Collection failed for {request.url.path}: {exc}")
    return JSONResponse(status_code=error_status(exc), content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        A configured FastAPI application instance.
    """
    app = FastAPI(
        title="osmetrics",
        description="Per-container CPU/memory usage and limit/request rates in the Prometheus format.",
        version=__version__,
    )

    app.add_exception_handler(OsMetricsError, handle_osmetrics_error)

    app.include_router(health.router, tags=["Health"])
    app.include_router(metrics.router, tags=["Metrics"])

    return app


def main(host: str = None, port: int = None):
    """Entry point for the osmetrics-api console script."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    config.validate_instance()
    if config.OTEL_ENABLED:
        from osmetrics.core.telemetry import initialize_telemetry

        initialize_telemetry()

    logger.info("Using OS API %s", config.OS_API)
    app = create_app()
    uvicorn.run(app, host=host or config.API_HOST, port=port or config.API_PORT)
