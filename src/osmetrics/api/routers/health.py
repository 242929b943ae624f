# src/osmetrics/api/routers/health.py
"""
Liveness and version endpoints.
"""

from fastapi import APIRouter

from osmetrics import __version__
from osmetrics.api.schemas import HealthResponse, VersionResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok")


@router.get("/version", response_model=VersionResponse)
async def version():
    """Return the current application version."""
    return VersionResponse(version=__version__)
