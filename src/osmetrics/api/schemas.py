"""
JSON bodies of the exporter's service endpoints. The metrics endpoint itself
answers in the exposition format and has no schema here.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always 'ok' while the process serves requests.")


class VersionResponse(BaseModel):
    """Installed osmetrics release."""

    version: str = Field(..., description="Package version, e.g. '1.0.0'.")
