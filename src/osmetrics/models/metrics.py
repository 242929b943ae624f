# src/osmetrics/models/metrics.py
"""
Pydantic models for the gauge records produced by the exporter and for the
connection parameters shared by every upstream call of a collection cycle.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT = 10.0


class MetricRecord(BaseModel):
    """
    A single gauge sample. Many records share a name and differ by labels
    (pod, container, namespace).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Metric name, e.g. osmetrics_pod_memory_usage_bytes.")
    labels: Dict[str, str] = Field(default_factory=dict, description="Label set of the sample.")
    type: str = Field("gauge", description="Prometheus metric type.")
    help: str = Field("", description="HELP text, fixed per metric name.")
    value: float
    timestamp: Optional[float] = Field(None, description="Sample time in seconds since the epoch.")


class ConnectionParams(BaseModel):
    """
    Static connection settings for the cluster API. Read-only for the
    lifetime of the process.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    os_api: str = Field(..., description="Base URL of the cluster API.")
    access_token: str = Field(..., description="Bearer token used for every call.")
    verify: Union[bool, str] = Field(True, description="TLS verification flag or CA bundle path.")
    timeout: float = Field(DEFAULT_TIMEOUT, description="Per-call timeout in seconds.")
    # Optional httpx transport override (custom TLS setup, tests, proxies).
    transport: Optional[Any] = None

    @property
    def base_url(self) -> str:
        return self.os_api.rstrip("/")
