# src/osmetrics/models/usage.py
"""
Pydantic models for the PodMetrics objects served by the
metrics.k8s.io/v1beta1 API, and the typed decode step that validates them.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

POD_METRICS_KIND = "PodMetrics"


class ContainerUsageValues(BaseModel):
    memory: str
    cpu: str


class ContainerUsage(BaseModel):
    """Usage reported for one container."""

    name: str
    usage: ContainerUsageValues


class PodMetrics(BaseModel):
    """A decoded PodMetrics response body."""

    kind: str
    timestamp: str
    containers: List[ContainerUsage]


class DecodeResult(BaseModel):
    """
    Outcome of decode_pod_metrics: either `metrics` is set, or `reason`
    names the shape violation.
    """

    metrics: Optional[PodMetrics] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.metrics is not None


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, list):
        return "an array"
    return type(value).__name__


def decode_pod_metrics(body: Any) -> DecodeResult:
    """Validates a decoded JSON body and turns it into a PodMetrics."""
    if not isinstance(body, dict):
        return DecodeResult(reason=f"Expected an object but got {_describe(body)}")

    kind = body.get("kind")
    if kind != POD_METRICS_KIND:
        return DecodeResult(reason=f"Expected a {POD_METRICS_KIND} but got {kind}")

    try:
        return DecodeResult(metrics=PodMetrics.model_validate(body))
    except ValidationError as e:
        return DecodeResult(reason=f"Malformed {POD_METRICS_KIND}: {e.error_count()} validation error(s): {e}")
