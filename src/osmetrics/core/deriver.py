# src/osmetrics/core/deriver.py
"""
Turns one container's usage sample plus its declared resources into gauge
records: absolute memory/CPU usage and the usage-to-limit/request rates.
"""

import logging
import math
from typing import Callable, List, Optional, Protocol

from osmetrics.models.metrics import MetricRecord
from osmetrics.models.pods import ContainerSpec, PodDescriptor
from osmetrics.models.usage import ContainerUsage
from osmetrics.utils.k8s_utils import parse_cpu, parse_memory

logger = logging.getLogger(__name__)

MEMORY_USAGE = "osmetrics_pod_memory_usage_bytes"
CPU_USAGE = "osmetrics_pod_cpu_usage_millicores"
MEMORY_LIMITS_RATE = "osmetrics_pod_memory_usage_limits_rate"
MEMORY_REQUESTS_RATE = "osmetrics_pod_memory_usage_requests_rate"
CPU_LIMITS_RATE = "osmetrics_pod_cpu_usage_limits_rate"
CPU_REQUESTS_RATE = "osmetrics_pod_cpu_usage_requests_rate"

HELP_TEXTS = {
    MEMORY_USAGE: "Pod Memory Usage in bytes",
    CPU_USAGE: "Pod CPU Usage in millicores",
    MEMORY_LIMITS_RATE: "Pod Memory Usage to Memory Limits rate",
    MEMORY_REQUESTS_RATE: "Pod Memory Usage to Memory Requests rate",
    CPU_LIMITS_RATE: "Pod CPU Usage to CPU Limits rate",
    CPU_REQUESTS_RATE: "Pod CPU Usage to CPU Requests rate",
}


class WarningLogger(Protocol):
    """Anything with a logging-style warning(); logging.Logger qualifies."""

    def warning(self, msg, *args, **kwargs): ...


def _rate(usage: float, declared: float) -> float:
    if declared == 0:
        return math.nan if usage == 0 else math.inf
    return usage / declared


def _record(name: str, labels: dict, value: float, timestamp: Optional[float]) -> MetricRecord:
    return MetricRecord(
        name=name,
        labels=labels,
        type="gauge",
        help=HELP_TEXTS[name],
        value=value,
        timestamp=timestamp,
    )


def derive_container_metrics(
    pod: PodDescriptor,
    usage: ContainerUsage,
    spec: Optional[ContainerSpec],
    timestamp: Optional[float],
    log: WarningLogger = logger,
) -> List[MetricRecord]:
    """
    Builds the records for one container.

    Always returns the memory and CPU usage gauges. Each declared limit or
    request adds a rate gauge; a rate above 1 is reported through `log` and
    still emitted.

    Raises:
        ParseError: If a usage or declared quantity is malformed.
    """
    labels = {"pod": pod.name, "container": usage.name, "namespace": pod.namespace}
    memory_usage = parse_memory(usage.usage.memory)
    cpu_usage = parse_cpu(usage.usage.cpu)

    metrics = [
        _record(MEMORY_USAGE, labels, memory_usage, timestamp),
        _record(CPU_USAGE, labels, cpu_usage, timestamp),
    ]

    if spec is None:
        return metrics

    rate_sources = [
        (MEMORY_LIMITS_RATE, spec.resources.limits.memory, parse_memory, memory_usage),
        (MEMORY_REQUESTS_RATE, spec.resources.requests.memory, parse_memory, memory_usage),
        (CPU_LIMITS_RATE, spec.resources.limits.cpu, parse_cpu, cpu_usage),
        (CPU_REQUESTS_RATE, spec.resources.requests.cpu, parse_cpu, cpu_usage),
    ]
    for name, raw_declared, parse, used in rate_sources:
        if not raw_declared:
            continue
        metrics.append(_rate_record(name, raw_declared, parse, used, pod, usage.name, labels, timestamp, log))

    return metrics


def _rate_record(
    name: str,
    raw_declared: str,
    parse: Callable[[str], float],
    used: float,
    pod: PodDescriptor,
    container: str,
    labels: dict,
    timestamp: Optional[float],
    log: WarningLogger,
) -> MetricRecord:
    declared = parse(raw_declared)
    rate = _rate(used, declared)
    if rate > 1:
        log.warning(
            "%s is > 1 for pod %s container %s spec %s (%s) usage (%s) = %s",
            name,
            pod.name,
            container,
            raw_declared,
            declared,
            used,
            rate,
        )
    return _record(name, labels, rate, timestamp)
