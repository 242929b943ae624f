# src/osmetrics/collectors/usage_fetcher.py
"""
Fetches live per-container usage of a pod from the metrics.k8s.io API and
derives its gauge records.
"""

import logging
from typing import List
from urllib.parse import quote

import httpx

from osmetrics.core.deriver import WarningLogger, derive_container_metrics
from osmetrics.core.exceptions import UpstreamError, UpstreamShapeError
from osmetrics.models.metrics import ConnectionParams, MetricRecord
from osmetrics.models.pods import PodDescriptor
from osmetrics.models.usage import decode_pod_metrics
from osmetrics.utils.date_utils import to_epoch_seconds

logger = logging.getLogger(__name__)

METRICS_API_PATH = "/apis/metrics.k8s.io/v1beta1"


def pod_metrics_url(params: ConnectionParams, pod: PodDescriptor) -> str:
    return (
        f"{params.base_url}{METRICS_API_PATH}/namespaces/{quote(pod.namespace, safe='')}"
        f"/pods/{quote(pod.name, safe='')}"
    )


async def fetch_pod_usage(
    pod: PodDescriptor,
    params: ConnectionParams,
    http_client: httpx.AsyncClient,
    log: WarningLogger = logger,
) -> List[MetricRecord]:
    """
    Issues one PodMetrics request for `pod` and derives the records of all
    reported containers.

    Raises:
        UpstreamError: On a transport failure, a non-2xx status or a 204.
        UpstreamShapeError: If the body is not a valid PodMetrics object.
        ParseError: If a usage or declared quantity is malformed.
    """
    url = pod_metrics_url(params, pod)

    try:
        response = await http_client.get(url, timeout=params.timeout)
    except httpx.HTTPError as e:
        raise UpstreamError(f"Request to OS API failed for {url}: {e!r}", url=url) from e

    status = response.status_code
    if status < 200 or status > 299 or status == 204:
        raise UpstreamError(
            f"OS API returned status code {status} for {response.url}",
            url=str(response.url),
            status_code=status,
        )

    try:
        body = response.json()
    except ValueError as e:
        raise UpstreamShapeError(f"Expected OS API to return JSON for {url}: {e}") from e

    result = decode_pod_metrics(body)
    if not result.ok:
        raise UpstreamShapeError(f"{result.reason} from OS API for {url}")

    timestamp = to_epoch_seconds(result.metrics.timestamp)
    if timestamp is None:
        raise UpstreamShapeError(f"Invalid timestamp {result.metrics.timestamp!r} from OS API for {url}")

    metrics: List[MetricRecord] = []
    for container in result.metrics.containers:
        spec = pod.find_container(container.name)
        metrics.extend(derive_container_metrics(pod, container, spec, timestamp, log))

    logger.debug(f"Derived {len(metrics)} records for pod {pod}.")
    return metrics
