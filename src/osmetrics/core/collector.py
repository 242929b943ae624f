# src/osmetrics/core/collector.py
"""
Orchestrates one collection cycle: list pods per namespace, drop terminal
pods, fetch usage for the rest under a bounded pool and flatten the records.
"""

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

import httpx

from osmetrics.collectors.pod_lister import PodLister
from osmetrics.collectors.usage_fetcher import fetch_pod_usage
from osmetrics.core.deriver import WarningLogger
from osmetrics.core.pool import DEFAULT_CONCURRENCY, run_pool
from osmetrics.core.telemetry import tracer
from osmetrics.models.metrics import ConnectionParams, MetricRecord
from osmetrics.models.pods import PodDescriptor
from osmetrics.utils.http_client import get_async_http_client

logger = logging.getLogger(__name__)


class PodListerProtocol(Protocol):
    async def list_pods(self, namespace: str) -> List[PodDescriptor]: ...


async def collect_metrics(
    namespaces: Sequence[str],
    params: ConnectionParams,
    concurrency: int = DEFAULT_CONCURRENCY,
    log: WarningLogger = logger,
    pod_lister: Optional[PodListerProtocol] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> List[MetricRecord]:
    """
    Collects usage records for all non-terminal pods of `namespaces`.

    Listing failures and the first pod fetch failure propagate unchanged;
    nothing is retried and no partial result is returned.
    """
    with tracer.start_as_current_span("collect_metrics") as span:
        span.set_attribute("osmetrics.namespaces", list(namespaces))

        owned_lister = pod_lister is None
        lister = pod_lister if pod_lister is not None else PodLister(params)
        try:
            # Let every listing settle before the shared client is closed.
            listings = await asyncio.gather(*(lister.list_pods(ns) for ns in namespaces), return_exceptions=True)
        finally:
            if owned_lister:
                await lister.close()

        pods_per_namespace = []
        for listing in listings:
            if isinstance(listing, BaseException):
                raise listing
            pods_per_namespace.append(listing)

        all_pods = [pod for pods in pods_per_namespace for pod in pods if not pod.is_terminal]
        span.set_attribute("osmetrics.pods", len(all_pods))
        logger.debug(f"Collecting usage for {len(all_pods)} pods in namespaces {list(namespaces)}.")

        owned_client = http_client is None
        client = http_client if http_client is not None else get_async_http_client(params)
        try:
            per_pod = await run_pool(
                all_pods,
                lambda pod: fetch_pod_usage(pod, params, client, log),
                concurrency,
            )
        finally:
            if owned_client:
                await client.aclose()

        metrics = [record for records in per_pod for record in records]
        span.set_attribute("osmetrics.records", len(metrics))
        return metrics
