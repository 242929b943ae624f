# src/osmetrics/api/routers/metrics.py
"""
The scrape endpoint: runs one collection cycle and returns the exposition document.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from osmetrics.api.dependencies import (
    get_concurrency,
    get_connection_params,
    get_default_namespaces,
    get_pod_lister,
)
from osmetrics.core.collector import PodListerProtocol, collect_metrics
from osmetrics.exporters.prometheus_exporter import CONTENT_TYPE, serialize_metrics
from osmetrics.models.metrics import ConnectionParams

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve_namespaces(requested: Optional[List[str]], default: List[str]) -> List[str]:
    """Use the requested namespaces, or the configured defaults when none are given."""
    if requested:
        if any(not ns for ns in requested):
            raise HTTPException(status_code=422, detail="namespace must not be empty.")
        return requested
    if not default:
        raise HTTPException(status_code=400, detail="No namespace requested and no default namespace configured.")
    return default


@router.get("/metrics", response_class=Response)
async def metrics(
    namespace: Optional[List[str]] = Query(None, description="Namespace(s) to scrape; repeat for several."),
    default_namespaces: List[str] = Depends(get_default_namespaces),
    params: ConnectionParams = Depends(get_connection_params),
    concurrency: int = Depends(get_concurrency),
    pod_lister: PodListerProtocol = Depends(get_pod_lister),
):
    """Collect usage metrics for the namespaces and render them for Prometheus."""
    namespaces = _resolve_namespaces(namespace, default_namespaces)
    records = await collect_metrics(
        namespaces,
        params,
        concurrency=concurrency,
        log=logger,
        pod_lister=pod_lister,
    )
    return Response(content=serialize_metrics(records), media_type=CONTENT_TYPE)
