# src/osmetrics/api/dependencies.py
"""
FastAPI dependency injection functions.

These functions provide the static connection settings and the pod lister
to API route handlers via FastAPI's Depends() mechanism, so tests can
override them without a cluster.
"""

import logging
from typing import AsyncIterator, List

from fastapi import Depends

from osmetrics.collectors.pod_lister import PodLister
from osmetrics.core.config import config
from osmetrics.models.metrics import ConnectionParams

logger = logging.getLogger(__name__)


def get_connection_params() -> ConnectionParams:
    return config.connection_params()


def get_concurrency() -> int:
    return config.CONCURRENCY


def get_default_namespaces() -> List[str]:
    return config.DEFAULT_NAMESPACE


async def get_pod_lister(params: ConnectionParams = Depends(get_connection_params)) -> AsyncIterator[PodLister]:
    """Provides a PodLister for the duration of one request."""
    lister = PodLister(params)
    try:
        yield lister
    finally:
        await lister.close()
