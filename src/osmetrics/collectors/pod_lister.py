# src/osmetrics/collectors/pod_lister.py
"""
Lists the pods of a namespace, with their lifecycle phase and the
declared resource limits/requests of every container.
"""

import logging
from typing import List, Optional

from kubernetes_asyncio.client.rest import ApiException

from osmetrics.core.exceptions import UpstreamError
from osmetrics.core.k8s_client import get_core_v1_api
from osmetrics.models.metrics import ConnectionParams
from osmetrics.models.pods import (
    ContainerResources,
    ContainerSpec,
    PodDescriptor,
    ResourceQuantities,
)

logger = logging.getLogger(__name__)


def _quantities(values: Optional[dict]) -> ResourceQuantities:
    values = values or {}
    return ResourceQuantities(memory=values.get("memory"), cpu=values.get("cpu"))


def pod_to_descriptor(pod) -> PodDescriptor:
    """Converts a kubernetes_asyncio V1Pod into a PodDescriptor."""
    containers = []
    if pod.spec and pod.spec.containers:
        for container in pod.spec.containers:
            resources = container.resources
            containers.append(
                ContainerSpec(
                    name=container.name,
                    resources=ContainerResources(
                        limits=_quantities(resources.limits if resources else None),
                        requests=_quantities(resources.requests if resources else None),
                    ),
                )
            )

    return PodDescriptor(
        name=pod.metadata.name,
        namespace=pod.metadata.namespace,
        phase=pod.status.phase if pod.status else None,
        containers=containers,
    )


class PodLister:
    """
    Connects to the K8s API to list the pods of a namespace.
    """

    def __init__(self, params: ConnectionParams):
        self.params = params
        self._api = None

    def _ensure_client(self):
        """Lazily initialize the Kubernetes Client."""
        if self._api is None:
            self._api = get_core_v1_api(self.params)
        return self._api

    async def list_pods(self, namespace: str) -> List[PodDescriptor]:
        """
        Fetches all pods of `namespace`.

        Raises:
            UpstreamError: If the Kubernetes API rejects the call.
        """
        api = self._ensure_client()
        try:
            pod_list = await api.list_namespaced_pod(namespace, _request_timeout=self.params.timeout)
        except ApiException as e:
            raise UpstreamError(
                f"Kubernetes API returned status code {e.status} listing pods in namespace {namespace}: {e.reason}",
                status_code=e.status,
            ) from e

        pods = [pod_to_descriptor(pod) for pod in pod_list.items]
        logger.debug(f"Listed {len(pods)} pods in namespace {namespace}.")
        return pods

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api:
            await self._api.api_client.close()
            logger.debug("PodLister Kubernetes client closed.")
            self._api = None
