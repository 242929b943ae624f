# tests/conftest.py

import pytest

from osmetrics.models.metrics import ConnectionParams
from osmetrics.models.pods import (
    ContainerResources,
    ContainerSpec,
    PodDescriptor,
    ResourceQuantities,
)

OS_API = "https://os-api.test:6443"
SAMPLE_TIMESTAMP = "2024-01-01T00:00:00Z"
SAMPLE_EPOCH = 1704067200


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to mock environment variables for the config module.

    This fixture runs automatically for every test (`autouse=True`) so the
    configuration is predictable and isolated from the actual environment.
    """
    monkeypatch.setenv("OS_API", OS_API)
    monkeypatch.setenv("ACCESS_TOKEN", "test-token")
    monkeypatch.setenv("DEFAULT_NAMESPACE", "default")
    monkeypatch.setenv("VERIFY_TLS", "false")
    monkeypatch.delenv("CONCURRENCY", raising=False)
    monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)


@pytest.fixture
def connection_params():
    return ConnectionParams(os_api=OS_API, access_token="test-token", verify=False)


def make_pod(
    name="app-pod-1",
    namespace="prod",
    phase="Running",
    containers=None,
):
    """Builds a PodDescriptor; `containers` maps container name -> (limits, requests) dicts."""
    if containers is None:
        containers = {"app": ({}, {})}
    specs = [
        ContainerSpec(
            name=container_name,
            resources=ContainerResources(
                limits=ResourceQuantities(**limits),
                requests=ResourceQuantities(**requests),
            ),
        )
        for container_name, (limits, requests) in containers.items()
    ]
    return PodDescriptor(name=name, namespace=namespace, phase=phase, containers=specs)


def pod_metrics_body(pod_name="app-pod-1", namespace="prod", containers=None, timestamp=SAMPLE_TIMESTAMP):
    """Builds a metrics.k8s.io PodMetrics body; `containers` maps name -> (memory, cpu)."""
    if containers is None:
        containers = {"app": ("128Mi", "250m")}
    return {
        "kind": "PodMetrics",
        "apiVersion": "metrics.k8s.io/v1beta1",
        "metadata": {"name": pod_name, "namespace": namespace},
        "timestamp": timestamp,
        "window": "30s",
        "containers": [
            {"name": name, "usage": {"memory": memory, "cpu": cpu}} for name, (memory, cpu) in containers.items()
        ],
    }


def pod_metrics_url(pod_name="app-pod-1", namespace="prod"):
    return f"{OS_API}/apis/metrics.k8s.io/v1beta1/namespaces/{namespace}/pods/{pod_name}"


@pytest.fixture
def pod_factory():
    """Returns the make_pod builder."""
    return make_pod


@pytest.fixture
def metrics_body_factory():
    """Returns the pod_metrics_body builder."""
    return pod_metrics_body


@pytest.fixture
def metrics_url_factory():
    """Returns the pod_metrics_url builder."""
    return pod_metrics_url
