# tests/core/test_collector.py
"""
Tests for the collection cycle. The pod lister is faked and the metrics API
is mocked with respx.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import respx
from httpx import Response

from osmetrics.core.collector import collect_metrics
from osmetrics.core.exceptions import PoolFailure, UpstreamError


class FakePodLister:
    def __init__(self, pods_by_namespace, errors=None):
        self.pods_by_namespace = pods_by_namespace
        self.errors = errors or {}
        self.calls = []

    async def list_pods(self, namespace):
        self.calls.append(namespace)
        if namespace in self.errors:
            raise self.errors[namespace]
        return self.pods_by_namespace.get(namespace, [])


@pytest.mark.asyncio
@respx.mock
async def test_collect_filters_terminal_pods(
    connection_params, pod_factory, metrics_body_factory, metrics_url_factory
):
    lister = FakePodLister(
        {
            "prod": [
                pod_factory(name="running", phase="Running"),
                pod_factory(name="done", phase="Succeeded"),
                pod_factory(name="crashed", phase="Failed"),
                pod_factory(name="pending", phase="Pending"),
            ]
        }
    )
    for name in ("running", "pending"):
        respx.get(metrics_url_factory(pod_name=name)).mock(
            return_value=Response(200, json=metrics_body_factory(pod_name=name))
        )

    records = await collect_metrics(["prod"], connection_params, pod_lister=lister)

    pods = {r.labels["pod"] for r in records}
    assert pods == {"running", "pending"}
    # Unmocked routes would fail, so terminal pods were never fetched.
    assert len(respx.calls) == 2


@pytest.mark.asyncio
@respx.mock
async def test_collect_multiple_namespaces(connection_params, pod_factory, metrics_body_factory, metrics_url_factory):
    lister = FakePodLister(
        {
            "prod": [pod_factory(name="api", namespace="prod")],
            "dev": [pod_factory(name="api", namespace="dev"), pod_factory(name="worker", namespace="dev")],
        }
    )
    for ns, name in (("prod", "api"), ("dev", "api"), ("dev", "worker")):
        respx.get(metrics_url_factory(pod_name=name, namespace=ns)).mock(
            return_value=Response(200, json=metrics_body_factory(pod_name=name, namespace=ns))
        )

    records = await collect_metrics(["prod", "dev"], connection_params, concurrency=2, pod_lister=lister)

    assert sorted(lister.calls) == ["dev", "prod"]
    assert len(records) == 6  # memory + cpu usage per container, no declared quantities
    assert {(r.labels["namespace"], r.labels["pod"]) for r in records} == {
        ("prod", "api"),
        ("dev", "api"),
        ("dev", "worker"),
    }


@pytest.mark.parametrize("failing", ["pod-0", "pod-3", "pod-7"])
@pytest.mark.asyncio
@respx.mock
async def test_one_failed_fetch_fails_the_collection(
    failing, connection_params, pod_factory, metrics_body_factory, metrics_url_factory
):
    pods = [pod_factory(name=f"pod-{i}") for i in range(8)]
    for pod in pods:
        response = (
            Response(500) if pod.name == failing else Response(200, json=metrics_body_factory(pod_name=pod.name))
        )
        respx.get(metrics_url_factory(pod_name=pod.name)).mock(return_value=response)

    with pytest.raises(PoolFailure) as exc_info:
        await collect_metrics(["prod"], connection_params, concurrency=3, pod_lister=FakePodLister({"prod": pods}))

    assert exc_info.value.item.name == failing
    assert isinstance(exc_info.value.error, UpstreamError)


@pytest.mark.asyncio
async def test_listing_failure_propagates_unchanged(connection_params):
    error = UpstreamError("Kubernetes API returned status code 403")
    lister = FakePodLister({"prod": []}, errors={"dev": error})

    with pytest.raises(UpstreamError) as exc_info:
        await collect_metrics(["prod", "dev"], connection_params, pod_lister=lister)

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_no_namespaces_yields_no_metrics(connection_params):
    assert await collect_metrics([], connection_params, pod_lister=FakePodLister({})) == []


@pytest.mark.asyncio
@respx.mock
async def test_warning_logger_is_passed_through(
    connection_params, pod_factory, metrics_body_factory, metrics_url_factory
):
    pod = pod_factory(containers={"app": ({"cpu": "100m"}, {})})
    respx.get(metrics_url_factory()).mock(
        return_value=Response(200, json=metrics_body_factory(containers={"app": ("1Mi", "200m")}))
    )
    log = MagicMock()

    records = await collect_metrics(["prod"], connection_params, log=log, pod_lister=FakePodLister({"prod": [pod]}))

    assert records[-1].value == 2.0
    log.warning.assert_called_once()


@pytest.mark.asyncio
async def test_owned_pod_lister_is_closed(mocker, connection_params):
    lister = MagicMock()
    lister.list_pods = AsyncMock(return_value=[])
    lister.close = AsyncMock()
    mocker.patch("osmetrics.core.collector.PodLister", return_value=lister)

    assert await collect_metrics(["prod"], connection_params) == []

    lister.list_pods.assert_awaited_once_with("prod")
    lister.close.assert_awaited_once()
