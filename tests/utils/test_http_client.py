# tests/utils/test_http_client.py

import httpx
import pytest

from osmetrics import __version__
from osmetrics.models.metrics import ConnectionParams
from osmetrics.utils.http_client import get_async_http_client


@pytest.mark.asyncio
async def test_transport_override_receives_authenticated_requests():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"kind": "PodMetrics"})

    params = ConnectionParams(
        os_api="https://cluster.internal:6443/",
        access_token="secret",
        timeout=3.0,
        transport=httpx.MockTransport(handler),
    )

    async with get_async_http_client(params) as client:
        assert client.timeout == httpx.Timeout(3.0)
        response = await client.get(f"{params.base_url}/api/v1/namespaces")

    assert response.json() == {"kind": "PodMetrics"}
    assert len(seen) == 1
    assert str(seen[0].url) == "https://cluster.internal:6443/api/v1/namespaces"
    assert seen[0].headers["Authorization"] == "Bearer secret"
    assert seen[0].headers["Accept"] == "application/json"
    assert seen[0].headers["User-Agent"] == f"osmetrics/{__version__}"
