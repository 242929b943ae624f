# tests/api/conftest.py
"""
Shared fixtures for API tests.
Uses FastAPI's TestClient with dependency overrides to inject a fake pod lister
and static connection settings.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from osmetrics.api.app import create_app
from osmetrics.api.dependencies import (
    get_concurrency,
    get_connection_params,
    get_default_namespaces,
    get_pod_lister,
)


@pytest.fixture
def mock_pod_lister():
    """Returns a mock PodLister listing no pods."""
    lister = AsyncMock()
    lister.list_pods = AsyncMock(return_value=[])
    return lister


@pytest.fixture
def default_namespaces():
    return ["default"]


@pytest.fixture
def client(mock_pod_lister, connection_params, default_namespaces):
    """Creates a TestClient with dependency overrides for the cluster access."""
    app = create_app()
    app.dependency_overrides[get_pod_lister] = lambda: mock_pod_lister
    app.dependency_overrides[get_connection_params] = lambda: connection_params
    app.dependency_overrides[get_concurrency] = lambda: 3
    app.dependency_overrides[get_default_namespaces] = lambda: default_namespaces
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
