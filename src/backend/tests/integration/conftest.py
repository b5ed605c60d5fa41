"""
Integration test fixtures

The real FastAPI application with its search orchestrator and resource
registry dependencies pointed at in-memory repositories. The lifespan is
not run, so no Redis or PostgreSQL connection is attempted.
"""

import pytest
from fastapi.testclient import TestClient

from reqmgmt.api.v1.resources import get_resource_registry_dep
from reqmgmt.api.v1.search import get_search_orchestrator_dep
from reqmgmt.services.resources import build_resource_registry
from reqmgmt.services.search import SearchCache, SearchOrchestrator, build_adapters


@pytest.fixture
def api_orchestrator(repositories):
    """Uncached orchestrator over the sample repositories"""
    return SearchOrchestrator(
        adapters=build_adapters(repositories),
        cache=SearchCache(None),
        config={"execution_mode": "parallel", "timeout_seconds": 5},
        suggestions_config={"statuses": ["Draft", "Done"]},
    )


@pytest.fixture
def api_client(api_orchestrator, repositories):
    """
    HTTP client for API integration testing

    Usage:
        def test_root(api_client):
            response = api_client.get("/")
            assert response.status_code == 200
    """
    from reqmgmt.main import app

    saved = dict(app.dependency_overrides)
    registry = build_resource_registry(repositories)
    app.dependency_overrides[get_search_orchestrator_dep] = lambda: api_orchestrator
    app.dependency_overrides[get_resource_registry_dep] = lambda: registry

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        app.dependency_overrides.update(saved)
