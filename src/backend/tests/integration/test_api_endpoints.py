"""
Integration tests for API endpoints

Tests full API request/response flow including:
- /api/v1/search and its suggestion, reference and cache routes
- /api/v1/resources catalog
- / service banner and correlation ID propagation
"""

from unittest.mock import AsyncMock

import pytest
from structlog.contextvars import get_contextvars

from reqmgmt.api.v1.resources import get_resource_registry_dep

from fakes import CREATOR_ID


@pytest.mark.integration
@pytest.mark.api
class TestSearchEndpoint:
    """Test GET /api/v1/search"""

    def test_ranked_search(self, api_client):
        response = api_client.get("/api/v1/search", params={"query": "gateway"})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert body["limit"] == 50
        assert body["query"] == "gateway"
        assert [r["reference_id"] for r in body["results"]] == ["REQ-007", "EP-001"]
        assert all(r["relevance"] >= 0 for r in body["results"])
        assert "executed_at" in body

    def test_filter_search(self, api_client):
        response = api_client.get(
            "/api/v1/search", params={"creator_id": CREATOR_ID, "limit": 10}
        )

        assert response.status_code == 200
        assert response.json()["total"] == 4

    def test_repeated_entity_types(self, api_client):
        response = api_client.get(
            "/api/v1/search",
            params=[("entity_types", "epic"), ("entity_types", "user_story")],
        )

        assert {r["type"] for r in response.json()["results"]} == {"epic", "user_story"}

    def test_created_range(self, api_client):
        response = api_client.get(
            "/api/v1/search",
            params={"created_from": "2025-01-03T00:00:00Z", "created_to": "2025-01-04T00:00:00Z"},
        )

        assert [r["reference_id"] for r in response.json()["results"]] == ["AC-042", "US-119"]

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"limit": 101}, "limit"),
            ({"limit": -1}, "limit"),
            ({"offset": -5}, "offset"),
            ({"sort_order": "sideways"}, "sort_order"),
            ({"sort_by": "nope"}, "sort_by"),
            ({"entity_types": "story"}, "entity_types"),
        ],
    )
    def test_invalid_options(self, api_client, params, field):
        response = api_client.get("/api/v1/search", params=params)

        assert response.status_code == 400
        error = response.json()["detail"]["error"]
        assert error["code"] == "INVALID_SEARCH_OPTIONS"
        assert error["field"] == field

    def test_malformed_uuid(self, api_client):
        response = api_client.get("/api/v1/search", params={"creator_id": "not-a-uuid"})

        assert response.status_code == 422

    def test_retrieval_failure(self, api_client, repositories):
        repositories.requirement.fail_with = RuntimeError("password=secret")

        response = api_client.get("/api/v1/search", params={"query": "gateway"})

        assert response.status_code == 500
        error = response.json()["detail"]["error"]
        assert error["code"] == "SEARCH_FAILED"
        assert "requirement" in error["message"]
        assert "secret" not in error["message"]

    def test_malformed_row_reported_as_search_failure(self, api_client, repositories):
        repositories.requirement.entities[0].created_at = None

        response = api_client.get("/api/v1/search", params={"query": "gateway"})

        assert response.status_code == 500
        error = response.json()["detail"]["error"]
        assert error["code"] == "SEARCH_FAILED"
        assert "requirement" in error["message"]


@pytest.mark.integration
@pytest.mark.api
class TestSearchHelpers:
    """Suggestions, reference lookups and cache invalidation"""

    def test_suggestions(self, api_client):
        response = api_client.get("/api/v1/search/suggestions", params={"query": "gat"})

        assert response.status_code == 200
        assert response.json() == {
            "titles": ["Gateway timeout", "Payment Gateway"],
            "reference_ids": ["REQ-007", "EP-001"],
            "statuses": ["Draft", "Done"],
        }

    def test_suggestions_require_query(self, api_client):
        response = api_client.get("/api/v1/search/suggestions")

        assert response.status_code == 400
        assert response.json()["detail"]["error"]["field"] == "query"

    def test_reference_search(self, api_client):
        response = api_client.get("/api/v1/search/reference/us-119")

        body = response.json()
        assert response.status_code == 200
        assert body["total"] == 1
        assert body["results"][0]["reference_id"] == "US-119"

    def test_reference_search_unknown(self, api_client):
        response = api_client.get("/api/v1/search/reference/EP-999")

        assert response.status_code == 200
        assert response.json()["results"] == []
        assert response.json()["total"] == 0

    def test_reference_entity(self, api_client):
        response = api_client.get("/api/v1/search/reference/AC-042/entity")

        assert response.status_code == 200
        assert response.json()["type"] == "acceptance_criteria"
        assert response.json()["relevance"] == 1.0

    def test_reference_entity_not_found(self, api_client):
        response = api_client.get("/api/v1/search/reference/EP-999/entity")

        assert response.status_code == 404
        assert response.json()["detail"]["error"]["code"] == "ENTITY_NOT_FOUND"

    def test_reference_entity_free_text(self, api_client):
        response = api_client.get("/api/v1/search/reference/gateway/entity")

        assert response.status_code == 400

    def test_cache_invalidate(self, api_client, api_orchestrator, monkeypatch):
        monkeypatch.setattr(api_orchestrator, "invalidate_all", AsyncMock(return_value=3))

        response = api_client.post("/api/v1/search/cache/invalidate")

        assert response.status_code == 200
        assert response.json() == {"invalidated": 3}


@pytest.mark.integration
@pytest.mark.api
class TestResourcesEndpoint:
    """Test GET /api/v1/resources"""

    def test_catalog(self, api_client, sample_entities):
        response = api_client.get("/api/v1/resources")

        assert response.status_code == 200
        uris = [d["uri"] for d in response.json()]
        assert uris == sorted(uris)
        assert uris.count("requirements://search/{query}") == 1
        epic = sample_entities["epics"][0]
        assert f"requirements://epics/{epic.id}" in uris

    def test_catalog_survives_provider_failure(self, api_client, repositories):
        repositories.epic.fail_with = RuntimeError("db down")

        response = api_client.get("/api/v1/resources")

        uris = [d["uri"] for d in response.json()]
        assert response.status_code == 200
        assert not any(uri.startswith("requirements://epics") for uri in uris)
        assert "requirements://requirements-types" in uris


@pytest.mark.integration
@pytest.mark.api
class TestApplication:

    def test_root_banner(self, api_client):
        response = api_client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["search"] == "/api/v1/search"

    def test_correlation_id_echoed(self, api_client):
        response = api_client.get("/", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_correlation_id_generated(self, api_client):
        response = api_client.get("/")

        assert response.headers["X-Correlation-ID"]

    def test_search_context_bound_for_search_requests(self, api_client, api_orchestrator, monkeypatch):
        seen = {}
        original_search = api_orchestrator.search

        async def recording_search(options):
            seen.update(get_contextvars())
            return await original_search(options)

        monkeypatch.setattr(api_orchestrator, "search", recording_search)

        response = api_client.get(
            "/api/v1/search",
            params=[("query", "gateway"), ("entity_types", "epic")],
            headers={"X-Correlation-ID": "search-1"},
        )

        assert response.status_code == 200
        assert seen["correlation_id"] == "search-1"
        assert seen["search_query"] == "gateway"
        assert seen["entity_types"] == ["epic"]

    def test_search_context_not_bound_elsewhere(self, api_client, monkeypatch):
        seen = {}
        registry = api_client.app.dependency_overrides[get_resource_registry_dep]()
        original = registry.get_all

        async def recording_get_all():
            seen.update(get_contextvars())
            return await original()

        monkeypatch.setattr(registry, "get_all", recording_get_all)

        response = api_client.get("/api/v1/resources")

        assert response.status_code == 200
        assert "correlation_id" in seen
        assert "search_query" not in seen
