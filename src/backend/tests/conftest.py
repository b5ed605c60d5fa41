"""
Pytest configuration and shared fixtures
Provides common test fixtures for all test modules
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from fakeredis import aioredis as fakeredis_aioredis

from reqmgmt.database.repositories import Repositories
from reqmgmt.services.search import (
    ResultConsolidator,
    SearchCache,
    SearchOrchestrator,
    build_adapters,
)

from fakes import (
    CREATOR_ID,
    OTHER_CREATOR_ID,
    InMemoryEntityRepository,
    make_acceptance_criteria,
    make_epic,
    make_requirement,
    make_user_story,
    utc,
)


TEST_SUGGESTIONS_CONFIG = {
    "default_limit": 10,
    "max_limit": 50,
    "statuses": ["Backlog", "Draft", "In Progress", "Done", "Cancelled", "Active", "Obsolete"],
}


@pytest.fixture
def sample_entities():
    """
    Small planning hierarchy spread over all four searchable kinds.

    Creation times are distinct so created_at ordering is unambiguous.
    """
    epic = make_epic(
        "EP-001", "Payment Gateway",
        description="Card and wallet payments",
        priority=1, status="In Progress",
        creator_id=CREATOR_ID, created_at=utc(2025, 1, 1),
    )
    other_epic = make_epic(
        "EP-002", "Reporting",
        description="Monthly reports",
        priority=3, status="Backlog",
        creator_id=OTHER_CREATOR_ID, created_at=utc(2025, 1, 2),
    )
    story = make_user_story(
        "US-119", "Checkout flow",
        epic_id=epic.id, description="As a buyer I want to pay",
        priority=2, status="Draft",
        creator_id=CREATOR_ID, created_at=utc(2025, 1, 3),
    )
    criteria = make_acceptance_criteria(
        "AC-042", "WHEN the payment succeeds THEN the order is confirmed",
        user_story_id=story.id, created_at=utc(2025, 1, 4),
    )
    requirement = make_requirement(
        "REQ-007", "Gateway timeout",
        user_story_id=story.id, description="Fail after 30 seconds",
        priority=2, status="Active",
        creator_id=CREATOR_ID, created_at=utc(2025, 1, 5),
    )
    return {
        "epics": [epic, other_epic],
        "user_stories": [story],
        "acceptance_criteria": [criteria],
        "requirements": [requirement],
    }


@pytest.fixture
def repositories(sample_entities):
    """In-memory repository set seeded with sample_entities."""
    return Repositories(
        epic=InMemoryEntityRepository("epic", sample_entities["epics"]),
        user_story=InMemoryEntityRepository("user_story", sample_entities["user_stories"]),
        acceptance_criteria=InMemoryEntityRepository(
            "acceptance_criteria",
            sample_entities["acceptance_criteria"],
            search_columns=("reference_id", "description"),
        ),
        requirement=InMemoryEntityRepository("requirement", sample_entities["requirements"]),
    )


@pytest_asyncio.fixture
async def fake_redis_client():
    """Provide a fakeredis asyncio client for Redis-backed tests."""
    client = fakeredis_aioredis.FakeRedis(decode_responses=True)
    try:
        yield client
    finally:
        await client.flushall()
        await client.aclose()


@pytest.fixture
def search_cache(fake_redis_client):
    """SearchCache backed by fakeredis."""
    return SearchCache(fake_redis_client, ttl=300)


@pytest.fixture
def orchestrator(repositories, search_cache):
    """SearchOrchestrator over in-memory repositories with a fakeredis cache."""
    return SearchOrchestrator(
        adapters=build_adapters(repositories),
        cache=search_cache,
        consolidator=ResultConsolidator(),
        config={
            "execution_mode": "parallel",
            "timeout_seconds": 5,
            "default_limit": 50,
            "max_limit": 100,
        },
        suggestions_config=TEST_SUGGESTIONS_CONFIG,
    )


# Pytest markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: HTTP API tests")
