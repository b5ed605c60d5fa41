"""
Unit tests for the resource providers
"""

import pytest

from reqmgmt.services.resources import (
    EpicResourceProvider,
    ProviderFailedError,
    RequirementResourceProvider,
    RequirementTypeResourceProvider,
    SearchResourceProvider,
    UserStoryResourceProvider,
)

from fakes import InMemoryEntityRepository, make_epic, utc


@pytest.mark.unit
class TestEntityProviders:

    @pytest.mark.asyncio
    async def test_epic_descriptors(self, repositories, sample_entities):
        epic = sample_entities["epics"][0]

        descriptors = await EpicResourceProvider(repositories.epic).list_descriptors()
        by_uri = {d.uri: d for d in descriptors}

        assert len(descriptors) == len(sample_entities["epics"]) + 1
        assert by_uri[f"requirements://epics/{epic.id}"].name == "Epic: Payment Gateway"
        assert by_uri[f"requirements://epics/{epic.id}"].description == "Epic EP-001: Payment Gateway"
        assert by_uri["requirements://epics"].name == "All Epics"
        assert all(d.mime_type == "application/json" for d in descriptors)

    @pytest.mark.asyncio
    async def test_user_story_and_requirement_paths(self, repositories, sample_entities):
        story = sample_entities["user_stories"][0]
        requirement = sample_entities["requirements"][0]

        stories = await UserStoryResourceProvider(repositories.user_story).list_descriptors()
        requirements = await RequirementResourceProvider(repositories.requirement).list_descriptors()

        assert {d.uri for d in stories} == {
            f"requirements://user-stories/{story.id}",
            "requirements://user-stories",
        }
        assert {d.uri for d in requirements} == {
            f"requirements://requirements/{requirement.id}",
            "requirements://requirements",
        }
        assert stories[0].description == "User Story US-119: Checkout flow"

    @pytest.mark.asyncio
    async def test_oldest_first_and_bounded(self):
        epics = [make_epic(f"EP-{i:03d}", f"Epic {i}", created_at=utc(2025, 1, 10 - i)) for i in range(5)]
        provider = EpicResourceProvider(InMemoryEntityRepository("epic", epics), max_items=3)

        descriptors = await provider.list_descriptors()

        assert [d.name for d in descriptors[:-1]] == ["Epic: Epic 4", "Epic: Epic 3", "Epic: Epic 2"]
        assert descriptors[-1].uri == "requirements://epics"

    @pytest.mark.asyncio
    async def test_empty_store_still_lists_collection(self):
        provider = RequirementResourceProvider(InMemoryEntityRepository("requirement"))

        descriptors = await provider.list_descriptors()

        assert [d.uri for d in descriptors] == ["requirements://requirements"]

    @pytest.mark.asyncio
    async def test_store_failure(self):
        repository = InMemoryEntityRepository("epic", fail_with=RuntimeError("db down"))

        with pytest.raises(ProviderFailedError) as exc_info:
            await EpicResourceProvider(repository).list_descriptors()

        assert exc_info.value.provider_name == "epic_provider"

    def test_names(self, repositories):
        assert EpicResourceProvider(repositories.epic).get_name() == "epic_provider"
        assert UserStoryResourceProvider(repositories.user_story).get_name() == "user_story_provider"
        assert RequirementResourceProvider(repositories.requirement).get_name() == "requirement_provider"


@pytest.mark.unit
class TestStaticProviders:

    @pytest.mark.asyncio
    async def test_requirement_types(self):
        descriptors = await RequirementTypeResourceProvider().list_descriptors()

        assert [d.uri for d in descriptors] == ["requirements://requirements-types"]
        assert descriptors[0].name == "Requirement Types"

    @pytest.mark.asyncio
    async def test_search_template(self):
        descriptors = await SearchResourceProvider().list_descriptors()

        assert [d.uri for d in descriptors] == ["requirements://search/{query}"]
        assert "{query}" in descriptors[0].description
        assert SearchResourceProvider().get_name() == "search_provider"
