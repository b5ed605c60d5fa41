"""
Unit tests for the per-entity retrieval adapters
"""

import uuid

import pytest

from reqmgmt.models.search import SearchFilters
from reqmgmt.services.search.adapters import (
    AcceptanceCriteriaSearchAdapter,
    EpicSearchAdapter,
    RequirementSearchAdapter,
    UserStorySearchAdapter,
    build_adapters,
)
from reqmgmt.services.search.errors import EntityNotFoundError, RetrievalFailedError

from fakes import make_acceptance_criteria, make_epic, make_requirement


@pytest.mark.unit
class TestResultMapping:

    def test_epic_row(self, mock_repository):
        epic = make_epic("EP-001", "Payment Gateway", description="Cards", priority=1, status="Draft")

        result = EpicSearchAdapter(mock_repository).to_result(epic, 0.5)

        assert result.id == epic.id
        assert result.type == "epic"
        assert result.title == "Payment Gateway"
        assert result.priority == 1
        assert result.status == "Draft"
        assert result.relevance == 0.5
        assert result.updated_at == epic.updated_at

    def test_acceptance_criteria_row(self, mock_repository):
        criteria = make_acceptance_criteria("AC-042", "WHEN paid THEN confirm")

        result = AcceptanceCriteriaSearchAdapter(mock_repository).to_result(criteria)

        assert result.type == "acceptance_criteria"
        assert result.title == "AC-042"
        assert result.description == "WHEN paid THEN confirm"
        assert result.priority is None
        assert result.status == "active"
        assert result.relevance is None

    def test_build_adapters_order(self, repositories):
        adapters = build_adapters(repositories)

        assert list(adapters) == ["epic", "user_story", "acceptance_criteria", "requirement"]
        assert isinstance(adapters["user_story"], UserStorySearchAdapter)
        assert adapters["requirement"].get_name() == "requirement"


@pytest.mark.unit
class TestRetrieval:

    @pytest.mark.asyncio
    async def test_ranked_passes_expression_and_predicates(self, mock_repository):
        requirement = make_requirement("REQ-007", "Gateway timeout", priority=2)
        mock_repository.text_search.return_value = [(requirement, 0.25)]
        adapter = RequirementSearchAdapter(mock_repository)

        results = await adapter.search("gateway:*", SearchFilters(priority=2))

        expression, predicates = mock_repository.text_search.call_args.args
        assert expression == "gateway:*"
        assert [(p.column, p.value) for p in predicates] == [("priority", 2)]
        assert results[0].relevance == 0.25

    @pytest.mark.asyncio
    async def test_negative_rank_clamped(self, mock_repository):
        mock_repository.text_search.return_value = [(make_epic("EP-1", "x"), -0.1)]

        results = await EpicSearchAdapter(mock_repository).search("x:*", SearchFilters())

        assert results[0].relevance == 0.0

    @pytest.mark.asyncio
    async def test_unranked_leaves_relevance_unset(self, mock_repository):
        mock_repository.filter.return_value = [make_epic("EP-1", "x")]

        results = await EpicSearchAdapter(mock_repository).filter(SearchFilters())

        assert results[0].relevance is None
        mock_repository.text_search.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_names_kind_only(self, mock_repository):
        mock_repository.filter.side_effect = ConnectionError("password=hunter2 host unreachable")

        with pytest.raises(RetrievalFailedError) as exc_info:
            await UserStorySearchAdapter(mock_repository).filter(SearchFilters())

        assert exc_info.value.entity_type == "user_story"
        assert "hunter2" not in str(exc_info.value)
        assert "user_story" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_lookup_sets_full_relevance(self, mock_repository):
        epic = make_epic("EP-001", "Payment Gateway")
        mock_repository.get_by_reference_id.return_value = epic

        result = await EpicSearchAdapter(mock_repository).lookup("EP-001")

        assert result.id == epic.id
        assert result.relevance == 1.0

    @pytest.mark.asyncio
    async def test_lookup_not_found_passes_through(self, mock_repository):
        mock_repository.get_by_reference_id.side_effect = EntityNotFoundError("epic", "EP-404")

        with pytest.raises(EntityNotFoundError):
            await EpicSearchAdapter(mock_repository).lookup("EP-404")

    @pytest.mark.asyncio
    async def test_lookup_store_failure(self, mock_repository):
        mock_repository.get_by_reference_id.side_effect = RuntimeError("boom")

        with pytest.raises(RetrievalFailedError):
            await EpicSearchAdapter(mock_repository).lookup("EP-001")

    @pytest.mark.asyncio
    async def test_malformed_ranked_row_names_kind(self, mock_repository):
        broken = make_requirement("REQ-007", "Gateway timeout")
        broken.created_at = None
        mock_repository.text_search.return_value = [(broken, 0.5)]

        with pytest.raises(RetrievalFailedError) as exc_info:
            await RequirementSearchAdapter(mock_repository).search("gateway:*", SearchFilters())

        assert exc_info.value.entity_type == "requirement"

    @pytest.mark.asyncio
    async def test_malformed_unranked_row_names_kind(self, mock_repository):
        broken = make_epic("EP-001", "Payment Gateway")
        broken.created_at = None
        mock_repository.filter.return_value = [broken]

        with pytest.raises(RetrievalFailedError) as exc_info:
            await EpicSearchAdapter(mock_repository).filter(SearchFilters())

        assert exc_info.value.entity_type == "epic"

    @pytest.mark.asyncio
    async def test_malformed_lookup_row_names_kind(self, mock_repository):
        broken = make_acceptance_criteria("AC-042", "WHEN paid THEN confirm")
        broken.created_at = None
        mock_repository.get_by_reference_id.return_value = broken

        with pytest.raises(RetrievalFailedError) as exc_info:
            await AcceptanceCriteriaSearchAdapter(mock_repository).lookup("AC-042")

        assert exc_info.value.entity_type == "acceptance_criteria"


@pytest.mark.unit
class TestInMemoryRetrieval:
    """Adapters over the in-memory repositories"""

    @pytest.mark.asyncio
    async def test_criteria_filtered_by_story(self, repositories, sample_entities):
        story = sample_entities["user_stories"][0]
        adapter = AcceptanceCriteriaSearchAdapter(repositories.acceptance_criteria)

        matching = await adapter.filter(SearchFilters(user_story_id=story.id))
        other = await adapter.filter(SearchFilters(user_story_id=uuid.uuid4()))

        assert [r.reference_id for r in matching] == ["AC-042"]
        assert other == []
