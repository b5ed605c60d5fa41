"""
Unit test fixtures

Fixtures for unit tests that mock external dependencies.
Unit tests should be fast (< 100ms) and isolated.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_redis_client():
    """Mock Redis async client whose every call fails"""
    client = MagicMock()
    client.get = AsyncMock(side_effect=ConnectionError("redis down"))
    client.set = AsyncMock(side_effect=ConnectionError("redis down"))
    client.delete = AsyncMock(side_effect=ConnectionError("redis down"))
    client.scan_iter = MagicMock(side_effect=ConnectionError("redis down"))
    return client


@pytest.fixture
def mock_repository():
    """Mock entity repository for adapter tests"""
    repository = MagicMock()
    repository.text_search = AsyncMock(return_value=[])
    repository.filter = AsyncMock(return_value=[])
    repository.get_by_reference_id = AsyncMock()
    repository.list = AsyncMock(return_value=[])
    return repository
