"""
Resource Registry Factory

Builds the resource registry with the standard provider set.
"""

import logging
from typing import Optional

from .providers import (
    DEFAULT_MAX_ITEMS,
    EpicResourceProvider,
    RequirementResourceProvider,
    RequirementTypeResourceProvider,
    SearchResourceProvider,
    UserStoryResourceProvider,
)
from .registry import ResourceRegistry

logger = logging.getLogger(__name__)


def build_resource_registry(repositories, max_items: Optional[int] = None) -> ResourceRegistry:
    """
    Create a registry with the epic, user story, requirement, requirement
    type and search providers, registered in that order.

    Args:
        repositories: Object with epic, user_story and requirement repositories
        max_items: Per-provider entity ceiling (defaults to 1000)

    Returns:
        Populated ResourceRegistry
    """
    if max_items is None:
        max_items = DEFAULT_MAX_ITEMS

    registry = ResourceRegistry()
    registry.register(EpicResourceProvider(repositories.epic, max_items))
    registry.register(UserStoryResourceProvider(repositories.user_story, max_items))
    registry.register(RequirementResourceProvider(repositories.requirement, max_items))
    registry.register(RequirementTypeResourceProvider())
    registry.register(SearchResourceProvider())

    logger.info(f"Resource registry built with providers: {registry.list_provider_names()}")
    return registry
