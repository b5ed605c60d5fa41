"""
Resource Providers

One provider per catalog domain:
- EpicResourceProvider:            requirements://epics[/<uuid>]
- UserStoryResourceProvider:       requirements://user-stories[/<uuid>]
- RequirementResourceProvider:     requirements://requirements[/<uuid>]
- RequirementTypeResourceProvider: requirements://requirements-types
- SearchResourceProvider:          requirements://search/{query}

Entity providers list at most ``max_items`` rows per call, oldest first.
"""

import logging
from typing import Any, List

from ...models.resources import RESOURCE_MIME_TYPE, RESOURCE_URI_SCHEME, ResourceDescriptor
from .base import ProviderFailedError, ResourceProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 1000


class EntityResourceProvider(ResourceProvider):
    """
    Provider for one entity kind.

    Emits a descriptor per listed entity plus one collection descriptor.
    Subclasses set the URI path, labels and collection texts.

    Args:
        repository: Entity repository exposing list()
        max_items: Maximum entities listed per call
    """

    provider_name: str = ""
    path: str = ""
    label: str = ""
    collection_name: str = ""
    collection_description: str = ""

    def __init__(self, repository, max_items: int = DEFAULT_MAX_ITEMS):
        self.repository = repository
        self.max_items = max_items

    def get_name(self) -> str:
        return self.provider_name

    def collection_uri(self) -> str:
        return f"{RESOURCE_URI_SCHEME}{self.path}"

    def describe(self, entity: Any) -> ResourceDescriptor:
        """Descriptor for a single entity, addressed by its UUID."""
        return ResourceDescriptor(
            uri=f"{self.collection_uri()}/{entity.id}",
            name=f"{self.label}: {entity.title}",
            description=f"{self.label} {entity.reference_id}: {entity.title}",
            mime_type=RESOURCE_MIME_TYPE,
        )

    async def list_descriptors(self) -> List[ResourceDescriptor]:
        logger.debug(f"Getting {self.provider_name} resource descriptors")

        try:
            entities = await self.repository.list(
                limit=self.max_items, order_by="created_at", ascending=True
            )
        except Exception as e:
            logger.error(f"{self.provider_name} failed to list entities: {e}")
            raise ProviderFailedError(self.provider_name, str(e)) from e

        descriptors = [self.describe(entity) for entity in entities]
        descriptors.append(ResourceDescriptor(
            uri=self.collection_uri(),
            name=self.collection_name,
            description=self.collection_description,
            mime_type=RESOURCE_MIME_TYPE,
        ))

        logger.debug(f"{self.provider_name} generated {len(descriptors)} descriptors")
        return descriptors


class EpicResourceProvider(EntityResourceProvider):
    provider_name = "epic_provider"
    path = "epics"
    label = "Epic"
    collection_name = "All Epics"
    collection_description = "Complete list of all epics in the system"


class UserStoryResourceProvider(EntityResourceProvider):
    provider_name = "user_story_provider"
    path = "user-stories"
    label = "User Story"
    collection_name = "All User Stories"
    collection_description = "Complete list of all user stories in the system"


class RequirementResourceProvider(EntityResourceProvider):
    provider_name = "requirement_provider"
    path = "requirements"
    label = "Requirement"
    collection_name = "All Requirements"
    collection_description = "Complete list of all requirements in the system"


class RequirementTypeResourceProvider(ResourceProvider):
    """Single collection descriptor for the requirement type list."""

    def get_name(self) -> str:
        return "requirement_type_provider"

    async def list_descriptors(self) -> List[ResourceDescriptor]:
        return [
            ResourceDescriptor(
                uri=f"{RESOURCE_URI_SCHEME}requirements-types",
                name="Requirement Types",
                description="List of all supported requirement types in the system",
                mime_type=RESOURCE_MIME_TYPE,
            )
        ]


class SearchResourceProvider(ResourceProvider):
    """Static search template; clients substitute {query}."""

    def get_name(self) -> str:
        return "search_provider"

    async def list_descriptors(self) -> List[ResourceDescriptor]:
        return [
            ResourceDescriptor(
                uri=f"{RESOURCE_URI_SCHEME}search/{{query}}",
                name="Search Requirements",
                description=(
                    "Search across all epics, user stories, requirements, and acceptance "
                    "criteria. Replace {query} with your search terms to find relevant "
                    "entities in the requirements management system."
                ),
                mime_type=RESOURCE_MIME_TYPE,
            )
        ]
