"""
Resources Package

Catalog of addressable resources: one provider per entity kind plus the
requirement type list and the search template, aggregated by
ResourceRegistry.
"""

from .base import ResourceProvider, ProviderFailedError
from .providers import (
    EntityResourceProvider,
    EpicResourceProvider,
    UserStoryResourceProvider,
    RequirementResourceProvider,
    RequirementTypeResourceProvider,
    SearchResourceProvider,
)
from .registry import ResourceRegistry
from .factory import build_resource_registry

__all__ = [
    "ResourceProvider",
    "ProviderFailedError",
    "EntityResourceProvider",
    "EpicResourceProvider",
    "UserStoryResourceProvider",
    "RequirementResourceProvider",
    "RequirementTypeResourceProvider",
    "SearchResourceProvider",
    "ResourceRegistry",
    "build_resource_registry",
]
