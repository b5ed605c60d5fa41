"""
Resource Catalog API Endpoint
GET /api/v1/resources - List every catalog resource descriptor
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from ...models.resources import ResourceDescriptor
from ...services.resources.registry import ResourceRegistry
from ...utils.logging_context import log_performance

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/resources", tags=["resources"])


# Dependency injection placeholder (overridden in main.py)
def get_resource_registry_dep() -> ResourceRegistry:
    """Dependency injection placeholder for resource registry - overridden in main.py"""
    raise RuntimeError("Resource registry dependency not initialized")


@router.get("", response_model=List[ResourceDescriptor])
async def list_resources(
    registry: ResourceRegistry = Depends(get_resource_registry_dep)
):
    """
    List the resource catalog, sorted by URI.

    Example:
        GET /api/v1/resources

        Response:
        [
            {"uri": "requirements://epics", "name": "All Epics", ...},
            {"uri": "requirements://search/{query}", "name": "Search Requirements", ...}
        ]
    """
    with log_performance("resource_catalog"):
        return await registry.get_all()
