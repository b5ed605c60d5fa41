"""
Resource Registry

Aggregates descriptors from registered providers into the catalog.
A failing provider is logged and skipped; the rest still contribute.
The catalog is deduplicated by URI and sorted by URI ascending.
"""

import asyncio
import logging
import threading
from typing import List

from ...models.resources import ResourceDescriptor
from .base import ResourceProvider

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """
    Registry for resource providers.

    Providers are kept in insertion order. register() may run while
    get_all() is in flight; get_all() works on a snapshot of the list.
    """

    def __init__(self):
        """Initialize empty registry"""
        self._providers: List[ResourceProvider] = []
        self._lock = threading.Lock()
        logger.info("ResourceRegistry initialized")

    def register(self, provider: ResourceProvider) -> None:
        """
        Register a resource provider.

        Args:
            provider: ResourceProvider instance
        """
        with self._lock:
            if any(p is provider for p in self._providers):
                logger.warning(f"Provider registered twice: {provider.get_name()}")
            self._providers.append(provider)

        logger.info(f"Registered resource provider '{provider.get_name()}'")

    def list_provider_names(self) -> List[str]:
        """
        List registered provider names in registration order.

        Returns:
            List of provider names
        """
        with self._lock:
            return [p.get_name() for p in self._providers]

    async def get_all(self) -> List[ResourceDescriptor]:
        """
        Build the catalog.

        Returns:
            Descriptors from every healthy provider, unique by URI,
            sorted by URI ascending
        """
        with self._lock:
            providers = list(self._providers)

        outcomes = await asyncio.gather(
            *(provider.list_descriptors() for provider in providers),
            return_exceptions=True
        )

        catalog = {}
        for provider, outcome in zip(providers, outcomes):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                logger.error(
                    f"Resource provider '{provider.get_name()}' failed, skipping: {outcome}"
                )
                continue

            for descriptor in outcome:
                catalog.setdefault(descriptor.uri, descriptor)

        descriptors = sorted(catalog.values(), key=lambda d: d.uri)
        logger.info(f"Resource catalog built: {len(descriptors)} descriptors from {len(providers)} providers")
        return descriptors
