"""
Base Resource Provider Interface

A resource provider lists the catalog descriptors for one domain (an
entity kind, or a static template). Providers are registered with the
ResourceRegistry, which aggregates their output into the catalog.
"""

from abc import ABC, abstractmethod
from typing import List

from ...models.resources import ResourceDescriptor


class ProviderFailedError(Exception):
    """A resource provider could not produce its descriptors."""

    def __init__(self, provider_name: str, message: str = ""):
        self.provider_name = provider_name
        self.message = message or f"{provider_name} failed to list resources"
        super().__init__(self.message)


class ResourceProvider(ABC):
    """
    Abstract base class for catalog resource providers.

    Each provider implements:
    - list_descriptors(): Descriptors for its domain
    - get_name(): Stable provider name used in logs
    """

    @abstractmethod
    async def list_descriptors(self) -> List[ResourceDescriptor]:
        """
        List the resource descriptors for this provider's domain.

        Returns:
            List of ResourceDescriptor

        Raises:
            ProviderFailedError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get provider name.

        Returns:
            Provider name (e.g., "epic_provider")
        """
        pass
