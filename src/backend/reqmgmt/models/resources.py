"""Resource catalog descriptor model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


RESOURCE_MIME_TYPE = "application/json"
RESOURCE_URI_SCHEME = "requirements://"


class ResourceDescriptor(BaseModel):
    """
    Metadata for a resource addressable through the catalog.

    Attributes:
        uri: Unique resource identifier (e.g. requirements://epics/<uuid>)
        name: Human-readable name
        description: Optional longer description
        mime_type: Content type of the resource body
    """
    model_config = ConfigDict(frozen=True)

    uri: str
    name: str
    description: Optional[str] = None
    mime_type: str = RESOURCE_MIME_TYPE
