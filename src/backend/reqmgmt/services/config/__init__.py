"""Configuration services."""

from .configuration_service import (
    ConfigurationService,
    get_config_service,
    init_config_service
)

__all__ = [
    "ConfigurationService",
    "get_config_service",
    "init_config_service"
]
