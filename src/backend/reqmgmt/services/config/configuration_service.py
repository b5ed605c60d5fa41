"""
Configuration Service
Centralized configuration management with caching
"""

import json
from functools import lru_cache
from typing import Dict, List, Any, Optional
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigurationService:
    """
    Centralized service for loading and caching application configurations

    Loads configurations from JSON files in the config directory with:
    - LRU caching for performance
    - Typed accessors with defaults for missing keys
    - Hot-reload capability
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize ConfigurationService

        Args:
            config_dir: Path to configuration directory. If None, uses default reqmgmt/config
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent.parent.parent / "config"
        else:
            self.config_dir = Path(config_dir)

        logger.info(f"ConfigurationService initialized with config_dir: {self.config_dir}")

    @lru_cache(maxsize=32)
    def load_config(self, config_name: str) -> Dict[str, Any]:
        """
        Load configuration from JSON file with caching

        Args:
            config_name: Name of config file (without .json extension)

        Returns:
            Dict containing configuration data

        Raises:
            FileNotFoundError: If config file not found
            json.JSONDecodeError: If config file is invalid JSON
        """
        config_path = self.config_dir / f"{config_name}.json"

        if not config_path.exists():
            logger.error(f"Config file not found: {config_name}.json")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {config_name}.json: {e}")
            raise

        logger.info(f"Loaded config: {config_name} (version: {config.get('version', 'N/A')})")
        return config

    def reload_config(self, config_name: str) -> Dict[str, Any]:
        """
        Force reload of configuration (clears cache)

        Args:
            config_name: Name of config file to reload

        Returns:
            Freshly loaded configuration
        """
        self.load_config.cache_clear()
        logger.info(f"Cache cleared, reloading config: {config_name}")
        return self.load_config(config_name)

    def get_search_config(self) -> Dict[str, Any]:
        """Get search configuration"""
        return self.load_config("search_config")

    def get_cache_ttl(self) -> int:
        """Get search cache TTL in seconds"""
        return self.get_search_config().get("cache", {}).get("ttl_seconds", 300)

    def get_cache_namespace(self) -> str:
        """Get search cache key namespace"""
        return self.get_search_config().get("cache", {}).get("namespace", "search")

    def get_default_limit(self) -> int:
        """Get page size applied when a search asks for limit 0"""
        return self.get_search_config().get("pagination", {}).get("default_limit", 50)

    def get_max_limit(self) -> int:
        """Get largest accepted page size"""
        return self.get_search_config().get("pagination", {}).get("max_limit", 100)

    def get_orchestration_config(self) -> Dict[str, Any]:
        """Get orchestrator execution settings"""
        config = dict(self.get_search_config().get("orchestration", {}))
        config.setdefault("execution_mode", "parallel")
        config.setdefault("timeout_seconds", 30)
        return config

    def get_resource_item_limit(self) -> int:
        """Get maximum entities listed per resource provider"""
        return self.get_search_config().get("resources", {}).get("max_items_per_provider", 1000)

    def get_suggestions_config(self) -> Dict[str, Any]:
        """Get search suggestion settings"""
        config = dict(self.get_search_config().get("suggestions", {}))
        config.setdefault("default_limit", 10)
        config.setdefault("max_limit", 50)
        config.setdefault("statuses", [])
        return config

    def get_known_statuses(self) -> List[str]:
        """Get status values offered as suggestions"""
        return list(self.get_suggestions_config()["statuses"])


# Global singleton instance
_config_service: Optional[ConfigurationService] = None


def get_config_service() -> ConfigurationService:
    """
    Get global ConfigurationService singleton instance

    Returns:
        ConfigurationService instance
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigurationService()
    return _config_service


def init_config_service(config_dir: Optional[str] = None) -> ConfigurationService:
    """
    Initialize global ConfigurationService with custom config directory

    Args:
        config_dir: Path to configuration directory

    Returns:
        ConfigurationService instance
    """
    global _config_service
    _config_service = ConfigurationService(config_dir)
    logger.info("Global ConfigurationService initialized")
    return _config_service
