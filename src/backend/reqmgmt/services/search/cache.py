"""
Search Result Cache

Redis-backed read-through / write-back cache for search responses:
- Keys derive from the full SearchOptions shape, hashed under "search:"
- Values are JSON-encoded SearchResponse objects with a 5 minute TTL
- invalidate_all() drops every key in the namespace in one batch

The cache is advisory. Read, write and invalidation failures are logged
and absorbed; a missing Redis client turns every operation into a no-op.
"""

import hashlib
import logging
from typing import Optional

from pydantic import ValidationError
from redis.asyncio import Redis

from ...models.search import SearchOptions, SearchResponse

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "search"
DEFAULT_TTL_SECONDS = 300


class SearchCache:
    """
    Search response cache.

    Args:
        redis_client: Redis async client, or None to disable caching
        ttl: Time-to-live for cached responses in seconds
        namespace: Key prefix (without trailing colon)
    """

    def __init__(
        self,
        redis_client: Optional[Redis] = None,
        ttl: int = DEFAULT_TTL_SECONDS,
        *,
        namespace: str = DEFAULT_NAMESPACE,
    ):
        self.redis = redis_client
        self.ttl = ttl
        self.namespace = namespace.rstrip(":")

        if self.redis is None:
            logger.info("Search cache disabled (no Redis client)")

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    def build_key(self, options: SearchOptions) -> str:
        """
        Derive the cache key for a search request.

        Serializes every option (None and zero stay distinct) and hashes
        the result, so identical options always map to the same key.
        """
        payload = options.model_dump_json()
        digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
        return f"{self.namespace}:{digest}"

    async def get(self, key: str) -> Optional[SearchResponse]:
        """
        Read a cached response.

        Returns:
            SearchResponse, or None on miss, decode failure or Redis error
        """
        if not self.enabled:
            return None

        try:
            raw = await self.redis.get(key)
        except Exception as e:
            logger.warning(f"Search cache read failed for {key}: {e}")
            return None

        if raw is None:
            return None

        try:
            return SearchResponse.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding undecodable search cache entry {key}: {e}")
            return None

    async def set(self, key: str, response: SearchResponse) -> None:
        """Store a response with the configured TTL (best-effort)."""
        if not self.enabled:
            return

        try:
            await self.redis.set(key, response.model_dump_json(), ex=self.ttl)
            logger.debug(f"Cached search response {key} (ttl={self.ttl}s)")
        except Exception as e:
            logger.warning(f"Search cache write failed for {key}: {e}")

    async def invalidate_all(self) -> int:
        """
        Remove every cached search response.

        Returns:
            Number of keys deleted (0 when disabled or on error)
        """
        if not self.enabled:
            return 0

        pattern = f"{self.namespace}:*"
        try:
            keys = [key async for key in self.redis.scan_iter(match=pattern)]
            if not keys:
                return 0

            deleted = await self.redis.delete(*keys)
            logger.info(f"Invalidated {deleted} search cache entries")
            return int(deleted)

        except Exception as e:
            logger.warning(f"Search cache invalidation failed: {e}")
            return 0
