"""
Database configuration for Redis and PostgreSQL.

Redis: Search result cache (5 minute TTL, search:* namespace)
PostgreSQL: Planning entities with full-text search
"""

import logging
import os
from typing import Optional
from redis.asyncio import Redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for PostgreSQL models."""
    pass


class RedisManager:
    """
    Redis manager for the search result cache.

    Features:
    - Async connection pooling
    - Feature flag to run without a cache (ENABLE_REDIS_CACHING=false)
    """

    def __init__(self):
        """Initialize Redis manager with .env configuration."""
        self.redis_url = os.getenv("REDIS_URL")
        self.redis_host = os.getenv("REDIS_HOST", "localhost")
        self.redis_port = int(os.getenv("REDIS_PORT", "6379"))
        self.redis_password = os.getenv("REDIS_PASSWORD")
        self.redis_db = int(os.getenv("REDIS_DB", "0"))
        self.enable_caching = os.getenv("ENABLE_REDIS_CACHING", "true").lower() == "true"

        self.client: Optional[Redis] = None
        self._initialized = False

    async def init_redis(self):
        """Initialize Redis connection."""
        if self._initialized:
            return

        try:
            # Use REDIS_URL if available, otherwise construct from components
            if self.redis_url:
                self.client = Redis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    encoding="utf-8"
                )
            else:
                self.client = Redis(
                    host=self.redis_host,
                    port=self.redis_port,
                    password=self.redis_password,
                    db=self.redis_db,
                    decode_responses=True,
                    encoding="utf-8"
                )

            # Test connection
            await self.client.ping()
            self._initialized = True
            logger.info(f"Redis connected: {self.redis_host}:{self.redis_port}")

        except Exception as e:
            logger.error(f"Redis connection failed: {e}")
            self.client = None
            raise

    async def is_healthy(self) -> bool:
        """Ping Redis; False when not initialized or unreachable."""
        if not self._initialized or not self.client:
            return False
        try:
            return bool(await self.client.ping())
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            return False

    async def close(self):
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            logger.info("Redis connection closed")
        self.client = None
        self._initialized = False


class PostgreSQLManager:
    """
    PostgreSQL manager for the planning entity store.

    Features:
    - Async SQLAlchemy engine with connection pooling
    - Session factory shared by the entity repositories
    """

    def __init__(self):
        """Initialize PostgreSQL manager with .env configuration."""
        self.postgres_host = os.getenv("POSTGRES_HOST", "localhost")
        self.postgres_port = int(os.getenv("POSTGRES_PORT", "5432"))
        self.postgres_db = os.getenv("POSTGRES_DB", "requirements")
        self.postgres_user = os.getenv("POSTGRES_USER", "postgres")
        self.postgres_password = os.getenv("POSTGRES_PASSWORD", "postgres")
        self.pool_size = int(os.getenv("POSTGRES_POOL_SIZE", "10"))

        self.engine = None
        self.session_factory: Optional[async_sessionmaker] = None
        self._initialized = False

    def init_db(self):
        """Initialize PostgreSQL engine and session factory."""
        if self._initialized:
            return

        # Create async database URL
        database_url = (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

        # Pooled engine: repositories open one session per call and
        # sibling adapters run concurrently
        self.engine = create_async_engine(
            database_url,
            echo=False,  # Set to True for SQL debugging
            pool_size=self.pool_size,
            pool_pre_ping=True
        )

        # Create session factory
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True
        )

        self._initialized = True
        logger.info(f"PostgreSQL connected: {self.postgres_host}:{self.postgres_port}/{self.postgres_db}")

    async def is_healthy(self) -> bool:
        """Run SELECT 1; False when not initialized or unreachable."""
        if not self._initialized or not self.engine:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"PostgreSQL health check failed: {e}")
            return False

    async def close(self):
        """Close PostgreSQL engine."""
        if self.engine:
            await self.engine.dispose()
            logger.info("PostgreSQL engine disposed")
        self.engine = None
        self.session_factory = None
        self._initialized = False


# Global manager instances
redis_manager = RedisManager()
postgresql_manager = PostgreSQLManager()


# Initialization functions
async def init_redis():
    """Initialize Redis connection."""
    await redis_manager.init_redis()


def init_postgresql():
    """Initialize PostgreSQL engine."""
    postgresql_manager.init_db()


# Dependency injection functions
async def get_redis_client() -> Redis:
    """
    Dependency for getting Redis client.

    Returns:
        Redis client instance
    """
    if not redis_manager._initialized:
        await redis_manager.init_redis()

    return redis_manager.client


def get_session_factory() -> async_sessionmaker:
    """
    Get the shared async session factory, initializing the engine on first use.

    Returns:
        async_sessionmaker bound to the PostgreSQL engine
    """
    if not postgresql_manager._initialized:
        postgresql_manager.init_db()

    return postgresql_manager.session_factory


# Cleanup functions
async def close_redis():
    """Close Redis connections."""
    await redis_manager.close()


async def close_postgresql():
    """Close PostgreSQL connections."""
    await postgresql_manager.close()
