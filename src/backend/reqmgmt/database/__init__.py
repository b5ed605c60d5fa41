"""
Database package for the requirements search backend.

Provides Redis and PostgreSQL database management for:
- Redis: Search result cache with 5 minute TTL
- PostgreSQL: Planning entities (epics, user stories, requirements, ...)
"""

from .database import (
    Base,
    RedisManager,
    PostgreSQLManager,
    redis_manager,
    postgresql_manager,
    init_redis,
    init_postgresql,
    get_redis_client,
    get_session_factory,
    close_redis,
    close_postgresql
)

__all__ = [
    "Base",
    "RedisManager",
    "PostgreSQLManager",
    "redis_manager",
    "postgresql_manager",
    "init_redis",
    "init_postgresql",
    "get_redis_client",
    "get_session_factory",
    "close_redis",
    "close_postgresql"
]
