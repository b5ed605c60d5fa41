"""
Logging Context Management Utilities

Provides helpers for adding and managing context in structured logs.
Context automatically appears in all log statements within the scope.
"""

import time
from contextlib import contextmanager
from typing import Optional
import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars


def bind_search_context(
    query: Optional[str] = None,
    cache_key: Optional[str] = None,
    **kwargs
):
    """
    Bind search-related context to all logs.

    Args:
        query: Raw search query
        cache_key: Cache key derived from the search options
        **kwargs: Additional context key-value pairs

    Example:
        ```python
        bind_search_context(query="gateway", cache_key="search:ab12...")
        logger.info("cache miss")  # Includes query and cache_key
        ```
    """
    context = {}

    if query is not None:
        context["search_query"] = query
    if cache_key:
        context["cache_key"] = cache_key

    context.update({key: value for key, value in kwargs.items() if value is not None})
    bind_contextvars(**context)


@contextmanager
def log_context(**context_vars):
    """
    Context manager for temporary logging context.

    Context is automatically added on enter and removed on exit.

    Example:
        ```python
        with log_context(operation="search", path="ranked"):
            logger.info("retrieving")  # Includes operation, path
        ```
    """
    bind_contextvars(**context_vars)

    try:
        yield
    finally:
        unbind_contextvars(*context_vars.keys())


@contextmanager
def log_performance(operation_name: str, logger=None):
    """
    Context manager for logging operation performance.

    Automatically logs operation start, end, and duration.

    Example:
        ```python
        with log_performance("resource_catalog"):
            descriptors = await registry.get_all()
        # Automatically logs: operation_name, duration_ms
        ```
    """
    if logger is None:
        logger = structlog.get_logger()

    start_time = time.time()

    logger.debug(f"{operation_name}_started", operation=operation_name)

    try:
        yield
    finally:
        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"{operation_name}_completed",
            operation=operation_name,
            duration_ms=duration_ms
        )
