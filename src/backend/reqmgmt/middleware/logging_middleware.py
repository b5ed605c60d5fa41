"""
Logging Middleware for Correlation ID and Search Request Context

Every request gets a correlation ID (taken from X-Correlation-ID or
generated) that is echoed back in the response. Requests under the search
API additionally bind the raw query text and requested entity kinds, so the
orchestrator, adapter and cache log lines can be traced back to the search
that produced them.
"""

import uuid
import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

from ..utils.logging_context import bind_search_context

logger = structlog.get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
SEARCH_PATH_PREFIX = "/api/v1/search"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to inject correlation IDs and search context into all logs.

    - Accepts correlation_id from the X-Correlation-ID header, or generates one
    - Binds search_query / entity_types for search API requests
    - Logs request start, completion and failure with timing
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        clear_contextvars()

        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        bind_contextvars(
            correlation_id=correlation_id,
            request_method=request.method,
            request_path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        is_search = request.url.path.startswith(SEARCH_PATH_PREFIX)
        if is_search:
            self._bind_search_request(request)

        start_time = time.time()
        logger.info("request_started", search=is_search)

        try:
            response = await call_next(request)

            response.headers[CORRELATION_HEADER] = correlation_id
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=self._elapsed_ms(start_time),
            )
            return response

        except Exception as e:
            logger.error(
                "request_failed",
                error_type=type(e).__name__,
                duration_ms=self._elapsed_ms(start_time),
                exc_info=True,
            )
            raise

        finally:
            clear_contextvars()

    @staticmethod
    def _bind_search_request(request: Request) -> None:
        params = request.query_params
        bind_search_context(
            query=params.get("query"),
            entity_types=params.getlist("entity_types") or None,
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)
