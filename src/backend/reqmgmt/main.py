"""
Requirements Search Backend
FastAPI Application Entry Point
"""

import logging
import logging.handlers
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.health import router as health_router
from .api.v1.resources import get_resource_registry_dep, router as resources_router
from .api.v1.search import get_search_orchestrator_dep, router as search_router
from .database.database import (
    Base,
    close_postgresql,
    close_redis,
    get_redis_client,
    get_session_factory,
    init_postgresql,
    init_redis,
    postgresql_manager,
    redis_manager,
)
from .database.repositories import build_repositories
from .middleware import LoggingMiddleware
from .services.config.configuration_service import get_config_service
from .services.resources import ResourceRegistry, build_resource_registry
from .services.search import (
    ResultConsolidator,
    SearchCache,
    SearchOrchestrator,
    build_adapters,
)

# Load environment variables
load_dotenv()


def configure_logging():
    """
    Configure structured logging using structlog.

    - Production (ENV=production): JSON output for log aggregation
    - Development (ENV=development): Human-readable console output
    - Includes automatic context: timestamp, level, logger name, correlation_id
    - LOG_FILE_PATH enables a rotating file handler alongside stdout
    """
    env = os.getenv("ENV", "development").lower()
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if env == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # Standard library loggers are rendered through the same processor chain
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    root_logger = logging.getLogger()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    log_file_path = os.getenv("LOG_FILE_PATH")
    if log_file_path:
        log_file_path = str(Path(log_file_path).resolve())
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file_path,
            maxBytes=10 * 1024 * 1024,  # 10MB per file
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(log_level)

    # Reduce noise from verbose libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return structlog.get_logger(__name__)


# Initialize structured logging
logger = configure_logging()

# Global instances
search_orchestrator: Optional[SearchOrchestrator] = None
resource_registry: Optional[ResourceRegistry] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown"""

    logger.info("Starting requirements search backend...")

    global search_orchestrator, resource_registry

    config_service = get_config_service()

    # Redis only backs the search cache; run uncached when it is unavailable
    redis_client = None

    if redis_manager.enable_caching:
        try:
            await init_redis()
            redis_client = await get_redis_client()
            logger.info("✓ Redis initialized")
        except Exception as e:
            logger.warning(f"Redis initialization failed: {e}. Continuing without search caching.")
    else:
        logger.info("Redis disabled via ENABLE_REDIS_CACHING=false")

    init_postgresql()
    logger.info("✓ PostgreSQL initialized")

    if os.getenv("CREATE_TABLES", "false").lower() == "true":
        async with postgresql_manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✓ Database tables created/verified")

    repositories = build_repositories(get_session_factory())

    cache = SearchCache(
        redis_client,
        ttl=config_service.get_cache_ttl(),
        namespace=config_service.get_cache_namespace()
    )

    orchestration_config = config_service.get_orchestration_config()
    orchestration_config["default_limit"] = config_service.get_default_limit()
    orchestration_config["max_limit"] = config_service.get_max_limit()

    search_orchestrator = SearchOrchestrator(
        adapters=build_adapters(repositories),
        cache=cache,
        consolidator=ResultConsolidator(),
        config=orchestration_config,
        suggestions_config=config_service.get_suggestions_config()
    )
    logger.info("✓ SearchOrchestrator initialized")

    resource_registry = build_resource_registry(
        repositories,
        max_items=config_service.get_resource_item_limit()
    )
    logger.info(f"✓ ResourceRegistry initialized: {resource_registry.list_provider_names()}")

    logger.info("All services initialized successfully")

    yield

    logger.info("Shutting down requirements search backend...")

    try:
        await close_redis()
        logger.info("✓ Redis closed")
    except Exception as e:
        logger.error(f"Error closing Redis: {e}")

    try:
        await close_postgresql()
        logger.info("✓ PostgreSQL closed")
    except Exception as e:
        logger.error(f"Error closing PostgreSQL: {e}")

    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Requirements Search",
    description="Cross-entity search and resource catalog for product requirements",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)


def get_search_orchestrator() -> SearchOrchestrator:
    """Get search orchestrator instance for dependency injection"""
    return search_orchestrator


def get_resource_registry() -> ResourceRegistry:
    """Get resource registry instance for dependency injection"""
    return resource_registry


# Include routers
app.include_router(search_router)
app.include_router(resources_router)
app.include_router(health_router)

# Override dependencies in app (not router)
app.dependency_overrides[get_search_orchestrator_dep] = get_search_orchestrator
app.dependency_overrides[get_resource_registry_dep] = get_resource_registry


@app.get("/")
async def root():
    """Root endpoint - service banner"""
    return {
        "service": "Requirements Search",
        "version": "1.0.0",
        "endpoints": {
            "search": "/api/v1/search",
            "suggestions": "/api/v1/search/suggestions",
            "resources": "/api/v1/resources",
            "health": "/api/v1/health",
            "docs": "/docs"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reqmgmt.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level="info"
    )
