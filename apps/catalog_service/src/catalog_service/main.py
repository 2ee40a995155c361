"""Steamer Catalog Service - FastAPI application for Steam catalog enrichment.

This service aggregates Steam Store and SteamSpy data into one normalized
record per app and streams enrichment runs to clients with live progress.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from common.config import get_settings
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import get_runtime
from .routes import applist, apps, browse, search, stream
from .runtime import CatalogRuntime, build_runtime, close_runtime

# Get application settings
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.service.log_level),
    format=settings.service.log_format,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle.

    Builds the process-wide runtime (HTTP session, provider limiters and
    caches, orchestrator) and stores it on ``app.state`` for dependency
    injection. Closes the HTTP session on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        Control back to the framework after successful initialization.
    """
    logger.info("Initializing catalog runtime (%s)...", settings.environment.value)
    runtime = await build_runtime(settings)
    app.state.runtime = runtime
    try:
        yield
    finally:
        logger.info("Shutting down catalog service...")
        try:
            await close_runtime(runtime)
        except Exception:
            logger.exception("Error closing catalog runtime")
        app.state.runtime = None


# Create FastAPI app
app = FastAPI(
    title=settings.service.api_title,
    description=settings.service.api_description,
    version=settings.service.api_version,
    lifespan=lifespan,
)

# Add CORS middleware
# Known FastAPI/Starlette typing issue with _MiddlewareFactory
# See: https://github.com/fastapi/fastapi/discussions/10968
app.add_middleware(
    CORSMiddleware,  # ty: ignore[invalid-argument-type]
    allow_origins=settings.service.allowed_origins,
    allow_credentials=True,
    allow_methods=settings.service.allowed_methods,
    allow_headers=settings.service.allowed_headers,
)


@app.get("/health")
async def health_check(
    runtime: CatalogRuntime = Depends(get_runtime),
) -> dict[str, Any]:
    """Return service health with per-provider budget and cache diagnostics.

    Args:
        runtime: Injected catalog runtime.

    Returns:
        Health status dict including service metadata and, per provider,
        whether it is enabled, its available tokens and its cache size.
    """
    providers = {
        name: {
            "enabled": ctx.enabled,
            "available_tokens": round(ctx.limiter.available_tokens, 2),
            "max_tokens": ctx.limiter.max_tokens,
            "cached_entries": len(ctx.cache),
            "cache_capacity": ctx.cache.capacity,
        }
        for name, ctx in runtime.provider_contexts().items()
    }
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "steamer-catalog-service",
        "version": settings.service.api_version,
        "providers": providers,
    }


# Include API routers
app.include_router(stream.router, prefix="/api/apps", tags=["apps"])
app.include_router(apps.router, prefix="/api/apps", tags=["apps"])
app.include_router(search.router, prefix="/api/search", tags=["search"])
app.include_router(browse.router, prefix="/api/browse", tags=["browse"])
app.include_router(applist.router, prefix="/api/applist", tags=["applist"])


@app.get("/")
async def root() -> dict[str, Any]:
    """Return service metadata and a directory of available endpoints.

    Returns:
        Dict with service name, version, and endpoint paths.
    """
    return {
        "service": "Steamer Catalog Service",
        "version": settings.service.api_version,
        "description": settings.service.api_description,
        "endpoints": {
            "health": "/health",
            "stream": "/api/apps/stream",
            "apps": "/api/apps",
            "app": "/api/apps/{appid}",
            "search": "/api/search",
            "browse": "/api/browse",
            "applist": "/api/applist",
            "docs": "/docs",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_service.main:app",
        host=settings.service.catalog_service_host,
        port=settings.service.catalog_service_port,
        reload=settings.debug,
        log_level=settings.service.log_level.lower(),
    )
