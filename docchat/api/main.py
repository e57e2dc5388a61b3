"""
FastAPI application factory.

Wires the request middleware, CORS and the versioned routers. The lifespan
warms the shared service cache at startup and lets queued PNG conversions
finish before shutdown.

Dependencies: fastapi, uvicorn, docchat.api.routers, docchat.api.deps
System role: API entry point
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat.api.deps.dependencies import get_service_cache
from docchat.configs import get_settings
from docchat.observability.logger import configure_logging
from docchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import diagrams_router, documents_router, health_router

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)

    cache = get_service_cache()
    cache.artifact_store.ensure_directories()
    # build the long-lived services now rather than on the first request
    for name in ("diagram_service", "resolver", "mapper"):
        getattr(cache, name)
    logger.info(f"{__name__}:lifespan - services ready, artifacts at {cache.artifact_store.root}")

    yield

    await cache.png_writer.drain()
    cache.clear()
    logger.info(f"{__name__}:lifespan - shutdown complete")


def create_app() -> FastAPI:
    """Build the application with middleware and all routers under /api/v1."""
    app = FastAPI(
        title="Document Chat Assistant API",
        description="Document chat with figure citations and generated diagrams",
        version="0.1.0",
        lifespan=lifespan,
    )

    # last added runs first: correlation id is bound before the access log line
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID", "X-Process-Time-Ms"],
    )

    for router in (health_router, documents_router, diagrams_router):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("docchat.api.main:app", host="0.0.0.0", port=8000)
