"""FastAPI application factory for elpkgcheck."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from elpkgcheck import __version__
from elpkgcheck.api.deps import init_registry, reset_registry
from elpkgcheck.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from elpkgcheck.api.routers import analysis, registry
from elpkgcheck.api.schemas import HealthResponse
from elpkgcheck.registry.base import InMemoryRegistry
from elpkgcheck.registry.loader import load_registry
from elpkgcheck.settings import Settings

logger = logging.getLogger("elpkgcheck.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Load the package registry for the lifetime of the application."""
    settings: Settings = app.state.settings
    if settings.registry_file is not None:
        pkg_registry = load_registry(settings.registry_file)
        logger.info(
            "Loaded registry from %s (%d packages)", settings.registry_file, len(pkg_registry)
        )
    else:
        pkg_registry = InMemoryRegistry()
        logger.info("No registry file configured; all dependencies will be uninstallable")
    init_registry(pkg_registry)
    try:
        yield
    finally:
        reset_registry()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="elpkgcheck",
        description="Validates Emacs Lisp package header metadata.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestBodyLimitMiddleware)

    app.include_router(analysis.router, prefix="/analyze", tags=["analysis"])
    app.include_router(registry.router, prefix="/registry", tags=["registry"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "elpkgcheck API Server v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.effective_port,
    )

    uvicorn.run(
        "elpkgcheck.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
