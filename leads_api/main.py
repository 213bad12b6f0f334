"""
FastAPI application entry point for the Leads API.

This module builds the single service behind the leads dashboard. It reads
configuration, owns the tenant pool registry lifecycle, registers the
reporting routers and the error handler, and selects the presentation layer:

- API only (DASHBOARD_DIR unset): GET / returns a JSON status document
- API + dashboard (DASHBOARD_DIR set): the directory is served at /, with
  index.html as the landing page; API routes keep precedence

Run with:
    leads-api
    # or
    uvicorn leads_api.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from leads_api.api import filters_router, leads_router, stats_router
from leads_api.core.config import Settings, get_settings
from leads_api.core.database import TenantPoolRegistry
from leads_api.core.dependencies import SettingsDep
from leads_api.core.exceptions import LeadsApiError
from leads_api.models.schemas import StatusResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for startup and shutdown.

    On startup:
        - Create the tenant pool registry unless one was injected
        - Log the listening port, database server and tenant databases

    On shutdown:
        - Close every tenant pool
    """
    settings: Settings = app.state.settings
    if app.state.registry is None:
        app.state.registry = TenantPoolRegistry(settings)
    registry: TenantPoolRegistry = app.state.registry

    logger.info(f"Leads API starting on port {settings.port}")
    logger.info(f"Database server: {registry.server}")
    logger.info(f"Databases: {', '.join(registry.databases)}")

    yield

    logger.info("Leads API shutting down")
    await registry.close()


async def leads_api_error_handler(request: Request, exc: LeadsApiError) -> JSONResponse:
    """Render any LeadsApiError as ``{"error": message}`` with its status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other failure as a 500 with the same ``{"error": ...}`` body."""
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[TenantPoolRegistry] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Settings are read here, so missing database credentials abort startup
    instead of failing the first request.

    Args:
        settings: Configuration; defaults to the cached environment settings.
        registry: Pre-built tenant pool registry; created in the lifespan
            when omitted.

    Raises:
        pydantic.ValidationError: If required settings are missing.
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    app = FastAPI(
        title="Leads API",
        version="1.0.0",
        description="Read-only reporting API over per-producto lead databases.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LeadsApiError, leads_api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(leads_router, prefix="/api/leads", tags=["leads"])
    app.include_router(stats_router, prefix="/api/stats", tags=["stats"])
    app.include_router(filters_router, prefix="/api/filters", tags=["filters"])

    @app.get("/health")
    async def health_check():
        """Liveness probe; does not touch any database."""
        return {"status": "healthy"}

    if settings.dashboard_dir:
        # Mounted last so the API routes above are matched first
        app.mount("/", StaticFiles(directory=settings.dashboard_dir, html=True), name="dashboard")
        logger.info(f"Serving dashboard from {settings.dashboard_dir}")
    else:
        @app.get("/", response_model=StatusResponse)
        async def root(settings: SettingsDep) -> StatusResponse:
            """Service status with the configured productos and server."""
            return StatusResponse(productos=list(settings.tenant_databases), server=settings.db_server)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "leads_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
