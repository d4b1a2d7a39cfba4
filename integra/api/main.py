"""
integra.api.main - FastAPI Application Factory

Creates and configures the FastAPI application for the integration service.

Usage:
    # Development
    uvicorn integra.api.main:app --reload --port 9090

    # Production
    uvicorn integra.api.main:app --host 0.0.0.0 --port 9090

Environment Variables:
    DELETE_ENABLED: Allow destructive actions such as delete_user (default: false)
    INTEGRA_DOWNSTREAM_BASE_URL: Root URL of the auth/database/notification services
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import httpx
from fastapi import FastAPI

from integra.api.endpoints import collaborators, process
from integra.core.hooks import HookRegistry
from integra.core.pipeline import IntegrationPipeline
from integra.integrations import AuthAdapter, DataAdapter, NotifyAdapter
from integra.settings import IntegraSettings, get_settings

logger = logging.getLogger(__name__)


def build_pipeline(
    settings: IntegraSettings,
    client: httpx.AsyncClient,
    hooks: HookRegistry | None = None,
) -> IntegrationPipeline:
    """
    Wire the three adapters and the pipeline around one shared HTTP client.

    Args:
        settings: Source of the base URL, timeout and data access policy
        client: Shared async client (its transport is what tests substitute)
        hooks: Optional hook registry for observers

    Returns:
        Ready-to-use IntegrationPipeline
    """
    base_url = settings.downstream_base_url
    timeout = settings.downstream_timeout_seconds
    return IntegrationPipeline(
        auth=AuthAdapter(client, base_url, timeout),
        data=DataAdapter(client, base_url, timeout, policy=settings.build_data_policy()),
        notify=NotifyAdapter(client, base_url, timeout),
        hooks=hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Opens the shared downstream HTTP client and wires the pipeline on
    startup (unless one was injected), closes the client on shutdown.
    """
    # Startup
    logger.info("Starting integra API server...")
    settings: IntegraSettings = app.state.settings

    client: httpx.AsyncClient | None = None
    if getattr(app.state, "pipeline", None) is None:
        client = httpx.AsyncClient()
        app.state.pipeline = build_pipeline(settings, client)
        logger.info(
            f"Pipeline wired to {settings.downstream_base_url} "
            f"(timeout={settings.downstream_timeout_seconds}s, "
            f"destructive_actions_enabled={settings.destructive_actions_enabled})"
        )

    yield

    # Shutdown
    logger.info("Shutting down integra API server...")
    if client is not None:
        await client.aclose()
        app.state.pipeline = None
        logger.info("Downstream HTTP client closed")


def create_app(
    settings: IntegraSettings | None = None,
    pipeline: IntegrationPipeline | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        pipeline: Pre-built pipeline; skips lifespan wiring when given

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="integra API",
        description="Orchestrates auth, data fetch and notification behind one endpoint",
        version="0.1.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.pipeline = pipeline

    # Orchestration entry point
    app.include_router(process.router, prefix="/api", tags=["process"])

    # Simulated collaborators
    app.include_router(collaborators.router, tags=["collaborators"])

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
            "services": {
                "auth": "operational",
                "database": "operational",
                "notification": "operational",
            },
        }

    return app


# Create the application instance
app = create_app()
