"""
integra.api.deps - FastAPI Dependencies

Provides reusable dependencies for API endpoints:
- get_pipeline: Orchestration pipeline wired at startup
- get_app_settings: Settings the app was created with
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from integra.core.pipeline import IntegrationPipeline
from integra.settings import IntegraSettings, get_settings

logger = logging.getLogger(__name__)


def get_pipeline(request: Request) -> IntegrationPipeline:
    """
    Get the orchestration pipeline from app state.

    Raises:
        HTTPException: If the pipeline has not been initialized
    """
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        logger.error("Pipeline not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pipeline not available",
        )
    return pipeline


def get_app_settings(request: Request) -> IntegraSettings:
    """Get the settings the app was created with, falling back to the cached ones."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


# Type aliases for dependencies
Pipeline = Annotated[IntegrationPipeline, Depends(get_pipeline)]
AppSettings = Annotated[IntegraSettings, Depends(get_app_settings)]
