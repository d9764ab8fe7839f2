# ==============================================================================
# HEALTH ENDPOINTS - Root and Health Routes
# ==============================================================================
# Registered outside the global API prefix
# ==============================================================================

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from crud_template.api.dependencies import get_health_service
from crud_template.core.constants import HealthConstants, RouteConstants
from crud_template.core.settings import settings
from crud_template.schemas.base import HealthResponse, RootResponse
from crud_template.services.health_service import HealthService

router = APIRouter(tags=["Health"])


@router.get(
    RouteConstants.HEALTH,
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}},
    summary="Health check",
    description="Check disk, memory and database health.",
)
async def health_check(
    service: Annotated[HealthService, Depends(get_health_service)],
) -> JSONResponse:
    """Aggregate health; 503 when any indicator is down."""
    result = await service.get_health_status()
    status_code = (
        status.HTTP_200_OK
        if result.status == HealthConstants.OK
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(status_code=status_code, content=result.model_dump())


@router.get(
    RouteConstants.ROOT,
    response_model=RootResponse,
    summary="Root endpoint",
    description="Application name, version and links.",
)
async def root() -> RootResponse:
    return RootResponse(
        name=settings.APP_NAME,
        version=settings.APP_VERSION,
        docs=f"/{settings.SWAGGER_DOCS}",
        health=RouteConstants.HEALTH,
    )
