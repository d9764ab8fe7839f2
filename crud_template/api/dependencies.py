# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for request context, API key auth and services
# ==============================================================================

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Header, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from crud_template.core.constants import DatabaseConstants
from crud_template.core.security import ApiKeyStrategy
from crud_template.core.settings import settings
from crud_template.database.mongodb import MongoDB
from crud_template.database.repositories.crud_repository import CrudRepository
from crud_template.services.crud_service import CrudService
from crud_template.services.health_service import HealthService
from crud_template.utils.helpers import generate_request_id


# ==============================================================================
# REQUEST CONTEXT DEPENDENCIES
# ==============================================================================

async def get_request_id(
    request: Request,
    request_id: Annotated[
        Optional[str],
        Header(
            alias=settings.REQUEST_ID_HEADER,
            description="Request correlation id",
        ),
    ] = None,
) -> str:
    """
    Resolve the request correlation id.

    Prefers the header, then the id assigned by RequestContextMiddleware.
    """
    if request_id:
        return request_id
    return getattr(request.state, "request_id", None) or generate_request_id()


async def get_channel_id(
    request: Request,
    channel_id: Annotated[
        Optional[str],
        Header(
            alias=settings.CHANNEL_ID_HEADER,
            description="Calling channel id",
        ),
    ] = None,
) -> Optional[str]:
    if channel_id:
        return channel_id
    return getattr(request.state, "channel_id", None)


RequestIdDep = Annotated[str, Depends(get_request_id)]


# ==============================================================================
# AUTHENTICATION DEPENDENCIES
# ==============================================================================

@lru_cache()
def get_api_key_strategy() -> ApiKeyStrategy:
    """API key strategy built once from SERVICE_API_KEYS."""
    return ApiKeyStrategy(settings.SERVICE_API_KEYS)


async def verify_service_key(
    request_id: RequestIdDep,
    strategy: Annotated[ApiKeyStrategy, Depends(get_api_key_strategy)],
    service_key: Annotated[
        Optional[str],
        Header(
            alias=settings.SERVICE_KEY_HEADER,
            description="Service API key",
        ),
    ] = None,
) -> None:
    """
    Reject the request unless it carries a configured service key.

    Raises:
        UnauthorizedError: If the key is missing or unknown
    """
    strategy.validate_api_key(service_key, request_id)


# ==============================================================================
# DATABASE & SERVICE DEPENDENCIES
# ==============================================================================

async def get_database() -> AsyncIOMotorDatabase:
    """Connected MongoDB database."""
    return MongoDB.get_database()


DatabaseDep = Annotated[AsyncIOMotorDatabase, Depends(get_database)]


async def get_crud_template_service(
    database: DatabaseDep,
) -> CrudService[Dict[str, Any]]:
    """Service of the crud-template entity."""
    repository: CrudRepository[Dict[str, Any]] = CrudRepository(
        database[DatabaseConstants.CRUD_TEMPLATE_COLLECTION],
        name="CrudTemplateRepository",
    )
    return CrudService(repository, name="CrudTemplateService")


async def get_health_service(request: Request) -> HealthService:
    return HealthService(
        settings,
        database_check=MongoDB.health_check,
        started_at=getattr(request.app.state, "started_at", None),
    )
