# ==============================================================================
# CRUD CONTROLLER - Generic HTTP Routes
# ==============================================================================
# Builds the seven CRUD routes of one entity on top of a CrudService
# ==============================================================================

# Handler annotations reference the schemas passed at construction,
# so they must stay evaluated at definition time.

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from fastapi import APIRouter, Depends, Request, params, status
from pydantic import BaseModel

from crud_template.api.dependencies import RequestIdDep
from crud_template.core.constants import DatabaseConstants
from crud_template.schemas.base import BulkCreateResult
from crud_template.services.crud_service import CrudService
from crud_template.utils.helpers import serialize_document

logger = logging.getLogger(__name__)

ServiceProvider = Callable[..., Any]


class CrudController:
    """
    Generic controller exposing an entity over HTTP.

    Routes (relative to ``prefix``):
        GET    ""         find_all
        GET    "/search"  find_many, filter taken from the query string
        POST   ""         create
        POST   "/batch"   create_many
        GET    "/{id}"    find_one
        PUT    "/{id}"    update
        DELETE "/{id}"    remove

    Static paths are registered before ``/{id}`` so they are never
    captured as an identifier.

    Attributes:
        router: APIRouter holding the routes

    Example:
        >>> controller = CrudController(
        ...     service_provider=get_account_service,
        ...     name="AccountController",
        ...     create_schema=AccountCreate,
        ...     update_schema=AccountUpdate,
        ...     prefix="/accounts",
        ...     tags=["accounts"],
        ... )
        >>> app.include_router(controller.router)
    """

    def __init__(
        self,
        service_provider: ServiceProvider,
        name: str,
        create_schema: Type[BaseModel],
        update_schema: Type[BaseModel],
        field_identifier: str = DatabaseConstants.DEFAULT_FIELD_IDENTIFIER,
        prefix: str = "",
        tags: Optional[List[str]] = None,
        dependencies: Optional[Sequence[params.Depends]] = None,
    ) -> None:
        """
        Initialize controller and register its routes.

        Args:
            service_provider: Dependency returning the entity's CrudService
            name: Component name for log labels
            create_schema: Body schema of create and of each batch element
            update_schema: Body schema of a partial update
            field_identifier: Field addressed by ``/{id}``
            prefix: Route prefix of the entity
            tags: OpenAPI tags
            dependencies: Dependencies applied to every route
        """
        self._service_provider = service_provider
        self._name = name
        self._create_schema = create_schema
        self._update_schema = update_schema
        self._field_identifier = field_identifier
        self.router = APIRouter(
            prefix=prefix,
            tags=tags or [],
            dependencies=list(dependencies or []),
        )
        self._register_routes()

    def _log(self, operation: str, message: str, request_id: str) -> None:
        logger.info(
            f"[{self._name}:{operation}]: {message}",
            extra={"request_id": request_id},
        )

    def _register_routes(self) -> None:
        router = self.router
        field_identifier = self._field_identifier
        CreateSchema = self._create_schema
        UpdateSchema = self._update_schema
        ServiceDep = Depends(self._service_provider)

        @router.get(
            "",
            summary="List entities",
            description="Fetch every stored entity.",
        )
        async def find_all(
            request_id: RequestIdDep,
            service: CrudService = ServiceDep,
        ) -> List[Dict[str, Any]]:
            self._log("find_all", "API called to fetch all entities.", request_id)
            return serialize_document(await service.find_all(request_id))

        @router.get(
            "/search",
            summary="Search entities",
            description="Fetch the entities matching the query string filters.",
        )
        async def find_many(
            request: Request,
            request_id: RequestIdDep,
            service: CrudService = ServiceDep,
        ) -> List[Dict[str, Any]]:
            self._log(
                "find_many",
                "API called to fetch all entities using filters.",
                request_id,
            )
            filters = dict(request.query_params)
            return serialize_document(await service.find_many(filters, request_id))

        @router.post(
            "",
            status_code=status.HTTP_201_CREATED,
            summary="Create entity",
            description="Create one entity; an existing identifier is a conflict.",
        )
        async def create(
            payload: CreateSchema,
            request_id: RequestIdDep,
            service: CrudService = ServiceDep,
        ) -> Dict[str, Any]:
            self._log("create", "API called to create an entity.", request_id)
            data = payload.model_dump(
                by_alias=True,
                exclude_unset=True,
                exclude_none=True,
            )
            created = await service.create(data, request_id, field_identifier)
            return serialize_document(created)

        @router.post(
            "/batch",
            status_code=status.HTTP_201_CREATED,
            response_model=BulkCreateResult,
            summary="Create entities in bulk",
            description="Create several entities; existing identifiers are skipped.",
        )
        async def create_many(
            payload: List[CreateSchema],
            request_id: RequestIdDep,
            service: CrudService = ServiceDep,
        ) -> BulkCreateResult:
            self._log("create_many", "API called to create many entities.", request_id)
            data = [
                item.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
                for item in payload
            ]
            return await service.create_many(data, request_id, field_identifier)

        @router.get(
            "/{id}",
            summary="Get entity",
            description="Fetch one entity by its identifier.",
        )
        async def find_one(
            id: str,
            request_id: RequestIdDep,
            service: CrudService = ServiceDep,
        ) -> Optional[Dict[str, Any]]:
            self._log("find_one", "API called to fetch an entity using ID.", request_id)
            entity = await service.find_one(id, request_id, field_identifier)
            return serialize_document(entity)

        @router.put(
            "/{id}",
            summary="Update entity",
            description="Merge the given fields into an existing entity.",
        )
        async def update(
            id: str,
            payload: UpdateSchema,
            request_id: RequestIdDep,
            service: CrudService = ServiceDep,
        ) -> Dict[str, Any]:
            self._log("update", "API called to update an entity using ID.", request_id)
            data = payload.model_dump(exclude_unset=True)
            updated = await service.update(id, data, request_id, field_identifier)
            return serialize_document(updated)

        @router.delete(
            "/{id}",
            summary="Delete entity",
            description="Delete one entity by its identifier.",
        )
        async def remove(
            id: str,
            request_id: RequestIdDep,
            service: CrudService = ServiceDep,
        ) -> str:
            self._log("remove", "API called to delete an entity using ID.", request_id)
            return await service.remove(id, request_id, field_identifier)
