# ==============================================================================
# CRUD SERVICE - Generic Business Logic Layer
# ==============================================================================
# Delegates to the repository, logging every call with its request id
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Generic, List, Mapping, Optional, Sequence

from crud_template.core.constants import DatabaseConstants
from crud_template.database.repositories.crud_repository import CrudRepository, T
from crud_template.schemas.base import BulkCreateResult

logger = logging.getLogger(__name__)

DEFAULT_FIELD = DatabaseConstants.DEFAULT_FIELD_IDENTIFIER


class CrudService(Generic[T]):
    """
    Generic service in front of a CrudRepository.

    Signatures mirror the repository. Each method writes one log line
    and delegates; errors from the repository propagate unchanged.

    Example:
        >>> service = CrudService(repository, name="AccountService")
        >>> await service.find_all(request_id)
    """

    def __init__(
        self,
        repository: CrudRepository[T],
        name: str = "CrudService",
    ) -> None:
        self._repository = repository
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def _log(self, operation: str, message: str, request_id: str) -> None:
        logger.info(
            f"[{self._name}:{operation}]: {message}",
            extra={"request_id": request_id},
        )

    async def find_all(self, request_id: str) -> List[T]:
        self._log("find_all", "API called to fetch all entities.", request_id)
        return await self._repository.find_all(request_id)

    async def find_many(
        self,
        filters: Mapping[str, Any],
        request_id: str,
    ) -> List[T]:
        self._log(
            "find_many",
            "API called to fetch all entities using filters.",
            request_id,
        )
        return await self._repository.find_many(filters, request_id)

    async def find_one(
        self,
        value: Any,
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> Optional[T]:
        self._log("find_one", "API called to fetch an entity using ID.", request_id)
        return await self._repository.find_one(value, request_id, field_identifier)

    async def create(
        self,
        data: T,
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> T:
        self._log("create", "API called to create an entity.", request_id)
        return await self._repository.create(data, request_id, field_identifier)

    async def create_many(
        self,
        data: Sequence[T],
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> BulkCreateResult:
        self._log("create_many", "API called to create many entities.", request_id)
        return await self._repository.create_many(data, request_id, field_identifier)

    async def update(
        self,
        field_value: Any,
        data: Mapping[str, Any],
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> T:
        self._log("update", "API called to update an entity using ID.", request_id)
        return await self._repository.update(
            field_value,
            data,
            request_id,
            field_identifier,
        )

    async def remove(
        self,
        field_value: Any,
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> str:
        self._log("remove", "API called to delete an entity using ID.", request_id)
        return await self._repository.remove(field_value, request_id, field_identifier)
