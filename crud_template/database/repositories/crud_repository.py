# ==============================================================================
# CRUD REPOSITORY - Generic Document Access
# ==============================================================================
# Repository Pattern over a single MongoDB collection
# Translates every store failure into Conflict, BadRequest or InternalServer
# ==============================================================================

from __future__ import annotations

import logging
from typing import (
    Any,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from crud_template.core.constants import DatabaseConstants, Messages
from crud_template.core.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    InternalServerError,
)
from crud_template.schemas.base import BulkCreateResult
from crud_template.utils.helpers import (
    build_identifier_filter,
    build_set_document,
    identifier_key,
)

logger = logging.getLogger(__name__)

# Stored document shape; documents are schema-flexible mappings
T = TypeVar("T", bound=Dict[str, Any])

DEFAULT_FIELD = DatabaseConstants.DEFAULT_FIELD_IDENTIFIER


class CrudRepository(Generic[T]):
    """
    Generic repository providing CRUD operations on one collection.

    Every operation takes the request correlation id, used for log
    lines and attached to every raised error. Single-entity operations
    address the entity by ``field_identifier`` (default ``_id``).

    Error Translation:
        - ConflictError: duplicate identifier on create, empty bulk insert
        - BadRequestError: update of a missing entity
        - InternalServerError: any other store failure, including a
          delete that removed nothing

    Attributes:
        _collection: Motor collection holding the entities
        _name: Component name used as the log label

    Example:
        >>> repo = CrudRepository(db["accounts"], name="AccountRepository")
        >>> await repo.create({"_id": "a-1", "name": "main"}, request_id)
        >>> await repo.find_one("a-1", request_id)
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        name: str = "CrudRepository",
    ) -> None:
        """
        Initialize repository.

        Args:
            collection: Motor collection for operations
            name: Component name for log labels
        """
        self._collection = collection
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def _log(self, operation: str, message: str, request_id: str) -> None:
        logger.info(
            f"[{self._name}:{operation}]: {message}",
            extra={"request_id": request_id},
        )

    # ==========================================================================
    # READ OPERATIONS
    # ==========================================================================

    async def find_all(self, request_id: str) -> List[T]:
        """
        Retrieve every stored entity.

        Args:
            request_id: Request correlation id

        Returns:
            List of all entities

        Raises:
            InternalServerError: If the query fails
        """
        self._log("find_all", "API called to fetch all entities.", request_id)
        try:
            return await self._collection.find({}).to_list(length=None)
        except Exception as e:
            raise InternalServerError(request_id=request_id, error=e) from e

    async def find_many(
        self,
        filters: Mapping[str, Any],
        request_id: str,
    ) -> List[T]:
        """
        Retrieve entities matching a filter.

        The filter is handed to the store verbatim.

        Args:
            filters: Query document
            request_id: Request correlation id

        Returns:
            List of matching entities
        """
        self._log(
            "find_many",
            "API called to fetch all entities using filters.",
            request_id,
        )
        try:
            return await self._collection.find(dict(filters)).to_list(length=None)
        except Exception as e:
            raise InternalServerError(request_id=request_id, error=e) from e

    async def find_one(
        self,
        value: Any,
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> Optional[T]:
        """
        Retrieve a single entity by an arbitrary field.

        Args:
            value: Value of the identifier field
            request_id: Request correlation id
            field_identifier: Field to match on

        Returns:
            Entity if found, None otherwise
        """
        self._log("find_one", "API called to fetch an entity using ID.", request_id)
        try:
            return await self._collection.find_one(
                build_identifier_filter(value, field_identifier)
            )
        except Exception as e:
            raise InternalServerError(request_id=request_id, error=e) from e

    # ==========================================================================
    # WRITE OPERATIONS
    # ==========================================================================

    async def create(
        self,
        data: T,
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> T:
        """
        Create a new entity.

        The identifier value is looked up first; an existing entity
        with the same value is a conflict. Without an identifier value
        the lookup is skipped and the store assigns ``_id``.

        Args:
            data: Entity to store
            request_id: Request correlation id
            field_identifier: Field that must be unique

        Returns:
            The stored entity

        Raises:
            ConflictError: If the identifier already exists
            InternalServerError: If the store fails
        """
        self._log("create", "API called to create an entity.", request_id)
        try:
            value = data.get(field_identifier)
            if value is not None:
                existing = await self.find_one(value, request_id, field_identifier)
                if existing:
                    raise ConflictError(
                        message=Messages.DATA_ALREADY_EXISTS,
                        request_id=request_id,
                    )

            document = dict(data)
            result = await self._collection.insert_one(document)
            document.setdefault("_id", result.inserted_id)
            return document
        except AppException:
            raise
        except Exception as e:
            raise InternalServerError(request_id=request_id, error=e) from e

    async def create_many(
        self,
        data: Sequence[T],
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> BulkCreateResult:
        """
        Create several entities with one bulk insert.

        Entities whose identifier already exists are skipped, the rest
        are inserted in their original order. On ``_id`` an ObjectId and
        its hex string count as the same identifier.

        Args:
            data: Entities to store
            request_id: Request correlation id
            field_identifier: Field used to detect existing entities

        Returns:
            Bulk insert outcome

        Raises:
            ConflictError: If the bulk insert produced no result
            InternalServerError: If the store fails
        """
        self._log("create_many", "API called to create many entities.", request_id)
        try:
            existing = await self.find_all(request_id)
            existing_ids = [
                identifier_key(item.get(field_identifier), field_identifier)
                for item in existing
                if isinstance(item, Mapping)
            ]

            documents = [
                dict(element)
                for element in data
                if element.get(field_identifier) is None
                or identifier_key(element.get(field_identifier), field_identifier)
                not in existing_ids
            ]

            result = None
            if documents:
                result = await self._collection.insert_many(documents, ordered=True)

            if not result or not result.inserted_ids:
                raise ConflictError(
                    message=Messages.BULK_DATA_NOT_CREATED,
                    request_id=request_id,
                )

            return BulkCreateResult(
                acknowledged=result.acknowledged,
                inserted_count=len(result.inserted_ids),
                inserted_ids=[str(i) for i in result.inserted_ids],
                skipped_count=len(data) - len(documents),
            )
        except AppException:
            raise
        except Exception as e:
            raise InternalServerError(request_id=request_id, error=e) from e

    async def update(
        self,
        field_value: Any,
        data: Mapping[str, Any],
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> T:
        """
        Update an existing entity.

        The partial data is deep-merged into the stored document: nested
        objects present on both sides are written as dotted paths, any
        other value replaces the stored one whole. The write is an upsert.

        Args:
            field_value: Value of the identifier field
            data: Partial entity
            request_id: Request correlation id
            field_identifier: Field to match on

        Returns:
            The updated entity

        Raises:
            BadRequestError: If no entity matches
            InternalServerError: If the store fails
        """
        self._log("update", "API called to update an entity using ID.", request_id)
        try:
            existing = await self.find_one(field_value, request_id, field_identifier)
            if not existing:
                raise BadRequestError(
                    message=Messages.ENTITY_NOT_FOUND_TO_UPDATE,
                    request_id=request_id,
                )

            set_document = build_set_document(existing, data)
            if not set_document:
                return existing

            return await self._collection.find_one_and_update(
                build_identifier_filter(field_value, field_identifier),
                {"$set": set_document},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except AppException:
            raise
        except Exception as e:
            raise InternalServerError(request_id=request_id, error=e) from e

    async def remove(
        self,
        field_value: Any,
        request_id: str,
        field_identifier: str = DEFAULT_FIELD,
    ) -> str:
        """
        Delete an entity.

        Args:
            field_value: Value of the identifier field
            request_id: Request correlation id
            field_identifier: Field to match on

        Returns:
            Fixed success message

        Raises:
            InternalServerError: If nothing was deleted or the store fails
        """
        self._log("remove", "API called to delete an entity using ID.", request_id)
        try:
            deleted = await self._collection.find_one_and_delete(
                build_identifier_filter(field_value, field_identifier)
            )
        except Exception as e:
            raise InternalServerError(request_id=request_id, error=e) from e

        if not deleted:
            raise InternalServerError(
                message=Messages.NO_RECORD_FOUND_TO_DELETE,
                request_id=request_id,
            )
        return Messages.DELETED_SUCCESSFULLY
