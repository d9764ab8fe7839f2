# ==============================================================================
# CRUD SERVICE TESTS
# ==============================================================================
# Delegation to the repository and error propagation
# ==============================================================================

from unittest.mock import AsyncMock, MagicMock

import pytest

from crud_template.core.exceptions import ConflictError
from crud_template.schemas.base import BulkCreateResult
from crud_template.services.crud_service import CrudService


@pytest.fixture
def repository() -> MagicMock:
    repo = MagicMock()
    repo.find_all = AsyncMock(return_value=[{"_id": "a-1"}])
    repo.find_many = AsyncMock(return_value=[])
    repo.find_one = AsyncMock(return_value={"_id": "a-1"})
    repo.create = AsyncMock(return_value={"_id": "a-1"})
    repo.create_many = AsyncMock(
        return_value=BulkCreateResult(
            acknowledged=True, inserted_count=1, inserted_ids=["a-1"]
        )
    )
    repo.update = AsyncMock(return_value={"_id": "a-1", "name": "x"})
    repo.remove = AsyncMock(return_value="Deleted record successfully!")
    return repo


@pytest.fixture
def service(repository) -> CrudService:
    return CrudService(repository, name="TestService")


class TestDelegation:
    """Each operation forwards its arguments unchanged."""

    @pytest.mark.asyncio
    async def test_find_all(self, service, repository, request_id):
        assert await service.find_all(request_id) == [{"_id": "a-1"}]
        repository.find_all.assert_awaited_once_with(request_id)

    @pytest.mark.asyncio
    async def test_find_many(self, service, repository, request_id):
        await service.find_many({"status": "active"}, request_id)
        repository.find_many.assert_awaited_once_with({"status": "active"}, request_id)

    @pytest.mark.asyncio
    async def test_find_one_with_field_identifier(self, service, repository, request_id):
        await service.find_one("X1", request_id, field_identifier="code")
        repository.find_one.assert_awaited_once_with("X1", request_id, "code")

    @pytest.mark.asyncio
    async def test_create_defaults_to_id(self, service, repository, request_id):
        await service.create({"_id": "a-1"}, request_id)
        repository.create.assert_awaited_once_with({"_id": "a-1"}, request_id, "_id")

    @pytest.mark.asyncio
    async def test_create_many(self, service, repository, request_id):
        result = await service.create_many([{"_id": "a-1"}], request_id)

        assert result.inserted_count == 1
        repository.create_many.assert_awaited_once_with(
            [{"_id": "a-1"}], request_id, "_id"
        )

    @pytest.mark.asyncio
    async def test_update(self, service, repository, request_id):
        updated = await service.update("a-1", {"name": "x"}, request_id)

        assert updated["name"] == "x"
        repository.update.assert_awaited_once_with(
            "a-1", {"name": "x"}, request_id, "_id"
        )

    @pytest.mark.asyncio
    async def test_remove(self, service, repository, request_id):
        assert await service.remove("a-1", request_id) == "Deleted record successfully!"
        repository.remove.assert_awaited_once_with("a-1", request_id, "_id")


class TestErrors:
    """Repository errors reach the caller unchanged."""

    @pytest.mark.asyncio
    async def test_conflict_propagates(self, service, repository, request_id):
        error = ConflictError(message="Data already exists", request_id=request_id)
        repository.create.side_effect = error

        with pytest.raises(ConflictError) as exc_info:
            await service.create({"_id": "a-1"}, request_id)

        assert exc_info.value is error
