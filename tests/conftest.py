# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import copy
import os
import sys
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import DuplicateKeyError
from pymongo.results import InsertManyResult, InsertOneResult

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["SERVICE_API_KEYS"] = '["test-service-key", "second-key"]'
os.environ["LOGS_ENABLE_FILE"] = "false"
os.environ["ENABLE_ERROR_STACK"] = "false"
os.environ["MONGO_SERVER_SELECTION_TIMEOUT"] = "100"

# Add package root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

SERVICE_KEY = "test-service-key"


# ==============================================================================
# IN-MEMORY MOTOR DOUBLES
# ==============================================================================

def _get_path(document: Mapping[str, Any], path: str) -> Any:
    current: Any = document
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def _set_path(document: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    current = document
    for part in parts[:-1]:
        current = current.setdefault(part, {})
    current[parts[-1]] = value


def _matches(document: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    for key, expected in filters.items():
        actual = _get_path(document, key)
        if isinstance(expected, Mapping) and "$in" in expected:
            if actual not in expected["$in"]:
                return False
        elif actual != expected:
            return False
    return True


class FakeCursor:
    """Cursor returned by FakeCollection.find."""

    def __init__(self, documents: List[Dict[str, Any]]) -> None:
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if length is None:
            return list(self._documents)
        return list(self._documents[:length])


class FakeCollection:
    """
    Minimal in-memory stand-in for an AsyncIOMotorCollection.

    Supports the calls made by CrudRepository: equality and ``$in``
    filters, dotted ``$set`` updates with upsert, and ``_id`` uniqueness.
    """

    def __init__(self, name: str = "collection") -> None:
        self.name = name
        self.documents: List[Dict[str, Any]] = []

    def _find(self, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self.documents:
            if _matches(document, filters):
                return document
        return None

    def _insert(self, document: Dict[str, Any]) -> Any:
        document.setdefault("_id", ObjectId())
        if any(d["_id"] == document["_id"] for d in self.documents):
            raise DuplicateKeyError(f"E11000 duplicate key: {document['_id']}")
        self.documents.append(copy.deepcopy(document))
        return document["_id"]

    def find(self, filters: Optional[Mapping[str, Any]] = None) -> FakeCursor:
        filters = filters or {}
        return FakeCursor(
            [copy.deepcopy(d) for d in self.documents if _matches(d, filters)]
        )

    async def find_one(self, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        found = self._find(filters)
        return copy.deepcopy(found) if found is not None else None

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        return InsertOneResult(self._insert(document), True)

    async def insert_many(
        self,
        documents: List[Dict[str, Any]],
        ordered: bool = True,
    ) -> InsertManyResult:
        return InsertManyResult([self._insert(d) for d in documents], True)

    async def find_one_and_update(
        self,
        filters: Mapping[str, Any],
        update: Mapping[str, Any],
        upsert: bool = False,
        return_document: bool = False,
    ) -> Optional[Dict[str, Any]]:
        document = self._find(filters)
        before = copy.deepcopy(document)
        if document is None:
            if not upsert:
                return None
            document = {
                k: v for k, v in filters.items() if not isinstance(v, Mapping)
            }
            self._insert(document)
            document = self._find(filters) or self.documents[-1]

        for path, value in update.get("$set", {}).items():
            _set_path(document, path, copy.deepcopy(value))

        # pymongo's ReturnDocument.AFTER is True
        return copy.deepcopy(document) if return_document else before

    async def find_one_and_delete(
        self,
        filters: Mapping[str, Any],
    ) -> Optional[Dict[str, Any]]:
        document = self._find(filters)
        if document is None:
            return None
        self.documents.remove(document)
        return document


class FakeDatabase:
    """Dict of FakeCollections addressed like a Motor database."""

    def __init__(self) -> None:
        self._collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]


# ==============================================================================
# STORE FIXTURES
# ==============================================================================

@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection("crud_templates")


@pytest.fixture
def request_id() -> str:
    return "test-request-id"


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def client(fake_database: FakeDatabase) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client wired to an in-memory database."""
    # Import app after environment is set
    from crud_template.api.dependencies import get_database
    from crud_template.main import app

    async def override_database() -> FakeDatabase:
        return fake_database

    app.dependency_overrides[get_database] = override_database

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient) -> AsyncGenerator[AsyncClient, None]:
    """Client sending a valid service key and a fixed request id."""
    client.headers["X-Service-Key"] = SERVICE_KEY
    client.headers["x-request-id"] = "req-123"
    client.headers["x-channel-id"] = "web"

    yield client

    for header in ("X-Service-Key", "x-request-id", "x-channel-id"):
        if header in client.headers:
            del client.headers[header]


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def sample_template_data() -> dict:
    """Generate a sample crud-template record."""
    return {
        "_id": "tpl-001",
        "name": "Savings account",
        "description": "Template record",
        "status": "active",
        "tags": ["bank", "savings"],
        "attributes": {"currency": "USD", "limits": {"daily": 500, "monthly": 5000}},
    }
