# ==============================================================================
# BASE SCHEMAS - Common Schema Patterns
# ==============================================================================
# Foundation schemas shared by every entity and the status endpoints
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Unknown fields are dropped on input, so every request body is
    whitelisted against the declared shape before it reaches a handler.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )


class BulkCreateResult(BaseModel):
    """
    Outcome of a bulk create.

    Attributes:
        acknowledged: Whether the store acknowledged the write
        inserted_count: Number of inserted entities
        inserted_ids: Store ids of the inserted entities
        skipped_count: Number of entities dropped as already existing
    """

    acknowledged: bool = Field(..., description="Write acknowledged by the store")
    inserted_count: int = Field(..., ge=0, description="Inserted entities")
    inserted_ids: List[Any] = Field(
        default_factory=list,
        description="Ids of the inserted entities"
    )
    skipped_count: int = Field(
        0,
        ge=0,
        description="Entities skipped because their identifier already exists"
    )


class HealthResponse(BaseModel):
    """
    Aggregate health status.

    ``status`` is "ok" only when every indicator is up; ``info`` holds
    the indicators that are up, ``error`` the ones that are down and
    ``details`` all of them.
    """

    status: str = Field(..., description="Aggregate status: ok or error")
    info: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    error: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    details: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class RootResponse(BaseModel):
    """Root endpoint payload."""

    name: str
    version: str
    docs: str
    health: str
