# ==============================================================================
# CRUD TEMPLATE SCHEMAS
# ==============================================================================
# Request schemas of the sample entity served by the template
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from crud_template.schemas.base import BaseSchema


class CrudTemplateCreate(BaseSchema):
    """
    Schema for creating a template record.

    ``_id`` is optional; when omitted the store assigns one.

    Example:
        {
            "_id": "tpl-001",
            "name": "Savings account",
            "attributes": {"currency": "USD", "limits": {"daily": 500}}
        }
    """

    id: Optional[str] = Field(
        None,
        alias="_id",
        min_length=1,
        description="Record identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name"
    )
    description: Optional[str] = Field(
        None,
        max_length=2000,
        description="Free text description"
    )
    status: Optional[str] = Field(
        None,
        max_length=50,
        description="Lifecycle status"
    )
    tags: Optional[List[str]] = Field(
        None,
        description="Search tags"
    )
    attributes: Optional[Dict[str, Any]] = Field(
        None,
        description="Schema-free nested attributes"
    )


class CrudTemplateUpdate(BaseSchema):
    """
    Schema for a partial update.

    Only the fields present in the request body are written.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    status: Optional[str] = Field(None, max_length=50)
    tags: Optional[List[str]] = None
    attributes: Optional[Dict[str, Any]] = None
