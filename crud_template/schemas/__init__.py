# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Pydantic Schemas
================

Request/response schemas for the HTTP layer.
"""

from crud_template.schemas.base import (
    BaseSchema,
    BulkCreateResult,
    HealthResponse,
    RootResponse,
)
from crud_template.schemas.crud_template import (
    CrudTemplateCreate,
    CrudTemplateUpdate,
)

__all__ = [
    "BaseSchema",
    "BulkCreateResult",
    "HealthResponse",
    "RootResponse",
    "CrudTemplateCreate",
    "CrudTemplateUpdate",
]
