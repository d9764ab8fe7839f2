# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: request context, API key auth, database access
- CrudController: generic CRUD routes of one entity
- Routers: crud-template entity, root and health
"""

from crud_template.api.router import api_router
from crud_template.api.health import router as health_router

__all__ = ["api_router", "health_router"]
