# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines all entity routers under the global prefix
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from crud_template.core.settings import settings
from crud_template.api.v1 import crud_template_router

# Root and health are registered on the app itself, outside this prefix
api_router = APIRouter(prefix=f"/{settings.API_PREFIX.strip('/')}")

api_router.include_router(crud_template_router)
