# ==============================================================================
# API V1 ENDPOINTS PACKAGE
# ==============================================================================

"""
API V1 Endpoints
================

Version 1 entity routers.
"""

from crud_template.api.v1.crud_template import router as crud_template_router

__all__ = [
    "crud_template_router",
]
