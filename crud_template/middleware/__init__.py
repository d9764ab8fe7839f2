# ==============================================================================
# MIDDLEWARE PACKAGE INITIALIZATION
# ==============================================================================

"""
Middleware Module
=================

FastAPI middleware implementations:
- Request context (correlation ids, request logging, timing)
"""

from crud_template.middleware.request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
]
