# ==============================================================================
# CRUD TEMPLATE PACKAGE INITIALIZATION
# ==============================================================================
# REST CRUD microservice template on FastAPI and MongoDB
# Architecture: Controller -> Service -> Repository over one collection
# ==============================================================================

"""
CRUD Template Service
=====================

A boilerplate for REST CRUD microservices.

Features:
---------
- Generic repository, service and controller, reusable per entity
- MongoDB document store through Motor
- Service API key authentication
- Disk, memory and database health checks
- Request correlation ids in every log line
- Swagger UI and OpenAPI schema

Usage:
------
    from crud_template.main import app

    # Run with uvicorn
    uvicorn crud_template.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
