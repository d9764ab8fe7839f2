# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Service Layer
=============

- CrudService: generic service delegating to a CrudRepository
- HealthService: disk, memory, HTTP ping and database indicators
"""

from crud_template.services.crud_service import CrudService
from crud_template.services.health_service import HealthService

__all__ = [
    "CrudService",
    "HealthService",
]
