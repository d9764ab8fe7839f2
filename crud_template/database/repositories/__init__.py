# ==============================================================================
# REPOSITORIES PACKAGE INITIALIZATION
# ==============================================================================

"""
Repository Pattern Implementation
=================================

- CrudRepository: generic repository over one MongoDB collection
"""

from crud_template.database.repositories.crud_repository import CrudRepository

__all__ = [
    "CrudRepository",
]
