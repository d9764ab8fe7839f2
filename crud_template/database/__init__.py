# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# MongoDB connection and generic repository
# ==============================================================================

"""
Database Module
===============

Key Components:
- MongoDB: process-wide Motor client lifecycle
- Repositories: generic CRUD data access over one collection
"""

from crud_template.database.mongodb import MongoDB
from crud_template.database.repositories.crud_repository import CrudRepository

__all__ = [
    "MongoDB",
    "CrudRepository",
]
