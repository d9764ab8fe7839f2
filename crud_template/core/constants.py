# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# Organized by category for easy maintenance
# ==============================================================================

from __future__ import annotations

from typing import Final


# ==============================================================================
# ROUTE CONSTANTS
# ==============================================================================

class RouteConstants:
    """Controller paths, versions and tags."""

    ROOT: Final[str] = "/"
    HEALTH: Final[str] = "/health"

    CRUD_TEMPLATE_CONTROLLER: Final[str] = "crud-template"
    CRUD_TEMPLATE_TAG: Final[str] = "crud-template"
    CRUD_TEMPLATE_VERSION: Final[str] = "1"


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Database-related constants."""

    CRUD_TEMPLATE_COLLECTION: Final[str] = "crud_templates"
    DEFAULT_FIELD_IDENTIFIER: Final[str] = "_id"


# ==============================================================================
# MESSAGES
# ==============================================================================

class Messages:
    """Fixed response and error messages."""

    DATA_ALREADY_EXISTS: Final[str] = "Data already exists"
    BULK_DATA_NOT_CREATED: Final[str] = "Bulk data not created"
    ENTITY_NOT_FOUND_TO_UPDATE: Final[str] = "Entity not found to update"
    NO_RECORD_FOUND_TO_DELETE: Final[str] = "No record found to delete"
    DELETED_SUCCESSFULLY: Final[str] = "Deleted record successfully!"
    INVALID_SERVICE_KEY: Final[str] = "Please pass a valid service key to authenticate."


# ==============================================================================
# HEALTH CONSTANTS
# ==============================================================================

class HealthConstants:
    """Health indicator states."""

    UP: Final[str] = "up"
    DOWN: Final[str] = "down"
    OK: Final[str] = "ok"
    ERROR: Final[str] = "error"
    DATABASE_KEY: Final[str] = "database"
    PROCESS_KEY: Final[str] = "process"
