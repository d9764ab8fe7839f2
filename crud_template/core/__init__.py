# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Logging, Security, Exceptions, Constants, Cache
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the application:
- settings: Environment configuration management
- logger: Console and rotated file logging
- security: Service API key validation
- exceptions: Custom exception classes
- constants: Application-wide constants
- cache: TTL cache registered at startup
"""

from crud_template.core.settings import settings, get_settings, Settings
from crud_template.core.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    DatabaseError,
    InternalServerError,
    UnauthorizedError,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "AppException",
    "BadRequestError",
    "ConflictError",
    "DatabaseError",
    "InternalServerError",
    "UnauthorizedError",
]
