# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Each exception maps to an HTTP status code and carries the request id
# ==============================================================================

from __future__ import annotations

import traceback
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Provides a consistent interface for error handling with:
    - Error code for programmatic identification
    - HTTP status code mapping
    - The correlation id of the request that failed
    - The original exception, when one was translated

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary
        request_id: Correlation id of the failing request
        error: Original exception that caused this one

    Example:
        >>> raise AppException(
        ...     message="Something went wrong",
        ...     error_code="INTERNAL_ERROR",
        ...     status_code=500,
        ...     request_id="4b1c",
        ... )
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.request_id = request_id
        self.error = error
        super().__init__(self.message)

    def to_dict(self, include_stack: bool = False) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for JSON response.

        Args:
            include_stack: Add the traceback of the original error

        Returns:
            Dictionary containing error details
        """
        details = dict(self.details)
        if self.error is not None:
            details.setdefault("description", str(self.error))
            if include_stack:
                details["stack"] = "".join(
                    traceback.format_exception(
                        type(self.error), self.error, self.error.__traceback__
                    )
                )
        return {
            "success": False,
            "requestId": self.request_id,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": details,
            }
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code}, "
            f"request_id={self.request_id!r})"
        )


# ==============================================================================
# CRUD EXCEPTIONS
# ==============================================================================

class ConflictError(AppException):
    """
    Raised when a create would duplicate an existing identifier,
    or when a bulk insert produced nothing.

    Maps to HTTP 409 Conflict.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        request_id: Optional[str] = None,
        error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="CONFLICT",
            status_code=409,
            details=details,
            request_id=request_id,
            error=error,
        )


class BadRequestError(AppException):
    """
    Raised for malformed requests or an update of a missing entity.

    Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str = "Bad request",
        request_id: Optional[str] = None,
        error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="BAD_REQUEST",
            status_code=400,
            details=details,
            request_id=request_id,
            error=error,
        )


class InternalServerError(AppException):
    """
    Raised for every store failure that is neither a conflict nor a
    bad request, including a delete that removed nothing.

    Maps to HTTP 500 Internal Server Error.
    """

    def __init__(
        self,
        message: str = "Internal server error",
        request_id: Optional[str] = None,
        error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="INTERNAL_ERROR",
            status_code=500,
            details=details,
            request_id=request_id,
            error=error,
        )


# ==============================================================================
# AUTHENTICATION EXCEPTIONS
# ==============================================================================

class UnauthorizedError(AppException):
    """
    Raised when the service API key is missing or not accepted.

    Maps to HTTP 401 Unauthorized.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="UNAUTHORIZED",
            status_code=401,
            request_id=request_id,
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Raised when the database connection cannot be established.

    Maps to HTTP 503 Service Unavailable.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            error=error,
        )
