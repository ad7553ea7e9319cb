"""
Custom Exception Classes for the Pixel Beacon service

Every failure a request can hit maps to one of these exceptions. None of
them is fatal to the process: each one ends only the current request.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error envelopes."""

    BEACON_REJECTED = "BEACON_REJECTED"
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"
    STORE_READ_FAILED = "STORE_READ_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class BeaconError(Exception):
    """Base exception class for all beacon-related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationRejectedError(BeaconError):
    """
    Raised when a pixel fetch does not carry the camo marker in its user agent.

    This is a categorization check, not access control: any client can forge
    the header.
    """

    def __init__(self, user_agent: str):
        super().__init__(
            message="Request is not from an image proxy",
            status_code=status.HTTP_403_FORBIDDEN,
            error_code=ErrorCode.BEACON_REJECTED,
            details={"user_agent": user_agent},
        )


# ============================================================================
# Storage Exceptions
# ============================================================================


class StoreError(BeaconError):
    """Base class for view store failures. Details stay server-side."""

    def __init__(self, message: str, error_code: ErrorCode, operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=error_code,
            details=details,
        )


class StoreWriteError(StoreError):
    """Raised when a view event could not be appended"""

    def __init__(self, message: str = "Failed to record view", operation: str | None = "insert"):
        super().__init__(message=message, error_code=ErrorCode.STORE_WRITE_FAILED, operation=operation)


class StoreReadError(StoreError):
    """Raised when an aggregation query could not be answered"""

    def __init__(self, message: str = "Failed to read view statistics", operation: str | None = None):
        super().__init__(message=message, error_code=ErrorCode.STORE_READ_FAILED, operation=operation)
