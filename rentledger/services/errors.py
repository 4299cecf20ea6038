"""Ledger error taxonomy.

Every error carries a stable machine-readable code and the HTTP status the API
boundary should answer with. All of them are recoverable by the caller.
"""

from typing import Any, Dict

from fastapi import status


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        """Initialize error."""
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)


class ValidationError(AppError):
    """Malformed input (negative amount, end before start, missing field)."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, "validation_error", status.HTTP_400_BAD_REQUEST)


class NotAssignedError(AppError):
    """Tenant is not currently assigned to the room."""

    def __init__(self, message: str = "Tenant not found or not assigned to the specified room"):
        super().__init__(message, "not_assigned", status.HTTP_409_CONFLICT)


class OverlapError(AppError):
    """Rent period overlaps an existing rent for the same tenant and room."""

    def __init__(self, message: str = "Rent period overlaps with an existing rent entry"):
        super().__init__(message, "period_overlap", status.HTTP_409_CONFLICT)


class NotFoundError(AppError):
    """Rent does not exist or was deleted."""

    def __init__(self, message: str = "Rent not found"):
        super().__init__(message, "not_found", status.HTTP_404_NOT_FOUND)


class OverpaymentError(AppError):
    """Payment would push the paid amount above the rent amount."""

    def __init__(self, message: str = "Payment amount exceeds outstanding balance"):
        super().__init__(message, "overpayment", status.HTTP_409_CONFLICT)


class ConcurrencyConflictError(AppError):
    """Concurrent writers kept changing the rent; retries exhausted."""

    def __init__(self, message: str = "Rent was modified concurrently, please retry"):
        super().__init__(message, "concurrency_conflict", status.HTTP_409_CONFLICT)


def error_response(error: AppError) -> Dict[str, Any]:
    """Create a standardized error response."""
    return {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }


__all__ = [
    "AppError",
    "ValidationError",
    "NotAssignedError",
    "OverlapError",
    "NotFoundError",
    "OverpaymentError",
    "ConcurrencyConflictError",
    "error_response",
]
