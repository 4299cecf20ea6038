"""API error handling and response helpers."""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rentledger.services.errors import AppError, ValidationError, error_response

logger = logging.getLogger(__name__)


def raise_app_error(error: AppError) -> None:
    """Raise an HTTPException from an AppError."""
    raise HTTPException(
        status_code=error.http_status,
        detail=error_response(error),
    ) from error


def raise_internal_error(endpoint: str, error: Exception) -> None:
    """Log an unexpected failure and raise a generic 500."""
    logger.error("Error in %s: %s", endpoint, error, exc_info=True)
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": {"code": "internal_error", "message": "Internal server error"}},
    ) from error


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render payload/query validation failures as 400 validation_error."""
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    error = ValidationError("; ".join(messages) or "Invalid request")
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, error.message)
    return JSONResponse(status_code=error.http_status, content={"detail": error_response(error)})


__all__ = ["raise_app_error", "raise_internal_error", "request_validation_handler"]
