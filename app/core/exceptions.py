"""
Domain errors and their HTTP mapping.

Services raise these; the handlers registered by `setup_exception_handlers`
turn them into a consistent JSON error body.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.utils import get_logger


log = get_logger(__name__)


# ============================================================================
# Exception classes
# ============================================================================

class APIError(Exception):
    """
    Base exception for API errors.

    All domain exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(message)


class NotFoundError(APIError):
    """Group or user not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND",
            details=details,
        )


class AlreadyExistsError(APIError):
    """Name collision."""

    def __init__(self, message: str = "Resource already exists", name: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="ALREADY_EXISTS",
            details={"name": name} if name else None,
        )


class NotEmptyError(APIError):
    """Group deletion blocked by existing members."""

    def __init__(self, message: str = "Resource is not empty", member_count: Optional[int] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="NOT_EMPTY",
            details={"member_count": member_count} if member_count is not None else None,
        )


class ValidationFailedError(APIError):
    """Request is well-formed but semantically invalid."""

    def __init__(self, message: str = "Validation failed", field: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details={"field": field} if field else None,
        )


# ============================================================================
# Response builder and handlers
# ============================================================================

def build_error_response(
    message: str,
    status_code: int,
    error_code: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    response = {
        "error": {
            "message": message,
            "code": error_code,
            "status_code": status_code,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    }
    if details:
        response["error"]["details"] = details
    return response


async def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    log.info("API error %s: %s", exc.error_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(
            build_error_response(
                message=exc.message,
                status_code=exc.status_code,
                error_code=exc.error_code,
                details=exc.details,
            )
        ),
    )


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = dict()
    for error in exc.errors():
        if "loc" not in error or "msg" not in error:
            continue
        key = error["loc"][-1]
        if key == "__root__":
            key = "root"
        errors[key] = error["msg"]
    log.info("Request validation error %s", errors)
    return JSONResponse(status_code=400, content=jsonable_encoder(errors))


def rate_limit_exceeded_handler(_request: Request, _exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse({"error": "You are going too fast"}, status_code=429)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register every exception handler on the application."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
