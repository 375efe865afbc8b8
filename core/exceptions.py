"""
Domain exceptions and their HTTP rendering.

Services raise these instead of catching errors and returning an
``ApiStatus.ERROR`` envelope themselves. The handlers registered in
``main.py`` turn them into the standard ``{status, message, data}`` envelope
with a matching HTTP status. Store failures reach the client only as an
opaque 500.
"""

from typing import Any, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from core.logging import get_logger
from schemas.common import ApiStatus


class PickupError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    api_status: ApiStatus = ApiStatus.ERROR

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class ValidationError(PickupError):
    """Malformed or missing input."""

    status_code = 400
    api_status = ApiStatus.VALIDATION_ERROR


class NotFoundError(PickupError):
    """A referenced entity does not exist."""

    status_code = 404
    api_status = ApiStatus.NOT_FOUND


class InvalidStateError(PickupError):
    """Operation is illegal for the game's current lifecycle state."""

    status_code = 400
    api_status = ApiStatus.INVALID_STATE

    def __init__(self, message: str, current_status: Optional[str] = None):
        super().__init__(message, data={"status": current_status} if current_status else None)
        self.current_status = current_status


class AuthenticationError(PickupError):
    """Bad credentials."""

    status_code = 401
    api_status = ApiStatus.AUTHENTICATION_ERROR


class ConcurrentModificationError(PickupError):
    """The game document changed between load and save."""

    status_code = 409
    api_status = ApiStatus.CONFLICT


class StoreError(PickupError):
    """Backing store failure. The message returned to callers is opaque."""

    status_code = 500
    api_status = ApiStatus.SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


async def pickup_error_handler(request: Request, exc: PickupError) -> JSONResponse:
    """Render a PickupError into the response envelope."""
    if isinstance(exc, StoreError):
        get_logger().error("request_failed", path=request.url.path, method=request.method)
        message = "Internal server error"
    else:
        message = exc.message

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": exc.api_status.value,
            "message": message,
            "data": exc.data,
        },
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request bodies that fail schema validation are reported like any other ValidationError."""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "status": ApiStatus.VALIDATION_ERROR.value,
            "message": "Invalid request data",
            "data": errors,
        },
    )
