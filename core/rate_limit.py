"""
Rate limiting for the public read API.

Reads are keyed on the client address. Scorekeeping routes sit behind admin
auth and are not limited.
"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from starlette.responses import JSONResponse

from core.logging import get_logger
from schemas.common import ApiStatus


limiter = Limiter(key_func=get_remote_address)

PUBLIC_RATE_LIMIT = "100/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Render a 429 in the standard envelope."""
    get_logger("rate_limit").warning(
        "rate_limited",
        path=request.url.path,
        client=get_remote_address(request),
        limit=exc.detail,
    )
    return JSONResponse(
        status_code=429,
        content={
            "status": ApiStatus.RATE_LIMITED.value,
            "message": f"Too many requests: {exc.detail}",
            "data": None,
        },
    )
