from starlette.middleware.base import BaseHTTPMiddleware

from db.base import db


class DatabaseMiddleware(BaseHTTPMiddleware):
    """Hold one store connection per request; pooled connections go back to the pool on close."""

    async def dispatch(self, request, call_next):
        db.connect(reuse_if_open=True)
        try:
            return await call_next(request)
        finally:
            if not db.is_closed():
                db.close()
