import uuid
from fastapi import Request
from fastapi.responses import JSONResponse
import structlog
from starlette.middleware.base import BaseHTTPMiddleware

from iglesia360.exceptions import UnexpectedError

logger = structlog.get_logger()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Extract existing X-Request-ID from headers or generate a new one
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id, method=request.method, path=request.url.path
        )

        try:
            response = await call_next(request)
        except Exception:
            # Typed errors are answered by the app's handlers; only the unforeseen get here
            logger.exception("unhandled_exception")
            error = UnexpectedError()
            response = JSONResponse(
                status_code=error.status_code,
                content={"success": False, "error": error.message},
            )

        response.headers["X-Request-ID"] = request_id
        return response
