"""Request logging middleware using ContextVar.

Takes the request id from the X-Request-ID header (or generates one) and
binds it for the lifetime of the request, so every log line emitted by
downstream code (repositories, error handlers) carries it without explicit
parameter passing. The id is echoed back on the response.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api.errors import error_response
from core.errors import InternalError
from core.observability.log_setup import reset_request_id, set_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with method, path, status, and duration.

    Priority for the request id:
    1. X-Request-ID header (explicit)
    2. Fresh uuid4 hex
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = set_request_id(request_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                # Errors escaping the app's handlers would otherwise reach
                # Starlette's outer ServerErrorMiddleware, past this log line.
                logger.exception("Unhandled error on %s %s", request.method, request.url.path)
                response = error_response(InternalError())
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "%s %s %d %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            reset_request_id(token)
