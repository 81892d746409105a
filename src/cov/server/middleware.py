"""HTTP middleware for request correlation."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from cov.core.logging import clear_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-Id"

# Type alias for the call_next function
CallNext = Callable[[Request], Awaitable[Response]]

logger = structlog.get_logger()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign a correlation ID to every request and echo it back.

    A client-supplied ``X-Request-Id`` is reused so uploads can be traced
    across services.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        rid = set_request_id(request.headers.get(REQUEST_ID_HEADER) or None)
        try:
            response = await call_next(request)
            logger.debug(
                "request_handled",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
            )
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            clear_request_id()
