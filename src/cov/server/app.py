"""Starlette application factory and server entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import Response

from cov.core.errors import InternalError
from cov.server.middleware import RequestIdMiddleware
from cov.server.routes import (
    ERROR_INTERNAL,
    ERROR_METHOD_NOT_ALLOWED,
    ERROR_NOT_FOUND,
    create_routes,
    error_response,
)

if TYPE_CHECKING:
    from cov.config.models import CovConfig, ServerConfig

logger = structlog.get_logger()


async def _http_exception(request: Request, exc: HTTPException) -> Response:
    _ = request  # unused
    if exc.status_code == 404:
        return error_response(ERROR_NOT_FOUND, 404)
    if exc.status_code == 405:
        return error_response(ERROR_METHOD_NOT_ALLOWED, 405)
    return error_response(exc.detail.lower().replace(" ", "_"), exc.status_code)


async def _unhandled_exception(request: Request, exc: Exception) -> Response:
    err = InternalError.unexpected(type(exc).__name__, path=request.url.path)
    logger.error("unhandled_exception", error=err.error_name, reason=err.message, exc_info=exc)
    return error_response(ERROR_INTERNAL, 500)


def create_app(config: ServerConfig) -> Starlette:
    """Create the Starlette application."""
    return Starlette(
        routes=create_routes(config),
        middleware=[Middleware(RequestIdMiddleware)],
        exception_handlers={
            HTTPException: _http_exception,
            Exception: _unhandled_exception,
        },
    )


def serve(config: CovConfig) -> None:
    """Run the HTTP server until interrupted."""
    app = create_app(config.server)

    logger.info("server_starting", host=config.server.host, port=config.server.port)
    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",  # Use structlog instead
        log_config=None,
    )
    uvicorn.Server(uvicorn_config).run()
    logger.info("server_stopped")
