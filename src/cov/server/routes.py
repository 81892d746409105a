"""HTTP routes for the cov service.

The parse endpoint takes the raw report as the request body. The format is
sniffed; content type is ignored.
"""

from __future__ import annotations

import importlib.metadata
from typing import TYPE_CHECKING, Any

import structlog
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect, Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from cov.core.errors import ReportError
from cov.report import InvalidReportError, diagnose, parse

if TYPE_CHECKING:
    from cov.config.models import ServerConfig

logger = structlog.get_logger()

# Public error identifiers in response bodies
ERROR_REPORT_INVALID = "report_invalid"
ERROR_REPORT_TOO_LARGE = "report_too_large"
ERROR_NOT_FOUND = "not_found"
ERROR_METHOD_NOT_ALLOWED = "method_not_allowed"
ERROR_INTERNAL = "internal_server_error"


def get_version() -> str:
    """Get package version from installed metadata."""
    try:
        return importlib.metadata.version("cov")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def error_response(
    error: str, status_code: int, description: str | None = None
) -> JSONResponse:
    body: dict[str, Any] = {"error": error}
    if description is not None:
        body["description"] = description
    return JSONResponse(body, status_code=status_code)


def _report_error_response(err: ReportError) -> JSONResponse:
    if err.error_name == "REPORT_TOO_LARGE":
        return error_response(ERROR_REPORT_TOO_LARGE, 413, err.description)
    return error_response(ERROR_REPORT_INVALID, 400, err.description)


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the request body, refusing anything over ``limit`` bytes."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise ReportError.too_large(int(declared), limit)

    chunks: list[bytes] = []
    size = 0
    try:
        async for chunk in request.stream():
            size += len(chunk)
            if size > limit:
                raise ReportError.too_large(size, limit)
            chunks.append(chunk)
    except ClientDisconnect as e:
        raise ReportError.unreadable("client disconnected") from e
    return b"".join(chunks)


def _parse_or_raise(body: bytes, expose_details: bool) -> dict[str, Any]:
    try:
        report = parse(body)
    except InvalidReportError as e:
        if expose_details:
            causes = diagnose(body)
            description = "; ".join(f"{name}: {msg}" for name, msg in causes.items())
            raise ReportError.invalid(f"invalid report ({description})", **causes) from e
        raise ReportError.invalid() from e

    logger.info(
        "report_parsed",
        format=report.source_format,
        regions=len(report.regions),
        size=len(body),
    )
    return report.to_dict()


def create_routes(config: ServerConfig) -> list[Route]:
    """Create HTTP routes bound to the server configuration."""
    version = get_version()

    async def ping(request: Request) -> Response:
        _ = request  # unused
        return Response(status_code=204)

    async def healthz(request: Request) -> JSONResponse:
        """Liveness probe."""
        _ = request  # unused
        return JSONResponse({"status": "healthy", "version": version})

    async def parse_report(request: Request) -> JSONResponse:
        """Parse an uploaded coverage report into canonical regions."""
        try:
            body = await _read_body(request, config.max_body_bytes)
            # Parsing is CPU-bound; keep it off the event loop.
            payload = await run_in_threadpool(
                _parse_or_raise, body, config.expose_error_details
            )
        except ReportError as e:
            logger.info("report_rejected", error=e.error_name, reason=e.description)
            return _report_error_response(e)
        return JSONResponse(payload)

    return [
        Route("/ping", ping, methods=["GET"]),
        Route("/healthz", healthz, methods=["GET"]),
        Route("/v1/report/parse", parse_report, methods=["POST"]),
    ]
