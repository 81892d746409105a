"""Core module exports."""

from cov.core.errors import (
    ConfigError,
    CovError,
    ErrorCode,
    InternalError,
    ReportError,
)
from cov.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "CovError",
    "ErrorCode",
    "InternalError",
    "ReportError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
