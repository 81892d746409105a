"""cov error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report
- 9xxx: Internal

Parser internals raise their own lightweight errors (see ``cov.report``);
these types are what the HTTP and CLI surfaces hand to users.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Report (3xxx)
    REPORT_INVALID = 3001
    REPORT_TOO_LARGE = 3002
    REPORT_UNREADABLE = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CovError(Exception):
    """Base error with structured context for API responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_INVALID')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ReportError(CovError):
    """A report upload could not be turned into a canonical report."""

    @property
    def description(self) -> str:
        return self.message

    @classmethod
    def invalid(cls, description: str = "invalid report", **details: Any) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_INVALID,
            message=description,
            details=details,
        )

    @classmethod
    def too_large(cls, size: int, limit: int) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_TOO_LARGE,
            message=f"report is {size} bytes, limit is {limit}",
            details={"size": size, "limit": limit},
        )

    @classmethod
    def unreadable(cls, reason: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_UNREADABLE,
            message=f"failed to read report: {reason}",
            details={"reason": reason},
        )


class InternalError(CovError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
