"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COV__SECTION__KEY)
3. YAML config file (cov.yaml or an explicit --config path)
4. Built-in defaults (this file)

Environment Variable Format:
    COV__<SECTION>__<KEY>=<VALUE>

Examples:
    COV__LOGGING__LEVEL=DEBUG
    COV__SERVER__PORT=9090
    COV__SERVER__MAX_BODY_BYTES=1048576
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COV__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every rejected format attempt.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ServerConfig(BaseModel):
    """HTTP server configuration.

    Env vars:
        COV__SERVER__HOST: Bind address (default: 127.0.0.1)
        COV__SERVER__PORT: Port number (default: 8080)
        COV__SERVER__MAX_BODY_BYTES: Largest accepted report upload
        COV__SERVER__EXPOSE_ERROR_DETAILS: Include parser diagnostics in 400s
    """

    host: str = Field(
        default="127.0.0.1",
        description="Bind address. Use 0.0.0.0 for network access.",
    )
    port: int = Field(
        default=8080,
        description="Server port.",
    )
    max_body_bytes: int = Field(
        default=32 * 1024 * 1024,
        description="Reports are parsed fully in memory; larger uploads are rejected "
        "with 413 before parsing starts.",
    )
    expose_error_details: bool = Field(
        default=False,
        description="Include each format's parse error in invalid-report responses. "
        "Useful when debugging a tool's output; leaks parser internals to clients.",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (0 <= v <= 65535):
            raise ValueError(f"Port must be 0-65535, got {v}")
        return v

    @field_validator("max_body_bytes")
    @classmethod
    def validate_max_body_bytes(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"max_body_bytes must be positive, got {v}")
        return v


class CovConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
