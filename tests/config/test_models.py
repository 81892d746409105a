"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- ServerConfig model
- CovConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cov.config.models import CovConfig, LoggingConfig, LogOutputConfig, ServerConfig


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout", "/var/log/cov.log"])
    def test_valid_destinations(self, destination: str) -> None:
        """Streams and absolute paths are accepted."""
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_path_fails(self) -> None:
        """Relative path is rejected."""
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/app.log")

    def test_unknown_format_fails(self) -> None:
        """Only json and console formats exist."""
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1

    def test_invalid_level(self) -> None:
        """Invalid level is rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")  # type: ignore[arg-type]


class TestServerConfig:
    """Tests for ServerConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = ServerConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.max_body_bytes == 32 * 1024 * 1024
        assert config.expose_error_details is False

    @pytest.mark.parametrize("port", [0, 8080, 65535])
    def test_valid_port(self, port: int) -> None:
        """Valid ports are accepted."""
        assert ServerConfig(port=port).port == port

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_invalid_port(self, port: int) -> None:
        """Out-of-range ports are rejected."""
        with pytest.raises(ValidationError):
            ServerConfig(port=port)

    @pytest.mark.parametrize("size", [0, -10])
    def test_non_positive_body_limit_fails(self, size: int) -> None:
        """Body limit must be positive."""
        with pytest.raises(ValidationError, match="max_body_bytes"):
            ServerConfig(max_body_bytes=size)


class TestCovConfig:
    """Tests for CovConfig root model."""

    def test_defaults(self) -> None:
        """Default values for all nested configs."""
        config = CovConfig()
        assert config.logging.level == "INFO"
        assert config.server.port == 8080

    def test_nested_override(self) -> None:
        """Can override nested config values."""
        config = CovConfig(
            logging=LoggingConfig(level="DEBUG"),
            server=ServerConfig(port=9000, expose_error_details=True),
        )
        assert config.logging.level == "DEBUG"
        assert config.server.port == 9000
        assert config.server.expose_error_details is True
