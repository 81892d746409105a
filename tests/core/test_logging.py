"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from cov.config.models import LoggingConfig, LogOutputConfig
from cov.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)


class TestRequestIdCorrelation:
    """Request ID context variable tests."""

    def setup_method(self) -> None:
        """Clear request ID before each test."""
        clear_request_id()

    def test_given_request_id_when_set_then_can_retrieve(self) -> None:
        """Request ID can be set and retrieved."""
        # Given
        request_id = "test-123"

        # When
        result = set_request_id(request_id)

        # Then
        assert result == request_id
        assert get_request_id() == request_id

    def test_given_no_id_when_set_then_generates_uuid(self) -> None:
        """Set generates UUID-based ID when none provided."""
        # When
        rid = set_request_id()

        # Then
        assert rid is not None
        assert len(rid) == 12  # uuid4().hex[:12]

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        """Clear removes the current request ID."""
        # Given
        set_request_id("to-clear")

        # When
        clear_request_id()

        # Then
        assert get_request_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_request_id()

    def test_given_json_file_output_when_log_then_valid_json_lines(self, tmp_path: Path) -> None:
        """JSON output writes one object per event with the standard fields."""
        # Given
        log_file = tmp_path / "cov.log"
        config = LoggingConfig(
            level="INFO",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )
        configure_logging(config=config)
        logger = get_logger("test")

        # When
        logger.info("report_parsed", regions=3)

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["event"] == "report_parsed"
        assert data["regions"] == 3
        assert data["logger"] == "test"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_given_request_id_when_log_then_id_attached(self, tmp_path: Path) -> None:
        """The current request ID is added to every event."""
        # Given
        log_file = tmp_path / "cov.log"
        configure_logging(
            config=LoggingConfig(
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_request_id("abc123")

        # When
        get_logger().info("with_request")

        # Then
        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["request_id"] == "abc123"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()

    def test_given_multi_output_config_when_configure_then_logs_to_all(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then - info_file has INFO only
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content

        # Then - debug_file inherits DEBUG from the config level
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_nested_destination_when_configure_then_creates_parent(
        self, tmp_path: Path
    ) -> None:
        """File handler creates missing parent directories."""
        # Given
        log_file = tmp_path / "nested" / "dir" / "cov.log"

        # When
        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(destination=str(log_file))])
        )
        get_logger().warning("hello")

        # Then
        assert log_file.exists()
        assert "hello" in log_file.read_text()

    def test_given_reconfigure_when_configure_then_replaces_handlers(self) -> None:
        """Reconfiguring replaces, not stacks, root handlers."""
        # When
        configure_logging(level="INFO")
        configure_logging(level="DEBUG")

        # Then
        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger().level == logging.DEBUG

    def test_given_configure_when_done_then_uvicorn_access_quiet(self) -> None:
        """uvicorn's access log is raised to WARNING."""
        # When
        configure_logging()

        # Then
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_given_console_format_when_log_then_event_rendered(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Console output renders the event name to stderr."""
        # Given
        configure_logging(json_format=False, level="INFO")

        # When
        get_logger("mymodule").info("console_event", key="value")

        # Then
        captured = capsys.readouterr()
        assert "console_event" in captured.err
        assert "key=value" in captured.err
