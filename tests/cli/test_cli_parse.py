"""Tests for cov parse command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from cov.cli.main import cli

runner = CliRunner()


class TestParseCommand:
    """Tests for parse command."""

    def test_go_profile_from_file(self, tmp_path: Path) -> None:
        """Prints canonical regions for a Go profile."""
        report = tmp_path / "cover.out"
        report.write_bytes(b"mode: set\npkg/foo.go:1.2,3.4 5 6\n")

        result = runner.invoke(cli, ["parse", str(report)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["regions"][0]["file"] == "pkg/foo.go"
        assert data["regions"][0]["executions"] == 6

    def test_jacoco_from_stdin(self, jacoco_sample: bytes) -> None:
        """A dash reads the report from stdin."""
        result = runner.invoke(cli, ["parse", "-"], input=jacoco_sample)

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)["regions"]) == 16

    def test_indent(self, gocov_sample: bytes) -> None:
        result = runner.invoke(cli, ["parse", "--indent", "2", "-"], input=gocov_sample)

        assert result.exit_code == 0
        assert result.stdout.startswith('{\n  "regions": [')

    def test_show_format(self, gocov_sample: bytes) -> None:
        """Detected format goes to stderr, keeping stdout pure JSON."""
        result = runner.invoke(cli, ["parse", "--show-format", "-"], input=gocov_sample)

        assert result.exit_code == 0
        assert "format: gocov" in result.stderr
        json.loads(result.stdout)

    def test_invalid_report(self) -> None:
        """Unrecognized input exits 1 with the generic message."""
        result = runner.invoke(cli, ["parse", "-"], input=b"<coverage/>")

        assert result.exit_code == 1
        assert result.stdout == ""
        assert result.stderr.strip() == "invalid report"

    def test_explain_lists_each_format(self) -> None:
        """--explain adds why each format rejected the input."""
        result = runner.invoke(cli, ["parse", "--explain", "-"], input=b"mode: bogus\n")

        assert result.exit_code == 1
        lines = result.stderr.splitlines()
        assert lines[0] == "invalid report"
        assert lines[1] == "  gocov: parsing mode string: invalid report (mode line is not valid)"
        assert lines[2] == "  jacoco: invalid report"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a usage error."""
        result = runner.invoke(cli, ["parse", str(tmp_path / "nope.out")])

        assert result.exit_code == 2
