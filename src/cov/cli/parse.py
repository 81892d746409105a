"""cov parse command - normalize a coverage report to JSON."""

from __future__ import annotations

import json
from typing import BinaryIO

import click

from cov.report import InvalidReportError, diagnose, parse


@click.command()
@click.argument("report_file", type=click.File("rb"))
@click.option("--indent", type=int, default=None, help="Pretty-print JSON with this indent")
@click.option(
    "--show-format",
    is_flag=True,
    help="Print the detected report format to stderr",
)
@click.option(
    "--explain",
    is_flag=True,
    help="On failure, print why each supported format rejected the report",
)
def parse_command(
    report_file: BinaryIO, indent: int | None, show_format: bool, explain: bool
) -> None:
    """Parse a coverage report and print its canonical regions as JSON.

    REPORT_FILE is a Go coverage profile or a JaCoCo XML report.
    Use - to read from stdin.
    """
    data = report_file.read()

    try:
        report = parse(data)
    except InvalidReportError:
        click.echo("invalid report", err=True)
        if explain:
            for name, reason in diagnose(data).items():
                click.echo(f"  {name}: {reason}", err=True)
        raise SystemExit(1) from None

    if show_format:
        click.echo(f"format: {report.source_format}", err=True)
    click.echo(json.dumps(report.to_dict(), indent=indent))
