"""Report format sniffing and normalization.

Uploads do not declare their format. Each known format is tried in a fixed
order and the first one that parses wins; its tree is then projected into the
canonical model.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from cov.report import golang, jacoco
from cov.report.models import Region, Report

logger = structlog.get_logger()


class InvalidReportError(Exception):
    """No known format accepted the report."""

    def __str__(self) -> str:
        return "invalid report"


@dataclass(frozen=True, slots=True)
class ReportFormat:
    """A parser and its projection into the canonical model."""

    name: str
    parse: Callable[[bytes], Any]
    project: Callable[[Any], tuple[Region, ...]]
    errors: tuple[type[Exception], ...]


def from_golang(report: golang.Report) -> tuple[Region, ...]:
    """Project a Go profile: one region per block, fields renamed as-is."""
    return tuple(
        Region(
            file=region.file,
            from_line=region.start_line,
            to_line=region.end_line,
            from_column=region.start_column,
            to_column=region.end_column,
            statements=region.statements,
            executions=region.executed,
        )
        for region in report.regions
    )


def from_jacoco(report: jacoco.Report) -> tuple[Region, ...]:
    """Project a JaCoCo report: one whole-line region per ``<sourcefile>`` line.

    Only per-line data is used. Class, method and package counters have no
    line granularity, and branch counts are not folded in.
    """
    regions: list[Region] = []
    for package in report.packages:
        for source_file in package.source_files:
            for line in source_file.lines:
                regions.append(
                    Region(
                        file=source_file.name,
                        from_line=line.number,
                        to_line=line.number + 1,
                        from_column=0,
                        to_column=0,
                        statements=line.hit_calls + line.missed_calls,
                        executions=line.hit_calls,
                    )
                )
    return tuple(regions)


# Order matters: the Go profile is rejected on its first line, so it goes
# before the full XML decode.
FORMATS: Sequence[ReportFormat] = (
    ReportFormat("gocov", golang.parse_report, from_golang, golang.PARSE_ERRORS),
    ReportFormat("jacoco", jacoco.parse_report, from_jacoco, jacoco.PARSE_ERRORS),
)

FORMAT_BY_NAME: dict[str, ReportFormat] = {f.name: f for f in FORMATS}


def _as_bytes(raw: bytes | bytearray | memoryview) -> bytes:
    if isinstance(raw, bytes):
        return raw
    if isinstance(raw, (bytearray, memoryview)):
        return bytes(raw)
    raise TypeError(f"report must be bytes-like, not {type(raw).__name__}")


def parse(raw: bytes | bytearray | memoryview) -> Report:
    """Parse a coverage report of any supported format.

    Raises:
        InvalidReportError: No format accepted the input. Why each format
            rejected it is deliberately not reported; see ``diagnose``.
        TypeError: ``raw`` is not bytes-like.
    """
    data = _as_bytes(raw)
    for fmt in FORMATS:
        try:
            tree = fmt.parse(data)
        except fmt.errors:
            logger.debug("report_format_rejected", format=fmt.name)
            continue
        return Report(source_format=fmt.name, regions=fmt.project(tree), raw_report=tree)

    raise InvalidReportError


def diagnose(raw: bytes | bytearray | memoryview) -> dict[str, str | None]:
    """Run every format against ``raw`` and report why each one failed.

    Values are the error message, or None for a format that accepted the
    input. Meant for debugging uploads, not for deciding the format.
    """
    data = _as_bytes(raw)
    results: dict[str, str | None] = {}
    for fmt in FORMATS:
        try:
            fmt.parse(data)
        except fmt.errors as e:
            results[fmt.name] = str(e)
        else:
            results[fmt.name] = None
    return results
