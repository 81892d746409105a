"""Canonical, tool-agnostic coverage model.

Every supported format is projected into a flat list of regions. Downstream
consumers only ever see this model; the tool-specific tree is kept on the
report for reference but never re-parsed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Region:
    """A span of source with its statement and execution counts.

    Lines are 1-based and ``from_line <= to_line``. Columns are 0-based.
    A ``to_column`` of 0 means the region ends at the end of the line before
    ``to_line``, which lets a whole line be described without reading the
    source file to find its last column.

    ``statements`` and ``executions`` are independent: a region executed in
    a loop can have far more executions than statements.
    """

    file: str
    from_line: int
    to_line: int
    from_column: int
    to_column: int
    statements: int
    executions: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "from_line": self.from_line,
            "to_line": self.to_line,
            "from_column": self.from_column,
            "to_column": self.to_column,
            "statements": self.statements,
            "executions": self.executions,
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Canonical report produced by ``cov.report.parse``."""

    source_format: str  # format id, e.g. "gocov" or "jacoco"
    regions: tuple[Region, ...] = ()
    raw_report: Any = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses. The raw report is not included."""
        return {"regions": [r.to_dict() for r in self.regions]}
