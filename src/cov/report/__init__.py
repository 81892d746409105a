"""Coverage report parsing and normalization.

Usage:
    from cov.report import parse

    report = parse(Path("cover.out").read_bytes())
    payload = report.to_dict()

Supported formats:
    - gocov: Go coverage profiles (go test -coverprofile)
    - jacoco: JaCoCo XML (Java, Maven/Gradle)
"""

from cov.report.models import Region, Report
from cov.report.parse import (
    FORMAT_BY_NAME,
    FORMATS,
    InvalidReportError,
    ReportFormat,
    diagnose,
    from_golang,
    from_jacoco,
    parse,
)

__all__ = [
    # Models
    "Region",
    "Report",
    # Parsing
    "FORMATS",
    "FORMAT_BY_NAME",
    "InvalidReportError",
    "ReportFormat",
    "diagnose",
    "from_golang",
    "from_jacoco",
    "parse",
]
