"""cov - normalize coverage reports from different toolchains into one model."""

from cov.report import InvalidReportError, Region, Report, parse

__version__ = "0.1.0"

__all__ = ["InvalidReportError", "Region", "Report", "parse", "__version__"]
