"""Report rendering entry points."""

from report.write import (
    REPORT_SCHEMA_VERSION,
    DependencyReport,
    build_report,
    render_report,
    write_report,
)

__all__ = [
    "REPORT_SCHEMA_VERSION",
    "DependencyReport",
    "build_report",
    "render_report",
    "write_report",
]
