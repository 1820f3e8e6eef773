"""Dependency report rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from manifest.models import Dependency  # noqa: TC001
from report.utils import _dumps_json, _write_json

if TYPE_CHECKING:
    from pathlib import Path

    from resolve.models import FetchResult

REPORT_SCHEMA_VERSION = 1


class DependencyReport(BaseModel):
    """A ``FetchResult`` as written to disk or stdout."""

    schema_version: int = Field(default=REPORT_SCHEMA_VERSION)
    package: str
    dependencies: list[Dependency] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def build_report(package: str, result: FetchResult) -> DependencyReport:
    return DependencyReport(
        package=package,
        dependencies=result.dependencies,
        unresolved=result.unresolved,
        warnings=result.warnings,
    )


def render_report(package: str, result: FetchResult) -> bytes:
    """Serialize the report deterministically (sorted keys, 2-space indent)."""
    return _dumps_json(build_report(package, result))


def write_report(path: Path, package: str, result: FetchResult) -> Path:
    _write_json(path, build_report(package, result))
    return path


__all__ = [
    "REPORT_SCHEMA_VERSION",
    "DependencyReport",
    "build_report",
    "render_report",
    "write_report",
]
