"""Determinism verification for dependency discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from report.utils import _dumps_json
from resolve.fetcher import fetch_from_package_root

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import ManifestToolsConfig

_COMPARED_FIELDS = ("dependencies", "unresolved", "warnings")


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)


def verify_determinism(
    *,
    package_json_path: Path,
    include_unity_packages: bool = True,
    config: ManifestToolsConfig | None = None,
    project_root: Path | None = None,
) -> DeterminismResult:
    """Verify that dependency discovery is repeatable on an unchanged tree.

    Runs discovery twice, each with a freshly built catalog and module index,
    and compares the serialized results field by field.

    Args:
        package_json_path: Descriptor of the package to inspect.
        include_unity_packages: Passed through to discovery.
        config: Scan settings passed through to discovery.
        project_root: Project root passed through to discovery.

    Returns:
        DeterminismResult with ok status and the sorted names of the result
        fields whose serialized form differed.

    Raises:
        FileNotFoundError: If package_json_path does not exist.
    """
    if not package_json_path.is_file():
        msg = f"Package descriptor does not exist: {package_json_path}"
        raise FileNotFoundError(msg)

    runs = [
        fetch_from_package_root(
            package_json_path,
            include_unity_packages,
            config=config,
            project_root=project_root,
        )
        for _ in range(2)
    ]

    first, second = (run.model_dump(mode="json") for run in runs)
    mismatches = sorted(
        name
        for name in _COMPARED_FIELDS
        if _dumps_json(first[name]) != _dumps_json(second[name])
    )

    return DeterminismResult(ok=not mismatches, mismatches=tuple(mismatches))
