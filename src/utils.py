"""Shared utilities for package-manifest-tools"""

from __future__ import annotations

from pathlib import Path


def fold_name(value: str) -> str:
    """Fold a name for case-insensitive ordinal comparison.

    Upper-casing (rather than ``casefold``) keeps the sort order of punctuation
    relative to letters stable, e.g. ``_`` sorts after ``Z``.

    Examples:
        >>> fold_name("com.Org.Pkg")
        'COM.ORG.PKG'
    """
    return value.upper()


def to_project_relative(path: str | Path, project_root: Path | None = None) -> str:
    """Render a path for diagnostics, relative to the project root when possible.

    Args:
        path: Absolute or relative file path
        project_root: Unity project root (the directory holding ``Assets``)

    Returns:
        POSIX path relative to ``project_root`` if ``path`` is inside it,
        otherwise the POSIX form of ``path`` itself.

    Examples:
        >>> to_project_relative("/proj/Packages/a/A.asmdef", Path("/proj"))
        'Packages/a/A.asmdef'
        >>> to_project_relative("C:\\\\other\\\\B.asmdef")
        'C:/other/B.asmdef'
    """
    path_str = str(path).replace("\\", "/")
    if not path_str or project_root is None:
        return path_str

    try:
        return Path(path_str).relative_to(project_root).as_posix()
    except ValueError:
        return path_str
