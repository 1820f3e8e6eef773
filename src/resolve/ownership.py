"""Locate the package that owns a directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def find_nearest_package_json(
    start_folder: Path,
    *,
    descriptor_filename: str = "package.json",
    project_root_marker: str = "Assets",
) -> Path | None:
    """Walk upward from ``start_folder`` to the closest package descriptor.

    The directory holding ``project_root_marker`` is the last one checked; the
    walk never continues past the project root.
    """
    current = start_folder
    while True:
        candidate = current / descriptor_filename
        if candidate.is_file():
            return candidate

        if (current / project_root_marker).is_dir():
            return None

        parent = current.parent
        if parent == current:
            return None
        current = parent


__all__ = ["find_nearest_package_json"]
