"""Default filling and normalization applied before a manifest is saved."""

from __future__ import annotations

from typing import TYPE_CHECKING

from manifest.models import Author

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from manifest.models import Dependency, PackageManifest, Sample


def ensure_defaults(data: PackageManifest | None) -> None:
    """Replace collections that callers may have set to ``None``."""
    if data is None:
        return
    if data.dependencies is None:
        data.dependencies = {}
    if data.keywords is None:
        data.keywords = []
    if data.samples is None:
        data.samples = []
    if data.author is None:
        data.author = Author()


def normalize_dependencies(data: PackageManifest) -> None:
    """Drop dependency entries with a blank name."""
    if data.dependencies is None:
        data.dependencies = {}
    data.dependencies = {
        name: version
        for name, version in data.dependencies.items()
        if name and name.strip()
    }


def normalize_keywords(data: PackageManifest) -> None:
    """Trim keywords and drop the empty ones, keeping order."""
    if data.keywords is None:
        data.keywords = []
    trimmed = ((keyword or "").strip() for keyword in data.keywords)
    data.keywords = [keyword for keyword in trimmed if keyword]


def normalize_for_save(data: PackageManifest) -> None:
    ensure_defaults(data)
    normalize_dependencies(data)
    normalize_keywords(data)


def sync_lists_into_data(
    data: PackageManifest,
    dependencies: Sequence[Dependency] | None,
    keywords: Sequence[str] | None,
    samples: Sequence[Sample] | None,
) -> None:
    """Copy the editable lists into ``data``, then normalize it.

    Dependencies become the name -> version map; entries with a blank name are
    skipped and a later entry with the same name replaces an earlier one.
    """
    ensure_defaults(data)

    data.dependencies = {}
    for dependency in dependencies or ():
        if dependency is None or not (dependency.name or "").strip():
            continue
        data.dependencies[dependency.name] = dependency.version or ""

    data.keywords = list(keywords or ())
    data.samples = list(samples or ())

    normalize_for_save(data)


def merge_dependencies(data: PackageManifest, fetched: Iterable[Dependency]) -> int:
    """Upsert discovered dependencies into the manifest map.

    Existing entries keep their position; new ones are appended.

    Returns:
        Number of entries added or whose version changed.
    """
    ensure_defaults(data)
    changed = 0
    for dependency in fetched:
        if data.dependencies.get(dependency.name) != dependency.version:
            data.dependencies[dependency.name] = dependency.version
            changed += 1
    return changed


__all__ = [
    "ensure_defaults",
    "merge_dependencies",
    "normalize_dependencies",
    "normalize_for_save",
    "normalize_keywords",
    "sync_lists_into_data",
]
