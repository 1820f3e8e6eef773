"""Module catalogs: every module a project knows about, and GUID lookup."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from rules.config import ManifestToolsConfig
from scan.files import find_module_files

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta"

_META_GUID = re.compile(r"^guid:\s*([0-9A-Za-z]+)\s*$", re.MULTILINE)


class ModuleCatalog(Protocol):
    """What dependency discovery needs from the project's asset database."""

    def find_all_modules(self) -> list[Path]:
        """Return the descriptor path of every known module."""
        ...

    def resolve_identifier(self, guid: str) -> Path | None:
        """Map a stable identifier to a module descriptor path."""
        ...


def read_meta_guid(asset_path: Path) -> str | None:
    """Return the GUID recorded in ``<asset>.meta``, lowercased, if any."""
    meta_path = asset_path.with_name(asset_path.name + META_SUFFIX)
    try:
        text = meta_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError):
        return None

    match = _META_GUID.search(text)
    return match.group(1).lower() if match else None


class StaticCatalog:
    """Catalog over an explicit module list and GUID table."""

    def __init__(
        self,
        modules: Iterable[Path],
        guids: Mapping[str, Path] | None = None,
    ) -> None:
        self._modules = list(modules)
        self._guids = {guid.lower(): path for guid, path in (guids or {}).items()}

    def find_all_modules(self) -> list[Path]:
        return list(self._modules)

    def resolve_identifier(self, guid: str) -> Path | None:
        return self._guids.get(guid.strip().lower())


class ProjectCatalog:
    """Catalog built by scanning a Unity project on disk.

    Modules are collected from the configured catalog roots (by default
    ``Assets``, ``Packages`` and ``Library/PackageCache``). A root without the
    project marker (a standalone package checkout) is scanned as a whole.
    GUIDs come from the ``.meta`` file Unity writes next to each asset.
    """

    def __init__(
        self,
        project_root: Path,
        config: ManifestToolsConfig | None = None,
    ) -> None:
        self.project_root = project_root
        self.config = config or ManifestToolsConfig()
        self._modules: list[Path] | None = None
        self._guids: dict[str, Path] | None = None

    def find_all_modules(self) -> list[Path]:
        if self._modules is None:
            self._modules = self._scan()
        return list(self._modules)

    def resolve_identifier(self, guid: str) -> Path | None:
        if self._guids is None:
            self._guids = self._build_guid_table()
        return self._guids.get(guid.strip().lower())

    def _scan_roots(self) -> list[tuple[Path, tuple[str, ...]]]:
        """Return ``(directory, excluded_dirs)`` pairs to scan.

        Without the project root marker there is no Unity layout to follow, so
        the root itself is scanned with the package exclusions applied.
        """
        if not (self.project_root / self.config.project_root_marker).is_dir():
            return [(self.project_root, tuple(self.config.excluded_dirs))]
        return [(self.project_root / name, ()) for name in self.config.catalog_roots]

    def _scan(self) -> list[Path]:
        found: dict[Path, None] = {}
        for catalog_root, excluded_dirs in self._scan_roots():
            for path in find_module_files(
                catalog_root,
                pattern=self.config.module_pattern,
                excluded_dirs=excluded_dirs,
                exclude_patterns=self.config.exclude,
                respect_gitignore=self.config.respect_gitignore,
                nested_gitignore=self.config.nested_gitignore,
            ):
                found.setdefault(path, None)
        logger.debug(
            "Catalog found %d module(s) under %s", len(found), self.project_root
        )
        return list(found)

    def _build_guid_table(self) -> dict[str, Path]:
        table: dict[str, Path] = {}
        for path in self.find_all_modules():
            guid = read_meta_guid(path)
            if guid is None:
                logger.debug("No GUID recorded for %s", path)
                continue
            table.setdefault(guid, path)
        return table


__all__ = [
    "META_SUFFIX",
    "ModuleCatalog",
    "ProjectCatalog",
    "StaticCatalog",
    "read_meta_guid",
]
