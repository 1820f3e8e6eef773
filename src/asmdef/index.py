"""Name index over every module in a project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from asmdef.models import (
    DescriptorError,
    GuidReference,
    NameReference,
    parse_asmdef,
)
from utils import fold_name

if TYPE_CHECKING:
    from pathlib import Path

    from asmdef.catalog import ModuleCatalog
    from asmdef.models import ReferenceToken

logger = logging.getLogger(__name__)


class ModuleIndex:
    """Case-insensitive mapping of module name to descriptor path.

    The first module registered under a name wins; later modules with the same
    name are ignored, so GUID references are the only way to reach them.
    """

    def __init__(self) -> None:
        self._by_name: dict[str, Path] = {}

    @classmethod
    def build(
        cls, catalog: ModuleCatalog, base_dir: Path | None = None
    ) -> ModuleIndex:
        """Parse every module the catalog knows about and index it by name.

        Relative catalog paths are read from ``base_dir`` when one is given.
        Modules that fail to parse or declare no name are left out.
        """
        index = cls()
        for path in catalog.find_all_modules():
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            try:
                asmdef = parse_asmdef(path)
            except DescriptorError as exc:
                logger.debug("Skipping unparsable module %s: %s", path, exc)
                continue
            if not asmdef.name:
                continue
            if not index.add(asmdef.name, path):
                logger.debug(
                    "Module name %r at %s shadowed by %s",
                    asmdef.name,
                    path,
                    index.lookup(asmdef.name),
                )
        logger.debug("Indexed %d module name(s)", len(index))
        return index

    def add(self, name: str, path: Path) -> bool:
        """Register ``name``; return False if it was already taken."""
        key = fold_name(name)
        if key in self._by_name:
            return False
        self._by_name[key] = path
        return True

    def lookup(self, name: str) -> Path | None:
        return self._by_name.get(fold_name(name))

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and fold_name(name) in self._by_name


def resolve_reference(
    token: ReferenceToken,
    catalog: ModuleCatalog,
    index: ModuleIndex,
) -> Path | None:
    """Return the descriptor path a reference token points at, if known."""
    if isinstance(token, GuidReference):
        if not token.guid:
            return None
        return catalog.resolve_identifier(token.guid)
    if isinstance(token, NameReference):
        return index.lookup(token.name)
    msg = f"Unsupported reference token: {token!r}"
    raise TypeError(msg)


__all__ = ["ModuleIndex", "resolve_reference"]
