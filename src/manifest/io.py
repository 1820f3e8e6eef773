"""Reading and writing ``package.json`` files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from manifest.models import PackageManifest
from manifest.normalize import ensure_defaults, sync_lists_into_data

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from manifest.models import Dependency, Sample

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when a package descriptor cannot be read, parsed or written."""


def try_deserialize(text: str | None) -> PackageManifest:
    """Parse manifest text.

    Blank text yields an empty manifest rather than an error.

    Raises:
        ManifestError: If the text is not a JSON object matching the schema.
    """
    if text is None or not text.strip():
        return PackageManifest()

    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise ManifestError(str(exc)) from exc

    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}."
        raise ManifestError(msg)

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(str(exc)) from exc


def deserialize_or_new(text: str | None) -> tuple[PackageManifest, str | None]:
    """Parse manifest text, falling back to an empty manifest on error.

    Returns:
        The manifest (with defaults filled in) and the parse error, if any.
    """
    try:
        data = try_deserialize(text)
        error = None
    except ManifestError as exc:
        data = PackageManifest()
        error = str(exc)
    ensure_defaults(data)
    return data, error


def safe_read_file(path: Path | None, fallback: str = "") -> str:
    """Return the text of ``path``, or ``fallback`` if it cannot be read."""
    if path is None or not path.is_file():
        return fallback
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Falling back for unreadable file %s: %s", path, exc)
        return fallback


def load_manifest(path: Path) -> PackageManifest:
    """Read and parse a manifest file.

    Raises:
        ManifestError: If the file is missing or malformed.
    """
    if not path.is_file():
        msg = f"File not found: {path}"
        raise ManifestError(msg)
    data = try_deserialize(safe_read_file(path))
    ensure_defaults(data)
    return data


def read_package_id(path: Path) -> tuple[str | None, str | None]:
    """Return the ``(name, version)`` declared by a package descriptor.

    Raises:
        ManifestError: If the file is empty or cannot be parsed.
    """
    text = safe_read_file(path)
    if not text.strip():
        msg = "File is empty."
        raise ManifestError(msg)

    data = try_deserialize(text)
    return data.name, data.version


def save_to_file(
    path: Path | None,
    data: PackageManifest,
    dependencies: Sequence[Dependency] | None,
    keywords: Sequence[str] | None,
    samples: Sequence[Sample] | None,
) -> None:
    """Fold the editable lists back into ``data`` and write it to ``path``.

    Raises:
        ManifestError: If the path is empty or the write fails.
    """
    if path is None:
        msg = "Invalid path."
        raise ManifestError(msg)

    sync_lists_into_data(data, dependencies, keywords, samples)

    try:
        path.write_bytes(data.to_json())
    except OSError as exc:
        raise ManifestError(str(exc)) from exc
    logger.info("Saved %s", path)


__all__ = [
    "ManifestError",
    "deserialize_or_new",
    "load_manifest",
    "read_package_id",
    "safe_read_file",
    "save_to_file",
    "try_deserialize",
]
