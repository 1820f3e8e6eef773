"""Assembly definition (module descriptor) models.

An ``.asmdef`` file declares a module ``name`` and an ordered list of
``references``. Each reference is either ``GUID:<id>`` or the bare name of
another module; ``parse_reference`` turns the raw string into one of the two
token types so resolution can branch on the variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import orjson
from pydantic import BaseModel, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

GUID_PREFIX = "GUID:"


class DescriptorError(Exception):
    """Raised when a module descriptor cannot be read or parsed."""


class AsmdefData(BaseModel):
    """The fields of an ``.asmdef`` that dependency discovery needs."""

    name: str | None = None
    references: list[str | None] | None = None


@dataclass(frozen=True)
class GuidReference:
    """Reference by the stable asset GUID of the target ``.asmdef``."""

    raw: str
    guid: str


@dataclass(frozen=True)
class NameReference:
    """Reference by the declared module name (matched case-insensitively)."""

    raw: str
    name: str


ReferenceToken = Union[GuidReference, NameReference]


def parse_reference(raw: str | None) -> ReferenceToken | None:
    """Classify a raw reference string; blank input yields ``None``.

    Examples:
        >>> parse_reference("GUID:0123abcd")
        GuidReference(raw='GUID:0123abcd', guid='0123abcd')
        >>> parse_reference(" Game.Core ")
        NameReference(raw=' Game.Core ', name='Game.Core')
    """
    if raw is None or not raw.strip():
        return None

    if raw[: len(GUID_PREFIX)].upper() == GUID_PREFIX:
        return GuidReference(raw=raw, guid=raw[len(GUID_PREFIX) :].strip())

    return NameReference(raw=raw, name=raw.strip())


def parse_asmdef_text(text: str) -> AsmdefData:
    """Parse ``.asmdef`` JSON text.

    Raises:
        DescriptorError: If the text is not a JSON object of the expected shape.
    """
    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise DescriptorError(str(exc)) from exc

    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}."
        raise DescriptorError(msg)

    try:
        return AsmdefData.model_validate(data)
    except ValidationError as exc:
        raise DescriptorError(str(exc)) from exc


def parse_asmdef(path: Path) -> AsmdefData:
    """Read and parse an ``.asmdef`` file.

    Raises:
        DescriptorError: If the file is missing, unreadable or malformed.
    """
    if not path.is_file():
        msg = "File not found."
        raise DescriptorError(msg)

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DescriptorError(str(exc)) from exc

    return parse_asmdef_text(text)


__all__ = [
    "GUID_PREFIX",
    "AsmdefData",
    "DescriptorError",
    "GuidReference",
    "NameReference",
    "ReferenceToken",
    "parse_asmdef",
    "parse_asmdef_text",
    "parse_reference",
]
