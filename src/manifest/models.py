"""Package manifest models.

This module contains the pydantic schema for a Unity ``package.json`` and the
``Dependency`` pair used both by the manifest editor helpers and by dependency
discovery results.
"""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_MANIFEST_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="allow",
)


class Author(BaseModel):
    """Package author block."""

    model_config = _MANIFEST_CONFIG

    name: str | None = None
    email: str | None = None
    url: str | None = None


class Sample(BaseModel):
    """An importable sample shipped with the package (``Samples~/...``)."""

    model_config = _MANIFEST_CONFIG

    display_name: str | None = None
    description: str | None = None
    path: str | None = None


class Dependency(BaseModel):
    """A ``(name, version)`` pair naming one package."""

    name: str
    version: str = ""


class PackageManifest(BaseModel):
    """A Unity package descriptor (``package.json``).

    Field order matches the order keys are written back to disk. Keys this
    schema does not know about are kept and written after the known ones.
    """

    model_config = _MANIFEST_CONFIG

    name: str | None = None
    version: str | None = None
    display_name: str | None = None
    description: str | None = None
    unity: str | None = None
    unity_release: str | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    keywords: list[str] = Field(default_factory=list)
    author: Author = Field(default_factory=Author)
    documentation_url: str | None = None
    changelog_url: str | None = None
    licenses_url: str | None = None
    samples: list[Sample] = Field(default_factory=list)
    hide_in_editor: bool = True

    @field_validator("dependencies", mode="before")
    @classmethod
    def coerce_dependencies(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {key: "" if value is None else value for key, value in v.items()}
        return v

    @field_validator("keywords", mode="before")
    @classmethod
    def coerce_keywords(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return ["" if item is None else item for item in v]
        return v

    @field_validator("samples", mode="before")
    @classmethod
    def coerce_samples(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [item for item in v if item is not None]
        return v

    @field_validator("author", mode="before")
    @classmethod
    def coerce_author(cls, v: Any) -> Any:
        return {} if v is None else v

    def to_json(self) -> bytes:
        """Serialize as indented JSON, omitting unset (null) fields."""
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2)

    def dependency_list(self) -> list[Dependency]:
        """Return the dependency map as an ordered list of pairs."""
        return [
            Dependency(name=name, version=version)
            for name, version in self.dependencies.items()
        ]


__all__ = ["Author", "Dependency", "PackageManifest", "Sample"]
