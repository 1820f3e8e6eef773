from __future__ import annotations

from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "pkgmanifest.toml"


class ManifestToolsConfig(BaseModel):
    """Configuration for dependency discovery over a Unity project."""

    model_config = ConfigDict(extra="forbid")

    module_pattern: str = Field(
        default="*.asmdef",
        description="Filename glob for module (assembly definition) descriptors",
    )
    descriptor_filename: str = Field(
        default="package.json",
        description="Filename of a package descriptor",
    )
    project_root_marker: str = Field(
        default="Assets",
        description="Directory whose presence marks the project root",
    )
    excluded_dirs: list[str] = Field(
        default_factory=lambda: ["Library"],
        description="Directory names skipped when scanning a package root",
    )
    catalog_roots: list[str] = Field(
        default_factory=lambda: ["Assets", "Packages", "Library/PackageCache"],
        description="Project-relative directories scanned for known modules",
    )
    reserved_prefix: str = Field(
        default="com.unity.",
        description="Vendor prefix dropped when Unity packages are excluded",
    )
    include_unity_packages: bool = Field(
        default=True,
        description="Report dependencies on packages with the reserved prefix",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for descriptor files to exclude",
    )
    respect_gitignore: bool = Field(
        default=False,
        description="Skip files ignored by the scanned root's .gitignore",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )

    @field_validator("module_pattern", "descriptor_filename", "project_root_marker")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "value must be a non-empty string"
            raise ValueError(msg)
        return v

    @field_validator("catalog_roots")
    @classmethod
    def validate_catalog_roots(cls, v: list[str]) -> list[str]:
        """Catalog roots must stay inside the project root."""
        for entry in v:
            entry_path = Path(entry)
            if entry_path.is_absolute() or ".." in entry_path.parts:
                msg = f"catalog root '{entry}' must be a relative path within the project"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def find_project_root(start: Path, marker: str = "Assets") -> Path | None:
    """Return the nearest ancestor of ``start`` (inclusive) holding ``marker``."""
    current = start if start.is_dir() else start.parent
    for candidate in (current, *current.parents):
        if (candidate / marker).is_dir():
            return candidate
    return None


def find_config_dir(start: Path) -> Path | None:
    """Return the nearest ancestor of ``start`` holding a config file."""
    current = start if start.is_dir() else start.parent
    for candidate in (current, *current.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return None


def load_config(root: Path) -> ManifestToolsConfig:
    """Load configuration from pkgmanifest.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ManifestToolsConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ManifestToolsConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
