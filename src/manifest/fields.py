"""Helpers for the structured fields of a package manifest."""

from __future__ import annotations

import re

DEFAULT_UNITY_VERSION = "2022.1"

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9\-]")


def parse_package_name(full_name: str | None) -> tuple[str, str]:
    """Split ``com.<organization>.<package>`` into its two editable parts.

    Names that do not follow the ``com.`` convention yield two empty strings.

    Examples:
        >>> parse_package_name("com.acme.tools.core")
        ('acme', 'tools.core')
        >>> parse_package_name("org.acme.tools")
        ('', '')
    """
    if not full_name:
        return "", ""

    parts = full_name.split(".")
    if len(parts) >= 3 and parts[0] == "com":
        return parts[1], ".".join(parts[2:])
    return "", ""


def sanitize_name_part(value: str | None) -> str:
    """Lowercase, turn spaces into dashes, drop anything outside ``[a-z0-9-]``."""
    if not value:
        return ""
    value = value.lower().replace(" ", "-")
    return _INVALID_NAME_CHARS.sub("", value)


def compose_package_name(organization_name: str | None, package_name: str | None) -> str:
    """Build ``com.<organization>.<package>`` from sanitized parts.

    Sanitizing strips dots, so a multi-segment package part collapses:
    ``compose_package_name("Acme", "My Tool")`` gives ``com.acme.my-tool``.
    """
    organization = sanitize_name_part(organization_name)
    package = sanitize_name_part(package_name)
    return f"com.{organization}.{package}"


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def parse_unity_version(value: str | None) -> tuple[int, int]:
    """Return ``(major, minor)`` of a ``unity`` field such as ``"2022.3"``.

    Missing values fall back to ``DEFAULT_UNITY_VERSION``; unparsable parts
    read as 0.
    """
    parts = (value or DEFAULT_UNITY_VERSION).split(".")
    major = _parse_int(parts[0])
    minor = _parse_int(parts[1]) if len(parts) > 1 else 0
    return major, minor


def compose_unity_version(major: int, minor: int) -> str:
    return f"{max(0, major)}.{max(0, minor)}"


__all__ = [
    "DEFAULT_UNITY_VERSION",
    "compose_package_name",
    "compose_unity_version",
    "parse_package_name",
    "parse_unity_version",
    "sanitize_name_part",
]
