from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import ConfigError, find_project_root, load_config


def _write_config(project_root: Path, toml_content: str) -> None:
    (project_root / "pkgmanifest.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.module_pattern == "*.asmdef"
    assert config.excluded_dirs == ["Library"]
    assert config.catalog_roots == ["Assets", "Packages", "Library/PackageCache"]
    assert config.reserved_prefix == "com.unity."
    assert config.include_unity_packages is True


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "excluded_dirs = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_empty_marker_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'project_root_marker = "  "')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize("root", ["../Shared", "/abs/path"])
def test_catalog_root_escape_rejected(tmp_path: Path, root: str) -> None:
    _write_config(tmp_path, f'catalog_roots = ["Assets", "{root}"]')

    with pytest.raises(ConfigError, match="relative path within the project"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
excluded_dirs = ["Library", "Generated"]
reserved_prefix = "com.vendor."
include_unity_packages = false
exclude = ["**/Tests/*"]
respect_gitignore = true
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.excluded_dirs == ["Library", "Generated"]
    assert config.reserved_prefix == "com.vendor."
    assert config.include_unity_packages is False
    assert config.exclude == ["**/Tests/*"]
    assert config.respect_gitignore is True
    assert config.nested_gitignore is False


def test_find_project_root(tmp_path: Path) -> None:
    project = tmp_path / "project"
    package_dir = project / "Packages" / "com.acme.tool"
    package_dir.mkdir(parents=True)
    (project / "Assets").mkdir()

    assert find_project_root(package_dir) == project
    assert find_project_root(package_dir / "package.json") == project
    assert find_project_root(tmp_path / "elsewhere") is None
