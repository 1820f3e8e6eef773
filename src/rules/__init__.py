"""Configuration rules for package-manifest-tools"""

from rules.config import (
    CONFIG_FILENAME,
    ConfigError,
    ManifestToolsConfig,
    find_project_root,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ManifestToolsConfig",
    "find_project_root",
    "load_config",
]
