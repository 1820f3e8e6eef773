"""Unity package manifest (package.json) model and editing helpers."""

from manifest.fields import (
    compose_package_name,
    compose_unity_version,
    parse_package_name,
    parse_unity_version,
    sanitize_name_part,
)
from manifest.io import (
    ManifestError,
    deserialize_or_new,
    load_manifest,
    read_package_id,
    safe_read_file,
    save_to_file,
    try_deserialize,
)
from manifest.models import Author, Dependency, PackageManifest, Sample
from manifest.normalize import (
    ensure_defaults,
    merge_dependencies,
    normalize_for_save,
    sync_lists_into_data,
)

__all__ = [
    "Author",
    "Dependency",
    "ManifestError",
    "PackageManifest",
    "Sample",
    "compose_package_name",
    "compose_unity_version",
    "deserialize_or_new",
    "ensure_defaults",
    "load_manifest",
    "merge_dependencies",
    "normalize_for_save",
    "parse_package_name",
    "parse_unity_version",
    "read_package_id",
    "safe_read_file",
    "sanitize_name_part",
    "save_to_file",
    "sync_lists_into_data",
    "try_deserialize",
]
