"""Infer a package's dependencies from its assembly definitions.

Every ``.asmdef`` under the package root is parsed and each of its references
is resolved, by GUID or by name, to another ``.asmdef`` in the project. The
package that owns each referenced module (nearest ``package.json`` above it)
becomes a dependency. Only one hop is followed: references of the referenced
modules are not visited.

Nothing here raises for malformed input. Problems end up in
``FetchResult.unresolved`` (per reference, module or package) or
``FetchResult.warnings`` (per run).
"""

from __future__ import annotations

import logging
from pathlib import Path

from asmdef.catalog import ModuleCatalog, ProjectCatalog
from asmdef.index import ModuleIndex, resolve_reference
from asmdef.models import DescriptorError, parse_asmdef, parse_reference
from manifest.io import ManifestError, read_package_id
from manifest.models import Dependency
from resolve.models import FetchResult
from resolve.ownership import find_nearest_package_json
from rules.config import ManifestToolsConfig, find_project_root
from scan.files import find_module_files
from utils import fold_name, to_project_relative

logger = logging.getLogger(__name__)

INVALID_PATH_WARNING = "package.json path is invalid."
INVALID_FOLDER_WARNING = "package.json folder is invalid."
NO_MODULES_WARNING = "No .asmdef files found under this package."
MISSING_NAME_ERROR = "Missing package name."


def _read_current_package_name(
    package_json_path: Path, warnings: list[str]
) -> str | None:
    try:
        name, _version = read_package_id(package_json_path)
    except ManifestError as exc:
        warnings.append(f"Unable to read current package name: {exc}")
        return None
    return name


def _collect_referenced_modules(
    package_modules: list[Path],
    catalog: ModuleCatalog,
    index: ModuleIndex,
    project_root: Path,
    unresolved: list[str],
) -> dict[Path, None]:
    """Resolve every reference of every module; return the distinct targets."""
    referenced: dict[Path, None] = {}

    for module_path in package_modules:
        try:
            asmdef = parse_asmdef(module_path)
        except DescriptorError as exc:
            relative = to_project_relative(module_path, project_root)
            unresolved.append(f"{relative} (parse error: {exc})")
            continue

        module_resolved = module_path.resolve()
        for raw in asmdef.references or ():
            token = parse_reference(raw)
            if token is None:
                continue

            target = resolve_reference(token, catalog, index)
            if target is None:
                logger.debug("Unresolved reference %r in %s", token.raw, module_path)
                unresolved.append(token.raw)
                continue

            target = Path(target)
            if not target.is_absolute():
                target = project_root / target
            target = target.resolve()

            if target == module_resolved:
                continue

            referenced.setdefault(target, None)

    return referenced


def fetch_from_package_root(
    package_json_path: str | Path | None,
    include_unity_packages: bool = True,
    *,
    catalog: ModuleCatalog | None = None,
    config: ManifestToolsConfig | None = None,
    project_root: Path | None = None,
) -> FetchResult:
    """Discover the packages that ``package_json_path``'s modules depend on.

    Args:
        package_json_path: Descriptor of the package being inspected
        include_unity_packages: When False, drop dependencies whose name
            starts with the reserved vendor prefix (``com.unity.``)
        catalog: Source of every known module and of GUID lookup; defaults to
            a ``ProjectCatalog`` scanning ``project_root``
        config: Scan and naming settings; defaults to ``ManifestToolsConfig()``
        project_root: Unity project root; defaults to the nearest ancestor
            holding the project root marker, else the package root

    Returns:
        FetchResult. An empty result with a single warning is returned when
        the descriptor path is invalid or no modules exist under the package.
    """
    config = config or ManifestToolsConfig()
    warnings: list[str] = []
    unresolved: list[str] = []
    dependencies: dict[str, Dependency] = {}

    if package_json_path is None or not str(package_json_path):
        return FetchResult.empty(INVALID_PATH_WARNING)
    package_json_path = Path(package_json_path)
    if not package_json_path.is_file():
        return FetchResult.empty(INVALID_PATH_WARNING)
    package_json_path = package_json_path.resolve()

    current_package_name = _read_current_package_name(package_json_path, warnings)

    package_root = package_json_path.parent
    if not package_root.is_dir():
        return FetchResult.empty(INVALID_FOLDER_WARNING, warnings)

    if project_root is None:
        project_root = (
            find_project_root(package_root, config.project_root_marker)
            or package_root
        )
    project_root = project_root.resolve()

    if catalog is None:
        catalog = ProjectCatalog(project_root, config)

    index = ModuleIndex.build(catalog, base_dir=project_root)

    package_modules = list(
        find_module_files(
            package_root,
            pattern=config.module_pattern,
            excluded_dirs=config.excluded_dirs,
            exclude_patterns=config.exclude,
            respect_gitignore=config.respect_gitignore,
            nested_gitignore=config.nested_gitignore,
        )
    )
    if not package_modules:
        return FetchResult.empty(NO_MODULES_WARNING, warnings)
    logger.debug("Found %d module(s) under %s", len(package_modules), package_root)

    referenced = _collect_referenced_modules(
        package_modules, catalog, index, project_root, unresolved
    )

    reserved_prefix = fold_name(config.reserved_prefix)
    current_key = fold_name(current_package_name) if current_package_name else None

    for module_path in referenced:
        relative_module = to_project_relative(module_path, project_root)

        module_folder = module_path.parent
        if not module_folder.is_dir():
            unresolved.append(relative_module)
            continue

        owner = find_nearest_package_json(
            module_folder,
            descriptor_filename=config.descriptor_filename,
            project_root_marker=config.project_root_marker,
        )
        if owner is None:
            logger.debug("No owning package for %s", relative_module)
            unresolved.append(relative_module)
            continue

        relative_owner = to_project_relative(owner, project_root)
        try:
            name, version = read_package_id(owner)
        except ManifestError as exc:
            unresolved.append(f"{relative_owner} (invalid package.json: {exc})")
            continue
        if not name:
            unresolved.append(
                f"{relative_owner} (invalid package.json: {MISSING_NAME_ERROR})"
            )
            continue

        key = fold_name(name)
        if key == current_key:
            continue
        if not include_unity_packages and key.startswith(reserved_prefix):
            logger.debug("Skipping reserved package %s", name)
            continue

        # Keyed by name only; a later module's package version replaces an earlier one.
        dependencies[key] = Dependency(name=name, version=version or "")

    return FetchResult(
        dependencies=sorted(dependencies.values(), key=lambda d: fold_name(d.name)),
        unresolved=sorted(set(unresolved)),
        warnings=warnings,
    )


__all__ = [
    "INVALID_FOLDER_WARNING",
    "INVALID_PATH_WARNING",
    "NO_MODULES_WARNING",
    "fetch_from_package_root",
]
