"""Command-line interface for package-manifest-tools."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from manifest.io import ManifestError, load_manifest, save_to_file
from manifest.normalize import merge_dependencies
from report.write import render_report, write_report
from resolve.fetcher import fetch_from_package_root
from rules.config import (
    ConfigError,
    ManifestToolsConfig,
    find_config_dir,
    find_project_root,
    load_config,
)
from utils import to_project_relative
from verify.verify import verify_determinism

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def _add_package_json(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "package_json",
        help="Path to the package's package.json",
    )


def _add_discovery_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project-root",
        default=None,
        help="Unity project root (default: nearest ancestor containing Assets/)",
    )
    parser.add_argument(
        "--exclude-unity",
        action="store_true",
        help="Leave out com.unity.* packages",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pkgmanifest")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        help="Set the logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    deps_parser = subparsers.add_parser(
        "deps", help="Discover package dependencies from assembly definitions"
    )
    _add_package_json(deps_parser)
    _add_discovery_options(deps_parser)
    deps_parser.add_argument(
        "--out",
        default=None,
        help="Write the JSON report to this file instead of stdout",
    )
    deps_parser.add_argument(
        "--apply",
        action="store_true",
        help="Merge discovered dependencies into package.json",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify that dependency discovery is deterministic"
    )
    _add_package_json(verify_parser)
    _add_discovery_options(verify_parser)

    normalize_parser = subparsers.add_parser(
        "normalize", help="Rewrite package.json with normalized fields"
    )
    _add_package_json(normalize_parser)

    show_parser = subparsers.add_parser("show", help="Print a manifest summary")
    _add_package_json(show_parser)

    return parser


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # basicConfig is a no-op when handlers already exist.
    logging.getLogger().setLevel(level)


def _resolve_project_root(
    package_json: Path, project_root: str | None
) -> tuple[Path, ManifestToolsConfig]:
    """Return the project root and the config that applies to it.

    Without an explicit root, the config is read from the nearest directory
    holding a config file (else the default-marker root) and its
    ``project_root_marker`` then picks the project root.
    """
    if project_root is not None:
        root = Path(project_root).expanduser().resolve()
        return root, _load_discovery_config(root)

    start = package_json.parent
    config_dir = find_config_dir(start) or find_project_root(start)
    config = _load_discovery_config(config_dir or start)
    root = find_project_root(start, config.project_root_marker) or config_dir or start
    return root, config


def _load_discovery_config(project_root: Path) -> ManifestToolsConfig:
    config = load_config(project_root)
    logger.debug("Loaded config for %s: %s", project_root, config)
    return config


def _handle_deps(
    package_json: Path,
    project_root: Path,
    config: ManifestToolsConfig,
    *,
    exclude_unity: bool,
    out: str | None,
    apply: bool,
) -> int:
    include_unity = config.include_unity_packages and not exclude_unity
    result = fetch_from_package_root(
        package_json,
        include_unity,
        config=config,
        project_root=project_root,
    )
    package_label = to_project_relative(package_json, project_root)

    if out is not None:
        write_report(Path(out).expanduser().resolve(), package_label, result)
    else:
        sys.stdout.write(render_report(package_label, result).decode("utf-8"))

    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning}\n")

    if apply and result.dependencies:
        try:
            data = load_manifest(package_json)
            changed = merge_dependencies(data, result.dependencies)
            save_to_file(
                package_json,
                data,
                data.dependency_list(),
                data.keywords,
                data.samples,
            )
        except ManifestError as exc:
            sys.stderr.write(f"{package_json}: {exc}\n")
            return 2
        logger.info("Updated %d dependency entries in %s", changed, package_json)

    return 1 if result.unresolved else 0


def _handle_verify(
    package_json: Path,
    project_root: Path,
    config: ManifestToolsConfig,
    *,
    exclude_unity: bool,
) -> int:
    include_unity = config.include_unity_packages and not exclude_unity
    try:
        result = verify_determinism(
            package_json_path=package_json,
            include_unity_packages=include_unity,
            config=config,
            project_root=project_root,
        )
    except FileNotFoundError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for name in result.mismatches:
            sys.stderr.write(f"mismatch: {name}\n")
        return 1
    return 0


def _handle_normalize(package_json: Path) -> int:
    try:
        data = load_manifest(package_json)
        save_to_file(
            package_json,
            data,
            data.dependency_list(),
            data.keywords,
            data.samples,
        )
    except ManifestError as exc:
        sys.stderr.write(f"{package_json}: {exc}\n")
        return 2
    return 0


def _handle_show(package_json: Path) -> int:
    try:
        data = load_manifest(package_json)
    except ManifestError as exc:
        sys.stderr.write(f"{package_json}: {exc}\n")
        return 2

    lines = [f"{data.name or 'N/A'} {data.version or 'N/A'}"]
    if data.display_name:
        lines.append(f"display name: {data.display_name}")
    if data.unity:
        release = f" ({data.unity_release})" if data.unity_release else ""
        lines.append(f"unity: {data.unity}{release}")
    if data.dependencies:
        lines.append("dependencies:")
        lines.extend(
            f"  {name}: {version}" for name, version in data.dependencies.items()
        )
    if data.keywords:
        lines.append(f"keywords: {', '.join(data.keywords)}")
    sys.stdout.write("\n".join(lines) + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    package_json = Path(args.package_json).expanduser().resolve()

    if args.command == "normalize":
        return _handle_normalize(package_json)

    if args.command == "show":
        return _handle_show(package_json)

    try:
        project_root, config = _resolve_project_root(package_json, args.project_root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if args.command == "deps":
        return _handle_deps(
            package_json,
            project_root,
            config,
            exclude_unity=args.exclude_unity,
            out=args.out,
            apply=args.apply,
        )

    if args.command == "verify":
        return _handle_verify(
            package_json,
            project_root,
            config,
            exclude_unity=args.exclude_unity,
        )

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
