"""File scanning utilities for module descriptors."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

DEFAULT_MODULE_PATTERN = "*.asmdef"


def _should_include_file(
    path: Path,
    directory: Path,
    excluded_dirs: frozenset[str],
    gitignore_matches: Callable[[str], bool] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    # Only directory components count; a file literally named "Library" is fine.
    if any(part in excluded_dirs for part in rel_path.parts[:-1]):
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    rel_path_str = rel_path.as_posix()
    has_excluded_match = exclude_patterns and any(
        fnmatch(rel_path_str, pat) for pat in exclude_patterns
    )
    return not has_excluded_match


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    respect_gitignore: bool,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not respect_gitignore:
        return None

    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_module_files(
    directory: Path,
    *,
    pattern: str = DEFAULT_MODULE_PATTERN,
    excluded_dirs: Iterable[str] = (),
    exclude_patterns: list[str] | None = None,
    respect_gitignore: bool = False,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all module descriptor files below a directory.

    Args:
        directory: Directory to search recursively
        pattern: Filename glob for module descriptors (default "*.asmdef")
        excluded_dirs: Directory names whose subtrees are skipped, matched
            against path components relative to ``directory``
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded
        respect_gitignore: Skip files ignored by ``directory/.gitignore``
        nested_gitignore: Also honor nested .gitignore files (requires
            ``respect_gitignore``)

    Yields:
        Path objects for each descriptor found, sorted lexicographically
        by relative path for deterministic ordering.
    """
    if not directory.is_dir():
        return

    gitignore_matches = _build_gitignore_matcher(
        directory,
        respect_gitignore=respect_gitignore,
        nested_gitignore=nested_gitignore,
    )
    excluded = frozenset(excluded_dirs)

    matched_files = [
        path
        for path in directory.rglob(pattern)
        if _should_include_file(
            path,
            directory,
            excluded,
            gitignore_matches,
            exclude_patterns,
        )
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["DEFAULT_MODULE_PATTERN", "_should_include_file", "find_module_files"]
