"""Source file discovery from directory structure."""

from __future__ import annotations

from pathlib import Path

from conformcheck.domain.exceptions.source import UnreadableSourceError

# Directories never descended into
DEFAULT_EXCLUDES = frozenset(
    {
        "__pycache__",
        ".venv",
        "venv",
        ".git",
        ".hg",
        ".svn",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".idea",
        ".gradle",
        "node_modules",
        ".tox",
        ".nox",
        "build",
        "dist",
        "target",
        "out",
        ".eggs",
    }
)


def discover_sources(
    root: Path,
    suffixes: frozenset[str],
    *,
    excludes: frozenset[str] = DEFAULT_EXCLUDES,
) -> tuple[Path, ...]:
    """Discover source files under root.

    A file root is returned as-is, whatever its suffix, so the scanner
    can report it if unsupported.

    Args:
        root: Directory to walk, or a single file
        suffixes: Suffixes to collect (with leading dot)
        excludes: Directory names to skip

    Returns:
        Sorted tuple of file paths

    Raises:
        UnreadableSourceError: If root does not exist
    """
    if root.is_file():
        return (root,)
    if not root.is_dir():
        raise UnreadableSourceError(root, "no such file or directory")

    found: list[Path] = []
    for path in root.rglob("*"):
        if path.suffix not in suffixes or not path.is_file():
            continue
        if any(part in excludes for part in path.relative_to(root).parts[:-1]):
            continue
        found.append(path)

    return tuple(sorted(found, key=Path.as_posix))
