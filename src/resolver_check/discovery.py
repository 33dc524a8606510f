"""File discovery shared by the schema and source extractors."""

import os
from collections.abc import Iterable
from pathlib import Path

from resolver_check import log
from resolver_check.errors import ConfigurationError


def require_directory(path: Path, error_class: type[ConfigurationError], label: str) -> None:
    """Raise error_class unless path is an existing directory."""
    if not path.exists():
        raise error_class(f"{label} directory does not exist", path)
    if not path.is_dir():
        raise error_class(f"{label} path is not a directory", path)


def _log_traversal_error(error: OSError) -> None:
    log.warning(f"Skipping unreadable entry {error.filename}: {error.strerror}")


def find_files(root: Path, suffixes: Iterable[str]) -> list[Path]:
    """Recursively collect files under root whose suffix is one of suffixes.

    Directories that cannot be listed are logged and skipped. The result is
    sorted so that "first wins" decisions downstream do not depend on the
    file system's enumeration order.

    Args:
        root: Directory to walk
        suffixes: Lower-case suffixes including the leading dot, e.g. ".kt"

    Returns:
        Sorted list of matching file paths
    """
    wanted = {suffix.lower() for suffix in suffixes}
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_traversal_error):
        dirnames.sort()
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.suffix.lower() in wanted and path.is_file():
                found.append(path)

    found.sort()
    log.debug(f"Discovered {len(found)} file(s) with suffix {sorted(wanted)} under {root}")
    return found
