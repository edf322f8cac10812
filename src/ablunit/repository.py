"""Repository root detection and ABL source enumeration."""

from pathlib import Path
from typing import Iterator

from ablunit.config import DiscoveryConfig


class RepositoryNotFoundError(Exception):
    """Raised when no repository root can be found above a path."""


def find_repository_root(start: Path) -> Path:
    """Walk up from ``start`` to the first directory containing ``.git``.

    Raises:
        RepositoryNotFoundError: If no such directory exists
    """
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate

    raise RepositoryNotFoundError(f"Not a git repository (or any parent): {start}")


def find_source_files(root: Path, config: DiscoveryConfig | None = None) -> Iterator[Path]:
    """Yield class and program files below ``root`` in sorted order.

    Directories named in ``config.exclude_dirs`` are not descended into, and
    each real directory is walked once even when symlinks lead back to it.
    """
    config = config or DiscoveryConfig()
    extensions = {ext.lower() for ext in config.extensions}
    exclude_dirs = set(config.exclude_dirs)
    visited: set[Path] = set()

    def _walk(current: Path) -> Iterator[Path]:
        real_path = current.resolve()
        if real_path in visited:
            return
        visited.add(real_path)

        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name in exclude_dirs:
                    continue
                yield from _walk(entry)
            elif entry.is_file() and entry.suffix.lower() in extensions:
                yield entry

    yield from _walk(root)


def get_relative_path(file_path: Path, root: Path) -> str:
    """Return ``file_path`` relative to ``root`` with forward slashes."""
    try:
        return file_path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return file_path.as_posix()
