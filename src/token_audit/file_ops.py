"""
File operations for token-audit.

Enumerates Rust source files under a root and reads them as text.
"""

import os
from collections.abc import Generator
from pathlib import Path

from .exceptions import FileAccessError, InvalidPathError
from .logging_config import get_logger

logger = get_logger(__name__)

SOURCE_EXTENSION = ".rs"
BUILD_DIR = "target"


def validate_root(root_dir: Path) -> Path:
    """
    Check that ``root_dir`` is a readable directory.

    Returns:
        The resolved directory

    Raises:
        InvalidPathError: If the path is missing, not a directory or unreadable
    """
    try:
        resolved = Path(root_dir).resolve()
    except (OSError, RuntimeError) as e:
        raise InvalidPathError(root_dir, f"Cannot resolve path: {e}")

    if not resolved.exists():
        raise InvalidPathError(resolved, "Directory does not exist")
    if not resolved.is_dir():
        raise InvalidPathError(resolved, "Path is not a directory")
    if not os.access(resolved, os.R_OK):
        raise InvalidPathError(resolved, "Directory is not readable")
    return resolved


def iter_source_files(
    root_dir: Path,
    extension: str = SOURCE_EXTENSION,
    build_dir: str = BUILD_DIR,
) -> Generator[Path, None, None]:
    """
    Lazily yield source files below ``root_dir``.

    Directories named ``build_dir`` are pruned, so no yielded path has a
    build-output component below the root. Entries are visited in sorted
    order. Directories that cannot be listed are skipped.

    Args:
        root_dir: Directory to scan
        extension: File suffix to keep, including the dot
        build_dir: Directory name never descended into

    Yields:
        Paths of matching files (rooted at ``root_dir``)
    """
    root_dir = Path(root_dir)

    def _on_error(err: OSError) -> None:
        logger.debug("Skipping unreadable entry %s: %s", err.filename, err.strerror)

    for dirpath, dirnames, filenames in os.walk(root_dir, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if d != build_dir)
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.suffix == extension:
                yield path


def read_source(filepath: Path, encoding: str = "utf-8") -> str:
    """
    Read a whole source file.

    Args:
        filepath: File to read
        encoding: Text encoding (decoding is strict)

    Returns:
        File contents as string

    Raises:
        FileAccessError: If the file cannot be opened or decoded
    """
    try:
        with open(filepath, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileAccessError(filepath, e.strerror or str(e))

    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"invalid {encoding} at byte {e.start}")


def relative_posix(path: Path, root_dir: Path) -> str:
    """Path relative to ``root_dir`` with forward slashes."""
    try:
        return Path(path).relative_to(root_dir).as_posix()
    except ValueError:
        return Path(path).as_posix()
