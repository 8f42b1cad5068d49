# munchausen/core/package_scanner.py
import logging
import os
from pathlib import Path
from typing import Iterable, List, Set

from .exceptions import ScanFailure

logger = logging.getLogger(__name__)

# Zip-format archives that zipimport can load modules from
ARCHIVE_SUFFIXES = (".zip", ".whl", ".egg", ".pyz")


def scan(root: Path, suffixes: Iterable[str] = ARCHIVE_SUFFIXES) -> List[Path]:
    """
    Collect every package archive below ``root``, depth-first.

    Entries are visited in the order the filesystem returns them; the
    result is not sorted. A root that is not an existing directory
    contributes nothing.

    Args:
        root: Library root directory
        suffixes: File name endings recognized as package archives

    Returns:
        List of archive paths

    Raises:
        ScanFailure: If a directory below the root cannot be read.
    """
    root = Path(root)
    try:
        is_directory = root.is_dir()
    except OSError as e:
        raise ScanFailure(f"Cannot read library directory '{root}': {e}") from e
    if not is_directory:
        logger.debug(f"Library directory '{root}' does not exist, skipping.")
        return []

    archives: List[Path] = []
    _add_archives(archives, root, tuple(suffixes), set())
    logger.debug(f"Found {len(archives)} package(s) under '{root}'.")
    return archives


def _add_archives(archives: List[Path], directory: Path, suffixes: tuple, visited: Set[str]) -> None:
    real = os.path.realpath(directory)
    if real in visited:
        return
    visited.add(real)

    try:
        with os.scandir(directory) as entries:
            children = list(entries)
    except OSError as e:
        raise ScanFailure(f"Cannot read library directory '{directory}': {e}") from e

    for child in children:
        try:
            if child.is_dir():
                _add_archives(archives, Path(child.path), suffixes, visited)
            elif child.is_file() and child.name.endswith(suffixes):
                archives.append(Path(child.path))
        except OSError as e:
            raise ScanFailure(f"Cannot read library directory '{directory}': {e}") from e
