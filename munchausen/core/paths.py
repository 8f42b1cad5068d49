# munchausen/core/paths.py
"""
Path helpers shared by the scanner and the resolution context builder.
"""

import os
from pathlib import Path
from typing import Any

from .exceptions import InvalidDirectory, PathConversionFailure


def resolve_directory(directory: Any) -> Path:
    """
    Validate a directory reference at registration time.

    Existence is not checked here; a missing directory is simply skipped
    when it is scanned.

    Raises:
        InvalidDirectory: If ``directory`` is None or not path-like.
    """
    if directory is None:
        raise InvalidDirectory("null directory")
    try:
        return Path(directory)
    except TypeError as e:
        raise InvalidDirectory(f"not a directory reference: {directory!r}") from e


def to_location(path: Any) -> str:
    """
    Convert a path to the normalized absolute string the import machinery
    searches on.

    Raises:
        PathConversionFailure: If the value is not a usable filesystem path.
    """
    try:
        raw = os.fspath(path)
    except TypeError as e:
        raise PathConversionFailure(f"Conversion of path to location failed: {path!r}") from e
    if isinstance(raw, bytes):
        raw = os.fsdecode(raw)
    if not raw or "\x00" in raw:
        raise PathConversionFailure(f"Conversion of path to location failed: {path!r}")
    return os.path.normpath(os.path.abspath(raw))
