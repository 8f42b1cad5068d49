# munchausen/core/resolution_context.py
import importlib
import logging
import sys
from importlib.machinery import PathFinder
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from . import ambient
from .package_scanner import ARCHIVE_SUFFIXES, scan
from .paths import to_location

logger = logging.getLogger(__name__)


class LauncherContext:
    """
    The launcher's own import machinery.

    Root of every context chain: it contributes no locations of its own and
    resolves names exactly as the interpreter running the launcher would.
    """

    parent = None
    locations: Tuple[str, ...] = ()

    def find_spec(self, fullname, path=None, target=None):
        return None

    def import_module(self, name: str):
        return importlib.import_module(name)

    def __repr__(self):
        return "LauncherContext()"


LAUNCHER_CONTEXT = LauncherContext()


class ResolutionContext:
    """
    Ordered, immutable set of module locations with a parent fallback.

    Lookup is local first: top-level module names are searched on this
    context's locations, then on the parent chain, and finally on the
    launcher's own import machinery. Submodules are found through their
    package's ``__path__`` like any other import.
    """

    def __init__(self, locations: Iterable[str],
                 parent: Optional[Union["ResolutionContext", LauncherContext]] = None):
        self._locations: Tuple[str, ...] = tuple(locations)
        self._parent = parent if parent is not None else LAUNCHER_CONTEXT
        logger.debug(f"ResolutionContext created with {len(self._locations)} location(s){' (with parent)' if parent else ''}.")

    @property
    def locations(self) -> Tuple[str, ...]:
        return self._locations

    @property
    def parent(self):
        return self._parent

    def find_spec(self, fullname, path=None, target=None):
        """
        Find a top-level module on this context, then on the parent chain.

        Only names not yet in ``sys.modules`` reach a finder: a package the
        launcher already imported (``yaml``, for one) is shared with the
        application even when an archive on this context ships its own copy.
        """
        if path is not None:
            return None

        spec = PathFinder.find_spec(fullname, list(self._locations), target)
        if spec is not None:
            logger.debug(f"Resolved '{fullname}' locally from {spec.origin}.")
            return spec

        return self._parent.find_spec(fullname, None, target)

    def import_module(self, name: str):
        """Import ``name`` with this context active."""
        top_level = name.partition(".")[0]
        if top_level in sys.modules:
            logger.debug(f"'{top_level}' is already imported; served from sys.modules, not this context.")
        with ambient.activated(self):
            return importlib.import_module(name)

    def __repr__(self):
        return f"ResolutionContext(locations={list(self._locations)!r}, parent={self._parent!r})"


def build_context(library_roots: Sequence[Path],
                  resource_roots: Sequence[Path],
                  parent: Optional[Union[ResolutionContext, LauncherContext]] = None,
                  suffixes: Iterable[str] = ARCHIVE_SUFFIXES) -> ResolutionContext:
    """
    Build the resolution context for one launch.

    Locations are the resource roots in the order supplied, followed by the
    archives of each library root in registration order. The two groups are
    concatenated as-is; a path reachable both ways appears twice.

    Args:
        library_roots: Directories scanned for package archives
        resource_roots: Directories added without scanning
        parent: Fallback context, the launcher's own by default
        suffixes: File name endings recognized as package archives

    Returns:
        The new ResolutionContext

    Raises:
        ScanFailure: If a library directory cannot be read.
        PathConversionFailure: If a path cannot be turned into a location.
    """
    suffixes = tuple(suffixes)
    paths = list(resource_roots)
    for root in library_roots:
        paths.extend(scan(root, suffixes))

    locations = [to_location(path) for path in paths]
    for location in locations:
        logger.debug(f"  location: {location}")

    return ResolutionContext(locations, parent)
