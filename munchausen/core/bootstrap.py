"""
Bootstrap System for Munchausen
===============================

The Bootstrap boots a separately packaged application from a directory tree
of package archives, so the application never has to hardcode its own
module layout.

Launch pipeline:
- Registered library directories are scanned for archives
- Resource directories and archives form an isolated resolution context,
  chained to the launcher's own import machinery
- The entry point is located and validated inside that context
- The entry point is invoked with the argument list, with the context
  ambient for the duration of the call

Failures of the pipeline itself are LauncherError subclasses. Anything the
application raises comes back wrapped in ApplicationFailure.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .entrypoint import locate
from .invoker import invoke
from .package_scanner import ARCHIVE_SUFFIXES
from .paths import resolve_directory
from .resolution_context import ResolutionContext, build_context

logger = logging.getLogger(__name__)


class Bootstrap:
    """
    Collects library and resource directories and launches an entry point
    from them.

    A Bootstrap can be run more than once; every run builds a fresh
    resolution context.
    """

    def __init__(self, suffixes: Iterable[str] = ARCHIVE_SUFFIXES, parent: Optional[Any] = None):
        """
        Args:
            suffixes: File name endings recognized as package archives
            parent: Fallback context for the launched application, the
                launcher's own import machinery by default
        """
        self.library_directories: List[Path] = []
        self.resource_directories: List[Path] = []
        self.suffixes = tuple(suffixes)
        self.parent = parent

    def add_library_directory(self, directory) -> None:
        """Register a directory to scan for package archives."""
        self.library_directories.append(resolve_directory(directory))

    def add_resource_directory(self, directory) -> None:
        """Register a directory to add to the context without scanning."""
        self.resource_directories.append(resolve_directory(directory))

    def create_context(self) -> ResolutionContext:
        return build_context(
            self.library_directories,
            self.resource_directories,
            parent=self.parent,
            suffixes=self.suffixes,
        )

    def run(self, main_name: str, args: Iterable[str]) -> None:
        """
        Launch ``main_name`` with ``args``.

        Args:
            main_name: Entry point identifier, ``module`` or ``module:Class``
            args: Argument list forwarded to the entry point

        Raises:
            ValueError: If ``main_name`` is missing.
            LauncherError: If the launch pipeline fails.
            ApplicationFailure: If the entry point raised.
        """
        if not main_name:
            raise ValueError("null main_name")

        logger.info(f"Launching '{main_name}'")
        logger.debug(f"Library directories: {[str(d) for d in self.library_directories]}")
        logger.debug(f"Resource directories: {[str(d) for d in self.resource_directories]}")

        context = self.create_context()
        descriptor = locate(main_name, context)
        invoke(descriptor, args)
