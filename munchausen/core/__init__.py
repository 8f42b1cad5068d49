"""
Launch pipeline: package scanning, resolution contexts, entry point lookup
and invocation.
"""

from .bootstrap import Bootstrap
from .entrypoint import EntryPointDescriptor, locate
from .invoker import invoke
from .package_scanner import ARCHIVE_SUFFIXES, scan
from .resolution_context import LAUNCHER_CONTEXT, LauncherContext, ResolutionContext, build_context

__all__ = [
    'Bootstrap',
    'EntryPointDescriptor',
    'locate',
    'invoke',
    'ARCHIVE_SUFFIXES',
    'scan',
    'LAUNCHER_CONTEXT',
    'LauncherContext',
    'ResolutionContext',
    'build_context',
]
