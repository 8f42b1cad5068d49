"""
Munchausen - boots a separately packaged application from a directory tree
of package archives.
"""

from .core.bootstrap import Bootstrap
from .core.exceptions import ApplicationFailure, LauncherError

__version__ = "1.0.0"

__all__ = ['Bootstrap', 'ApplicationFailure', 'LauncherError']
