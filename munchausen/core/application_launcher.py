#!/usr/bin/env python3
"""
Application Launcher - reads the launcher properties and runs the Bootstrap.

The command line belongs entirely to the launched application: every
argument is forwarded unchanged. The launcher's own options are properties
taken from the environment and an optional YAML file (see config.py).

Failures of the launcher are reported as a single ``Error:`` line with exit
status 1. Exceptions raised by the application are re-raised exactly as the
application raised them.
"""

import logging
import sys
from typing import List, Optional, Mapping, TextIO

from .bootstrap import Bootstrap
from .config import SimpleConfigLoader
from .exceptions import ApplicationFailure, ConfigurationError, LauncherError
from .logging_setup import setup_logging
from .package_scanner import ARCHIVE_SUFFIXES

DEFAULT_LIBRARY_DIRECTORY = "."

USAGE = """\
Example usage:
    BOOTSTRAP_MAINCLASS=foo.app munchausen <arguments>
    BOOTSTRAP_MAINCLASS=foo.app:FooMain python -m munchausen <arguments>

Properties (environment variable / key in the BOOTSTRAP_CONFIG YAML file):
    BOOTSTRAP_MAINCLASS     bootstrap.mainclass     The entry point, 'module' or 'module:Class'. (Required.)
    BOOTSTRAP_LIBDIR        bootstrap.libdir        Root-directory for scanned package archives. (Default is current directory.)
    BOOTSTRAP_RESOURCEDIR   bootstrap.resourcedir   Additional directory added to the module path. (Optional.)
    BOOTSTRAP_SUFFIXES      bootstrap.suffixes      Archive file suffixes. (Default is .zip, .whl, .egg and .pyz.)
    BOOTSTRAP_LOG_LEVEL     logging.level           Launcher log level. (Default is WARNING.)
    BOOTSTRAP_LOG_FILE      logging.file            Launcher log file. (Optional.)
"""


class ApplicationLauncher:
    """
    Launches an application by:
    1. Loading the launcher properties
    2. Setting up launcher logging
    3. Registering library and resource directories with a Bootstrap
    4. Running the entry point and translating its outcome
    """

    def __init__(self, argv: List[str], environ: Optional[Mapping[str, str]] = None,
                 stderr: Optional[TextIO] = None):
        """
        Initialize with command line arguments.

        Args:
            argv: Command line arguments (without script name), forwarded as-is
            environ: Environment to read properties from, os.environ by default
            stderr: Stream for diagnostics, sys.stderr by default
        """
        self.argv = list(argv)
        self.environ = environ
        self.stderr = stderr
        self.logger = logging.getLogger(__name__)

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code (0 for success, 1 for a launcher failure)

        Raises:
            BaseException: Whatever the application raised, unwrapped.
        """
        failure: Optional[BaseException] = None
        try:
            config = SimpleConfigLoader.from_environment(self.environ)
            setup_logging(config, stream=self._stderr())

            main_class = config.get("bootstrap.mainclass")
            if not main_class:
                self._print("Error: main class not specified.\n")
                self._print_usage_instructions()
                return 1

            bootstrap = self._create_bootstrap(config)
            bootstrap.run(str(main_class), self.argv)

        except (ConfigurationError, LauncherError) as e:
            self.logger.debug(f"Launch failed: {type(e).__name__}: {e}")
            self._print(f"Error: {e}")
            return 1
        except ApplicationFailure as e:
            failure = e.target

        if failure is not None:
            # Raised outside the handler so no launcher exception is chained to it
            raise failure
        return 0

    def _create_bootstrap(self, config: SimpleConfigLoader) -> Bootstrap:
        suffixes = config.get_list("bootstrap.suffixes", list(ARCHIVE_SUFFIXES))
        bootstrap = Bootstrap(suffixes=suffixes)

        for directory in config.get_list("bootstrap.libdir", [DEFAULT_LIBRARY_DIRECTORY]):
            bootstrap.add_library_directory(directory)
        for directory in config.get_list("bootstrap.resourcedir"):
            bootstrap.add_resource_directory(directory)
        return bootstrap

    def _print_usage_instructions(self) -> None:
        self._print(USAGE)

    def _print(self, message: str) -> None:
        print(message, file=self._stderr())

    def _stderr(self) -> TextIO:
        return self.stderr if self.stderr is not None else sys.stderr


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    return ApplicationLauncher(argv).run()
