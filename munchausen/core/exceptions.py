# munchausen/core/exceptions.py

class MunchausenError(Exception):
    """Base class for exceptions in this application."""
    pass

class ConfigurationError(MunchausenError):
    """Exception raised for errors in the configuration."""
    pass

class LauncherError(MunchausenError):
    """
    Exception raised by the launch pipeline itself.

    Everything below this class is reported as a single ``Error:`` line by
    the application launcher and never re-raised.
    """
    pass

class InvalidDirectory(LauncherError):
    """Exception raised when a null directory reference is registered."""
    pass

class ScanFailure(LauncherError):
    """Exception raised when a library directory cannot be read."""
    pass

class PathConversionFailure(LauncherError):
    """Exception raised when a path cannot be turned into a location."""
    pass

class InvocationSetupFailure(LauncherError):
    """Exception raised when the entry point call cannot be delivered."""
    pass

class EntryPointError(LauncherError):
    """Base class for entry point validation failures."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name

class MainClassNotFound(EntryPointError):
    pass

class MainMethodNotFound(EntryPointError):
    pass

class MainMethodNotAccessible(EntryPointError):
    pass

class MainMethodNotStatic(EntryPointError):
    pass

class MainMethodNotVoid(EntryPointError):
    pass


class ApplicationFailure(Exception):
    """
    Wraps an exception raised by the launched application.

    Not a MunchausenError: the launcher unwraps ``target`` and
    re-raises it unchanged instead of reporting it.
    """

    def __init__(self, target: BaseException):
        super().__init__(f"{type(target).__name__}: {target}")
        self.target = target
