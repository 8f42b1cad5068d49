# munchausen/core/ambient.py
"""
Ambient resolution context
==========================

Python's ``import`` statement cannot be handed a resolution context, so the
context is made ambient instead: each thread has a current context, and a
single finder at the front of ``sys.meta_path`` routes top-level imports to
it.

Contexts handed to a launched application are also registered for the life
of the process. Threads without a current context (worker threads started
by the application, callbacks running after ``main`` returned) resolve
through the launched contexts, most recent first. With neither, the finder
steps aside and the regular import machinery answers as usual.
"""

import importlib.abc
import logging
import sys
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

_state = threading.local()
_install_lock = threading.Lock()
_launched_lock = threading.Lock()
_launched: List[Any] = []


class AmbientFinder(importlib.abc.MetaPathFinder):
    """Meta path finder delegating to the current thread's context."""

    def find_spec(self, fullname, path, target=None):
        context = current()
        if context is not None:
            return context.find_spec(fullname, path, target)

        for launched_context in reversed(launched()):
            spec = launched_context.find_spec(fullname, path, target)
            if spec is not None:
                return spec
        return None

    def __repr__(self):
        return f"{type(self).__name__}()"


_finder = AmbientFinder()


def install() -> None:
    """Put the ambient finder at the front of ``sys.meta_path`` (once)."""
    with _install_lock:
        if _finder not in sys.meta_path:
            sys.meta_path.insert(0, _finder)
            logger.debug("Ambient finder installed on sys.meta_path.")


def current() -> Optional[Any]:
    """Return the calling thread's ambient context, or None."""
    return getattr(_state, "context", None)


def register(context: Any) -> None:
    """Keep ``context`` resolvable from any thread for the rest of the process."""
    install()
    with _launched_lock:
        if context in _launched:
            return
        _launched.append(context)
    logger.debug(f"Registered launched context {context!r}.")


def launched() -> Tuple[Any, ...]:
    """Return the registered contexts, oldest first."""
    with _launched_lock:
        return tuple(_launched)


@contextmanager
def activated(context: Any) -> Iterator[Any]:
    """
    Make ``context`` the ambient context for the duration of the block.

    The previously ambient context (possibly None) is restored on every
    exit path.
    """
    install()
    previous = current()
    _state.context = context
    try:
        yield context
    finally:
        _state.context = previous
