# munchausen/core/entrypoint.py
"""
Entry point lookup and validation.

An entry point identifier names either a module (``pkg.app``), in which case
the module-level ``main`` is used, or a class inside a module
(``pkg.app:Main``), in which case ``Main.main`` is used. The entry point must
be callable with a single argument, the argument list, and is validated in a
fixed order: found, public, static, void. The first failing check wins.
"""

import inspect
import logging
import types
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from .exceptions import (
    MainClassNotFound,
    MainMethodNotAccessible,
    MainMethodNotFound,
    MainMethodNotStatic,
    MainMethodNotVoid,
)

logger = logging.getLogger(__name__)

MAIN_METHOD = "main"

_MISSING = object()

# Return annotations meaning "returns nothing"
_VOID_ANNOTATIONS = (inspect.Signature.empty, None, type(None))
_VOID_ANNOTATION_STRINGS = ("None", "NoReturn", "typing.NoReturn")


@dataclass(frozen=True)
class EntryPointDescriptor:
    """A located and fully validated entry point."""
    name: str
    qualified_name: str
    function: Callable[[List[str]], None]
    context: Any


def locate(name: str, context) -> EntryPointDescriptor:
    """
    Resolve and validate the entry point ``name`` inside ``context``.

    Args:
        name: ``module`` or ``module:Class`` identifier
        context: Resolution context to import the module from

    Returns:
        EntryPointDescriptor for the validated ``main``

    Raises:
        MainClassNotFound: The module or class does not resolve.
        MainMethodNotFound: No ``main`` accepting a single argument.
        MainMethodNotAccessible: ``main`` is private.
        MainMethodNotStatic: ``main`` needs an instance.
        MainMethodNotVoid: ``main`` declares a return value.
    """
    module_name, _, class_name = name.partition(":")
    module, owner = _load_owner(name, module_name, class_name, context)

    found = _find_main(owner)
    if found is None:
        raise MainMethodNotFound(f"Main class '{name}' does not contain main-method.", name)
    attribute, raw, function = found

    if not _is_public(attribute, module, class_name):
        raise MainMethodNotAccessible("Main method is not public.", name)

    if not _is_static(owner, raw):
        raise MainMethodNotStatic("Main method is not static.", name)

    if not _is_void(function):
        raise MainMethodNotVoid("Main method does not return void.", name)

    if class_name:
        qualified_name = f"{module_name}:{class_name}.{attribute}"
    else:
        qualified_name = f"{module_name}.{attribute}"
    logger.debug(f"Entry point resolved: {qualified_name}")

    return EntryPointDescriptor(
        name=name,
        qualified_name=qualified_name,
        function=getattr(owner, attribute),
        context=context,
    )


def _load_owner(name: str, module_name: str, class_name: str, context) -> Tuple[types.ModuleType, Any]:
    if not module_name or not all(part.isidentifier() for part in module_name.split(".")):
        raise MainClassNotFound(f"Main class '{name}' not found.", name)

    try:
        module = context.import_module(module_name)
    except ModuleNotFoundError as e:
        # Only a missing entry module counts; a missing import inside it is the application's own failure
        if not _names_module(e.name, module_name):
            raise
        raise MainClassNotFound(f"Main class '{name}' not found.", name) from e

    if not class_name:
        return module, module

    owner: Any = module
    for part in class_name.split("."):
        owner = getattr(owner, part, None)
        if owner is None:
            break
    if not inspect.isclass(owner):
        raise MainClassNotFound(f"Main class '{name}' not found.", name)
    return module, owner


def _names_module(missing: Optional[str], module_name: str) -> bool:
    if not missing:
        return False
    return module_name == missing or module_name.startswith(missing + ".")


def _candidate_names(owner) -> List[str]:
    names = [MAIN_METHOD, "_" + MAIN_METHOD]
    if inspect.isclass(owner):
        names.append(f"_{owner.__name__.lstrip('_')}__{MAIN_METHOD}")
    return names


def _find_main(owner) -> Optional[Tuple[str, Any, Callable]]:
    """Return (attribute name, raw attribute, underlying function) or None."""
    for attribute in _candidate_names(owner):
        raw = inspect.getattr_static(owner, attribute, _MISSING)
        if raw is _MISSING:
            continue
        function, leading = _unwrap(owner, raw)
        if function is None:
            continue
        if any(_accepts_argument_list(function, count) for count in leading):
            return attribute, raw, function
    return None


def _unwrap(owner, raw) -> Tuple[Optional[Callable], Tuple[int, ...]]:
    """
    Return the underlying callable and the numbers of positional arguments
    that may precede the argument list when it is called.
    """
    if isinstance(raw, staticmethod):
        return raw.__func__, (0,)
    if isinstance(raw, classmethod):
        return raw.__func__, (1,)
    if inspect.isclass(owner) and inspect.isfunction(raw):
        # Instance method, with or without a declared self
        return raw, (1, 0)
    if callable(raw):
        return raw, (0,)
    return None, ()


def _accepts_argument_list(function: Callable, leading: int) -> bool:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); accept it as declared
        return True
    try:
        signature.bind(*([None] * leading), [])
    except TypeError:
        return False
    return True


def _is_public(attribute: str, module: types.ModuleType, class_name: str) -> bool:
    if attribute != MAIN_METHOD:
        return False
    if class_name and any(part.startswith("_") for part in class_name.split(".")):
        return False

    exported = getattr(module, "__all__", None)
    if exported is not None:
        public_name = class_name.split(".")[0] if class_name else MAIN_METHOD
        if public_name not in exported:
            return False
    return True


def _is_static(owner, raw) -> bool:
    if not inspect.isclass(owner):
        return True
    return not inspect.isfunction(raw)


def _is_void(function: Callable) -> bool:
    if (inspect.iscoroutinefunction(function)
            or inspect.isasyncgenfunction(function)
            or inspect.isgeneratorfunction(function)):
        return False

    try:
        annotation = inspect.signature(function).return_annotation
    except (TypeError, ValueError):
        return True

    if isinstance(annotation, str):
        return annotation in _VOID_ANNOTATION_STRINGS
    if annotation in _VOID_ANNOTATIONS:
        return True
    return getattr(annotation, "_name", None) == "NoReturn"
