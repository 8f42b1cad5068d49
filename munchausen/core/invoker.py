# munchausen/core/invoker.py
import inspect
import logging
from typing import Iterable

from . import ambient
from .entrypoint import EntryPointDescriptor
from .exceptions import ApplicationFailure, InvocationSetupFailure

logger = logging.getLogger(__name__)


def invoke(descriptor: EntryPointDescriptor, args: Iterable[str]) -> None:
    """
    Call the entry point with the argument list.

    The descriptor's resolution context is the ambient context for the
    duration of the call; the previous one is restored afterwards, whatever
    the outcome. The context is also registered as launched, so threads the
    application starts and code running after the call still resolve
    through it.

    Args:
        descriptor: Validated entry point
        args: Arguments forwarded to the entry point, in order

    Raises:
        InvocationSetupFailure: If the call cannot be delivered.
        ApplicationFailure: Wrapping anything the entry point raised.
    """
    argv = list(args)
    function = descriptor.function

    with ambient.activated(descriptor.context):
        _check_deliverable(descriptor, argv)
        ambient.register(descriptor.context)

        logger.info(f"Invoking {descriptor.qualified_name} with {len(argv)} argument(s)")
        try:
            function(argv)
        except BaseException as e:
            raise ApplicationFailure(e) from e

    logger.info(f"{descriptor.qualified_name} returned normally")


def _check_deliverable(descriptor: EntryPointDescriptor, argv) -> None:
    function = descriptor.function
    if not callable(function):
        raise InvocationSetupFailure(f"Main method of '{descriptor.name}' is not accessible.")
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return
    try:
        signature.bind(argv)
    except TypeError as e:
        raise InvocationSetupFailure(f"Main method of '{descriptor.name}' is not accessible: {e}") from e
