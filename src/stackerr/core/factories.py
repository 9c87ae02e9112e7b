"""Constructors for leaf errors and wrappers.

Every stack captured here starts at the caller of the factory. Every
wrapping factory returns None when given None, so annotating "no error" is
a no-op:

    return wrap(maybe_err, "loading config")
"""

from __future__ import annotations

from typing import Any

from stackerr.models.errors import Fundamental, WithMessage, WithStack
from stackerr.models.frame import StackTrace


def _interpolate(fmt: str, args: tuple[Any, ...]) -> str:
    # without args the format string is used verbatim, so a literal "%" is safe
    if not args:
        return fmt
    return fmt % args


def new(message: str) -> Fundamental:
    """Create a leaf error with a stack trace.

    Args:
        message: Error message

    Returns:
        A Fundamental whose str() is ``message``
    """
    return Fundamental(message, stack=StackTrace.capture(skip=1))


def errorf(fmt: str, *args: Any) -> Fundamental:
    """Create a leaf error from a ``%``-style format string.

    Args:
        fmt: Format string
        *args: Values interpolated into ``fmt``

    Returns:
        A Fundamental holding the rendered message
    """
    return Fundamental(_interpolate(fmt, args), stack=StackTrace.capture(skip=1))


def with_stack(err: BaseException | None) -> WithStack | None:
    """Annotate ``err`` with the stack at this call site.

    Returns:
        The wrapper, or None when ``err`` is None
    """
    if err is None:
        return None
    return WithStack(err, stack=StackTrace.capture(skip=1))


def wrap(err: BaseException | None, message: str) -> WithMessage | None:
    """Annotate ``err`` with a message and the stack at this call site.

    Produces ``WithMessage(WithStack(err), message)``.

    Args:
        err: Exception to wrap
        message: Message prefix

    Returns:
        The wrapper, or None when ``err`` is None
    """
    if err is None:
        return None
    stacked = WithStack(err, stack=StackTrace.capture(skip=1))
    return WithMessage(stacked, message)


def wrapf(err: BaseException | None, fmt: str, *args: Any) -> WithMessage | None:
    """Like :func:`wrap`, with a ``%``-style formatted message."""
    if err is None:
        return None
    stacked = WithStack(err, stack=StackTrace.capture(skip=1))
    return WithMessage(stacked, _interpolate(fmt, args))


def with_message(err: BaseException | None, message: str) -> WithMessage | None:
    """Annotate ``err`` with a message prefix, without capturing a stack.

    Returns:
        The wrapper, or None when ``err`` is None
    """
    if err is None:
        return None
    return WithMessage(err, message)


def with_messagef(err: BaseException | None, fmt: str, *args: Any) -> WithMessage | None:
    """Like :func:`with_message`, with a ``%``-style formatted message."""
    if err is None:
        return None
    return WithMessage(err, _interpolate(fmt, args))
