"""Walking cause chains.

Two accessors link one exception to the next:

- the legacy ``cause()`` method, implemented by this library's wrappers and
  by any exception that chooses to expose it;
- the native ``__cause__`` link that ``raise X from Y`` sets.

``cause`` follows only the legacy accessor. ``unwrap`` prefers the legacy
accessor and falls back to ``__cause__``; ``is_``, ``as_``, ``iter_chain``
and ``stack_trace`` all step with ``unwrap``. Links are probed for these
capabilities; no walker relies on the link's class.

Chains are assumed acyclic. A cycle built by hand through ``__cause__``
makes every walker here loop forever.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, TypeVar, runtime_checkable

from stackerr.exceptions import InvalidTargetError
from stackerr.models.frame import StackTrace

E = TypeVar("E")


@runtime_checkable
class Causer(Protocol):
    """An exception exposing the legacy ``cause()`` accessor."""

    def cause(self) -> BaseException | None: ...


@runtime_checkable
class StackTracer(Protocol):
    """An exception carrying a captured stack trace."""

    def stack_trace(self) -> StackTrace | None: ...


def _legacy_cause(err: object) -> tuple[bool, BaseException | None]:
    """Probe for the legacy accessor.

    Returns:
        (exposed, next_link)
    """
    accessor = getattr(err, "cause", None)
    if not callable(accessor):
        return False, None
    return True, accessor()


def cause(err: BaseException | None) -> BaseException | None:
    """Return the innermost link reachable through ``cause()`` accessors.

    Stops at the first link that does not expose ``cause()`` and returns it.
    ``__cause__`` is not consulted.

    Args:
        err: Exception to start from

    Returns:
        The underlying cause; ``err`` itself when it has no accessor, or None
        for None

    Example:
        err = wrap(wrap(new("x"), "y"), "z")
        assert str(cause(err)) == "x"
    """
    while err is not None:
        exposed, next_link = _legacy_cause(err)
        if not exposed:
            break
        err = next_link
    return err


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the next link of the chain, or None.

    The legacy ``cause()`` accessor wins when present; otherwise ``__cause__``.

    Args:
        err: Exception to unwrap

    Returns:
        The directly wrapped exception, or None at the end of the chain
    """
    if err is None:
        return None
    exposed, next_link = _legacy_cause(err)
    if exposed:
        return next_link
    native = getattr(err, "__cause__", None)
    if isinstance(native, BaseException):
        return native
    return None


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and every link below it, outermost first.

    Args:
        err: Exception to start from

    Yields:
        Each link reached through :func:`unwrap`
    """
    while err is not None:
        yield err
        err = unwrap(err)


def is_(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether any link of the chain is ``target``.

    A link matches when it is ``target`` or compares equal to it.

    Args:
        err: Exception whose chain is searched
        target: Sentinel or value to look for

    Returns:
        True on the first matching link
    """
    if target is None:
        return err is None
    for link in iter_chain(err):
        if link is target or link == target:
            return True
    return False


def _check_target(target: Any) -> None:
    if not isinstance(target, type):
        raise InvalidTargetError(
            f"as_ target must be an exception type, got {type(target).__name__}", target
        )
    if issubclass(target, BaseException):
        return
    if getattr(target, "_is_runtime_protocol", False):
        return
    raise InvalidTargetError(
        f"as_ target must be an exception type or runtime-checkable protocol, got {target!r}",
        target,
    )


def as_(err: BaseException | None, target: type[E]) -> E | None:
    """Return the first link of the chain that is an instance of ``target``.

    Args:
        err: Exception whose chain is searched
        target: Exception class (or runtime-checkable protocol) to match

    Returns:
        The matching link itself, or None when no link matches

    Raises:
        InvalidTargetError: If ``target`` is not a usable type
    """
    _check_target(target)
    for link in iter_chain(err):
        if isinstance(link, target):
            return link
    return None


def stack_trace(err: BaseException | None) -> StackTrace | None:
    """Return the first stack trace found walking the chain from ``err`` inward.

    Args:
        err: Exception to start from

    Returns:
        The nearest captured StackTrace, or None if no link carries one
    """
    for link in iter_chain(err):
        accessor = getattr(link, "stack_trace", None)
        if not callable(accessor):
            continue
        stack = accessor()
        if stack is not None:
            return stack
    return None
