"""Chain links: the leaf error and the two wrapper kinds.

- ``Fundamental``: a message plus the stack captured where it was created.
- ``WithStack``: an existing exception plus a stack captured where it was
  wrapped. Adds no text.
- ``WithMessage``: an existing exception plus a message prefix. Owns no stack.

Wrappers expose the wrapped exception both through the ``cause()`` accessor
and through the native ``__cause__`` link, so the standard traceback printer
and any ``__cause__``-walking code see the same chain.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod

from stackerr.models.frame import RenderMode, StackTrace


class _Link(Exception, metaclass=ABCMeta):
    """Formatting shared by every link type."""

    @abstractmethod
    def render(self, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
        """Render the link in the given mode."""

    def _render_flat(self, mode: RenderMode) -> str:
        if mode == RenderMode.QUOTED:
            return repr(str(self))
        return str(self)

    def __format__(self, spec: str) -> str:
        return self.render(spec)


class Fundamental(_Link):
    """A leaf error: a message and the stack where it was created.

    Attributes:
        message: The message, returned unchanged by ``str()``
    """

    def __init__(self, message: str, *, stack: StackTrace | None = None) -> None:
        super().__init__(message)
        self.message = message
        self._stack = stack if stack is not None else StackTrace.capture(skip=1)

    def __str__(self) -> str:
        return self.message

    def stack_trace(self) -> StackTrace:
        """Return the stack captured at creation."""
        return self._stack

    def render(self, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
        """Render the error; EXTENDED appends the captured frames."""
        mode = RenderMode.parse(mode)
        if mode == RenderMode.EXTENDED:
            return self.message + self._stack.render(RenderMode.EXTENDED)
        return self._render_flat(mode)


class WithStack(_Link):
    """Annotates an exception with the stack where it was wrapped."""

    def __init__(self, cause: BaseException, *, stack: StackTrace | None = None) -> None:
        super().__init__(cause)
        self._cause = cause
        self._stack = stack if stack is not None else StackTrace.capture(skip=1)
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self._cause)

    def cause(self) -> BaseException:
        """Return the wrapped exception."""
        return self._cause

    def stack_trace(self) -> StackTrace:
        """Return the stack captured at the wrapping site."""
        return self._stack

    def render(self, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
        """Render the error; EXTENDED shows the cause, then this wrapper's frames."""
        mode = RenderMode.parse(mode)
        if mode == RenderMode.EXTENDED:
            return render_error(self._cause, mode) + self._stack.render(RenderMode.EXTENDED)
        return self._render_flat(mode)


class WithMessage(_Link):
    """Annotates an exception with a message prefix.

    ``str()`` is ``"<message>: <str(cause)>"``.

    Attributes:
        message: The prefix this wrapper adds
    """

    def __init__(self, cause: BaseException, message: str) -> None:
        super().__init__(cause, message)
        self._cause = cause
        self.message = message
        self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.message}: {self._cause}"

    def cause(self) -> BaseException:
        """Return the wrapped exception."""
        return self._cause

    def stack_trace(self) -> StackTrace | None:
        """Return the nearest stack further down the chain, if any."""
        from stackerr.core.chain import stack_trace

        return stack_trace(self._cause)

    def render(self, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
        """Render the error; EXTENDED shows the cause, then this message on its own line."""
        mode = RenderMode.parse(mode)
        if mode == RenderMode.EXTENDED:
            return f"{render_error(self._cause, mode)}\n{self.message}"
        return self._render_flat(mode)


def render_error(err: BaseException | None, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
    """Render any exception in the given mode.

    Links from this library render themselves; other exceptions render as
    ``str(err)`` (quoted for QUOTED).

    Args:
        err: Exception to render
        mode: Rendering mode or format spec

    Returns:
        Rendered text
    """
    mode = RenderMode.parse(mode)
    if isinstance(err, _Link):
        return err.render(mode)
    if mode == RenderMode.QUOTED:
        return repr(str(err))
    return str(err)
