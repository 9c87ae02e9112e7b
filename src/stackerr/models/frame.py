"""Data models for captured call stacks.

A :class:`Frame` is one captured call site, stored as an opaque pc into the
process-wide symbol table. A :class:`StackTrace` is an immutable sequence of
frames, innermost call site first. Both resolve lazily: nothing about the
function, file or line is looked up until something is rendered.
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePath
from typing import SupportsIndex, overload

from stackerr.config import get_config
from stackerr.utils import symbols
from stackerr.utils.symbols import UNKNOWN_NAME, Symbol


class RenderMode(StrEnum):
    """Rendering modes shared by frames, stack traces and errors.

    Values are the format-spec strings accepted by ``format()``, so
    ``f"{frame:+v}"`` and ``frame.render(RenderMode.EXTENDED)`` are the same.
    """

    SHORT = "s"  # file base name
    LONG = "+s"  # qualified function, newline, tab, full path
    LINE = "d"  # line number
    NAME = "n"  # bare function name
    DEFAULT = "v"  # file:line
    EXTENDED = "+v"  # qualified function, newline, tab, full path:line
    DEBUG = "#v"  # construction-style listing
    QUOTED = "q"  # quoted message (errors only)

    @classmethod
    def parse(cls, spec: RenderMode | str) -> RenderMode:
        """Convert a format spec into a mode.

        Args:
            spec: A RenderMode or one of its string values; "" means DEFAULT

        Returns:
            The matching RenderMode

        Raises:
            ValueError: If the spec is not a known mode
        """
        if isinstance(spec, RenderMode):
            return spec
        if spec == "":
            return cls.DEFAULT
        try:
            return cls(spec)
        except ValueError:
            raise ValueError(f"Unknown render mode: {spec!r}") from None


def funcname(name: str) -> str:
    """Strip the module path from a fully qualified function name.

    Everything after the last ``.`` that is not inside parentheses or angle
    brackets is kept, so a parenthesized receiver prefix survives:

        funcname("pkg.path.Type.Method") == "Method"
        funcname("main.(*R).Write") == "(*R).Write"
        funcname("mod.outer.<locals>.inner") == "inner"

    Frame rendering does not use this; NAME mode shows the code object's
    ``co_qualname``. Use it for stripping dotted names from other sources.
    """
    depth = 0
    for i in range(len(name) - 1, -1, -1):
        ch = name[i]
        if ch in ")>":
            depth += 1
        elif ch in "(<":
            depth -= 1
        elif ch == "." and depth == 0:
            # keep "(*R)." prefixes attached to the method they qualify
            if i > 0 and name[i - 1] == ")":
                start = name.rfind("(", 0, i)
                dot = name.rfind(".", 0, start) if start != -1 else -1
                return name[dot + 1 :]
            return name[i + 1 :]
    return name


@dataclass(frozen=True)
class Frame:
    """A single captured call site.

    ``pc`` is a key into the process-wide symbol table; ``Frame()`` (pc 0)
    is the unknown location and renders as fixed placeholder text.
    """

    pc: int = 0

    @classmethod
    def capture(cls, skip: int = 0) -> Frame:
        """Capture the caller's location.

        Args:
            skip: Extra frames to skip above the caller of ``capture``

        Returns:
            The captured Frame, or the unknown Frame if the stack is too shallow
        """
        frame = inspect.currentframe()
        try:
            frame = frame.f_back if frame is not None else None
            for _ in range(skip):
                if frame is None:
                    break
                frame = frame.f_back
            if frame is None:
                return cls()
            return cls(symbols.register(frame))
        finally:
            del frame

    def symbol(self) -> Symbol:
        """Resolve this frame through the symbol table."""
        return symbols.resolve(self.pc)

    @property
    def is_unknown(self) -> bool:
        """True when this frame does not resolve to a known location."""
        return self.symbol().is_unknown

    def render(self, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
        """Render the frame as text.

        Args:
            mode: Rendering mode or format spec

        Returns:
            The rendered frame; unknown frames render placeholder text
        """
        mode = RenderMode.parse(mode)
        sym = self.symbol()

        if sym.is_unknown:
            if mode in (RenderMode.SHORT, RenderMode.LONG, RenderMode.NAME):
                # no file or function to show, so both halves collapse
                return UNKNOWN_NAME
            if mode == RenderMode.LINE:
                return "0"
            return f"{UNKNOWN_NAME}:0"

        if mode == RenderMode.SHORT:
            return PurePath(sym.file).name
        if mode == RenderMode.LONG:
            return f"{sym.name}\n\t{sym.file}"
        if mode == RenderMode.LINE:
            return str(sym.line)
        if mode == RenderMode.NAME:
            return sym.qualname
        if mode == RenderMode.EXTENDED:
            return f"{sym.name}\n\t{sym.file}:{sym.line}"
        return f"{PurePath(sym.file).name}:{sym.line}"

    def to_text(self) -> str:
        """Serialize as ``"qualified.function /full/path:line"``, or ``"unknown"``."""
        sym = self.symbol()
        if sym.is_unknown:
            return UNKNOWN_NAME
        return f"{sym.name} {sym.file}:{sym.line}"

    def to_json(self) -> str:
        """Serialize as a JSON string holding :meth:`to_text`."""
        return json.dumps(self.to_text())

    def __format__(self, spec: str) -> str:
        return self.render(spec)

    def __str__(self) -> str:
        return self.render(RenderMode.DEFAULT)


class StackTrace(tuple[Frame, ...]):
    """An immutable sequence of frames, innermost call site first.

    Slicing a StackTrace yields a StackTrace. ``StackTrace()`` is an empty
    but present trace; an absent trace is ``None`` (see :func:`render_stack`).

    Example:
        st = StackTrace.capture()
        print(f"{st[:2]:+v}")
    """

    def __new__(cls, frames: Iterable[Frame] = ()) -> StackTrace:
        return super().__new__(cls, frames)

    @classmethod
    def capture(cls, skip: int = 0, depth: int | None = None) -> StackTrace:
        """Capture the live call stack.

        Args:
            skip: Extra frames to skip above the caller of ``capture``
            depth: Max frames to keep (defaults to ``capture.max_depth``)

        Returns:
            The captured StackTrace
        """
        if depth is None:
            depth = get_config().capture.max_depth

        pcs: list[Frame] = []
        frame = inspect.currentframe()
        try:
            frame = frame.f_back if frame is not None else None
            for _ in range(skip):
                if frame is None:
                    break
                frame = frame.f_back
            while frame is not None and len(pcs) < depth:
                pcs.append(Frame(symbols.register(frame)))
                frame = frame.f_back
        finally:
            del frame
        return cls(pcs)

    @overload
    def __getitem__(self, index: SupportsIndex) -> Frame: ...

    @overload
    def __getitem__(self, index: slice) -> StackTrace: ...

    def __getitem__(self, index: SupportsIndex | slice) -> Frame | StackTrace:
        if isinstance(index, slice):
            return StackTrace(super().__getitem__(index))
        return super().__getitem__(index)

    def render(self, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
        """Render the trace as text.

        Args:
            mode: Rendering mode or format spec

        Returns:
            The rendered trace
        """
        mode = RenderMode.parse(mode)

        if mode == RenderMode.EXTENDED:
            return "".join(f"\n{frame.render(mode)}" for frame in self)
        if mode == RenderMode.DEBUG:
            return f"StackTrace([{', '.join(frame.render(RenderMode.DEFAULT) for frame in self)}])"
        return f"[{' '.join(frame.render(mode) for frame in self)}]"

    def to_json(self) -> str:
        """Serialize as a JSON array of each frame's text form."""
        return json.dumps([frame.to_text() for frame in self])

    def __format__(self, spec: str) -> str:
        return self.render(spec)

    def __str__(self) -> str:
        return self.render(RenderMode.DEFAULT)

    def __repr__(self) -> str:
        return self.render(RenderMode.DEBUG)


def render_stack(stack: StackTrace | None, mode: RenderMode | str = RenderMode.DEFAULT) -> str:
    """Render a possibly absent stack trace.

    Only DEBUG tells an absent trace apart from an empty one; every other mode
    renders ``None`` exactly like ``StackTrace()``.

    Args:
        stack: The trace, or None when there is none
        mode: Rendering mode or format spec

    Returns:
        The rendered trace
    """
    mode = RenderMode.parse(mode)
    if stack is None:
        if mode == RenderMode.DEBUG:
            return "StackTrace(None)"
        stack = StackTrace()
    return stack.render(mode)
