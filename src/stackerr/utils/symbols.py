"""Process-wide symbol table for captured call sites.

A captured :class:`~stackerr.models.frame.Frame` only stores an integer pc.
This module maps that pc back to the code object and instruction offset it
was taken from, and resolves it on demand into a :class:`Symbol` (qualified
function name, file, line).

Registration interns call sites by code-object identity, instruction offset
and module, so the same call site always yields the same pc and byte-identical
functions from different files never share one. Resolution is a read-through
cache; a resolved symbol never changes for the lifetime of the process, so
nothing is invalidated.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from types import CodeType, FrameType

UNKNOWN_NAME = "unknown"


@dataclass(frozen=True)
class Symbol:
    """A resolved call-site location."""

    module: str
    qualname: str
    file: str
    line: int

    @property
    def name(self) -> str:
        """Fully qualified function name, e.g. ``pkg.mod.Class.method``."""
        if not self.module:
            return self.qualname
        return f"{self.module}.{self.qualname}"

    @property
    def is_unknown(self) -> bool:
        """True for the placeholder symbol of an unresolvable pc."""
        return self is UNKNOWN


UNKNOWN = Symbol(module="", qualname=UNKNOWN_NAME, file=UNKNOWN_NAME, line=0)


@dataclass(frozen=True)
class _Location:
    code: CodeType
    lasti: int
    module: str


def line_for_offset(code: CodeType, lasti: int) -> int:
    """Map a bytecode offset to its source line.

    Args:
        code: Code object the offset belongs to
        lasti: Byte offset of the instruction (``frame.f_lasti``)

    Returns:
        The source line, or 0 when the offset has no line
    """
    if lasti < 0:
        return code.co_firstlineno
    for start, end, line in code.co_lines():
        if start <= lasti < end:
            return line if line is not None else 0
    return 0


class SymbolTable:
    """Thread-safe registry of captured call sites.

    pc 0 is reserved for the unknown location; registered sites are numbered
    from 1 upward. Registered code objects are held for the life of the
    process, including code compiled at runtime with ``exec``.

    Example:
        table = SymbolTable()
        pc = table.register(sys._getframe())
        print(table.resolve(pc).name)
    """

    def __init__(self) -> None:
        """Initialize an empty table."""
        self._lock = threading.Lock()
        self._locations: list[_Location | None] = [None]
        self._index: dict[tuple[int, int, str], int] = {}
        self._cache: dict[int, Symbol] = {}

    def __len__(self) -> int:
        return len(self._locations) - 1

    def register(self, frame: FrameType) -> int:
        """Intern the location a live frame is currently executing.

        Args:
            frame: A live interpreter frame

        Returns:
            The pc naming this location (always >= 1)
        """
        code = frame.f_code
        module = str(frame.f_globals.get("__name__") or "")
        # code objects compare by content, so identity keeps distinct files apart
        key = (id(code), frame.f_lasti, module)
        pc = self._index.get(key)
        if pc is not None:
            return pc

        with self._lock:
            pc = self._index.get(key)
            if pc is None:
                self._locations.append(_Location(code=code, lasti=frame.f_lasti, module=module))
                pc = len(self._locations) - 1
                self._index[key] = pc
        return pc

    def resolve(self, pc: int) -> Symbol:
        """Resolve a pc into a symbol.

        Unregistered or zero pcs resolve to :data:`UNKNOWN`; this never raises.

        Args:
            pc: A value previously returned by :meth:`register`

        Returns:
            The resolved Symbol
        """
        cached = self._cache.get(pc)
        if cached is not None:
            return cached

        if pc <= 0 or pc >= len(self._locations):
            return UNKNOWN
        location = self._locations[pc]
        if location is None:
            return UNKNOWN

        symbol = Symbol(
            module=location.module,
            qualname=location.code.co_qualname,
            file=location.code.co_filename,
            line=line_for_offset(location.code, location.lasti),
        )
        with self._lock:
            return self._cache.setdefault(pc, symbol)


_table = SymbolTable()


def symbol_table() -> SymbolTable:
    """Return the process-wide symbol table."""
    return _table


def register(frame: FrameType) -> int:
    """Register a frame's location in the process-wide table."""
    return _table.register(frame)


def resolve(pc: int) -> Symbol:
    """Resolve a pc against the process-wide table."""
    return _table.resolve(pc)
