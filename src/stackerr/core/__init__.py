"""Core chain logic.

This module exports:
- chain: cause, unwrap, is_, as_, iter_chain, stack_trace
- factories: new, errorf, wrap, wrapf, with_message, with_messagef, with_stack
"""

from stackerr.core.chain import (
    Causer,
    StackTracer,
    as_,
    cause,
    is_,
    iter_chain,
    stack_trace,
    unwrap,
)
from stackerr.core.factories import (
    errorf,
    new,
    with_message,
    with_messagef,
    with_stack,
    wrap,
    wrapf,
)

__all__ = [
    "Causer",
    "StackTracer",
    "as_",
    "cause",
    "errorf",
    "is_",
    "iter_chain",
    "new",
    "stack_trace",
    "unwrap",
    "with_message",
    "with_messagef",
    "with_stack",
    "wrap",
    "wrapf",
]
