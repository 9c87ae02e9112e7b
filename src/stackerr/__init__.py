"""stackerr: annotate exceptions with messages and captured call stacks.

Example:
    import stackerr

    def read_config(path):
        try:
            return path.read_text()
        except OSError as e:
            raise stackerr.wrap(e, f"reading {path}") from e

    err = stackerr.new("whoops")
    print(f"{err:+v}")  # message followed by the captured frames
"""

from stackerr._version import __version__
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
from stackerr.exceptions import ConfigError, InvalidTargetError, StackerrError
from stackerr.models.errors import Fundamental, WithMessage, WithStack, render_error
from stackerr.models.frame import Frame, RenderMode, StackTrace, funcname, render_stack

__all__ = [
    "__version__",
    # Factories
    "new",
    "errorf",
    "wrap",
    "wrapf",
    "with_message",
    "with_messagef",
    "with_stack",
    # Chain walking
    "cause",
    "unwrap",
    "is_",
    "as_",
    "iter_chain",
    "stack_trace",
    "Causer",
    "StackTracer",
    # Links
    "Fundamental",
    "WithStack",
    "WithMessage",
    "render_error",
    # Stacks
    "Frame",
    "StackTrace",
    "RenderMode",
    "funcname",
    "render_stack",
    # Exceptions
    "StackerrError",
    "InvalidTargetError",
    "ConfigError",
]
