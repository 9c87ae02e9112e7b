"""Data models for frames, stack traces and chain links."""

from .errors import Fundamental, WithMessage, WithStack, render_error
from .frame import Frame, RenderMode, StackTrace, funcname, render_stack

__all__ = [
    # Stack models
    "Frame",
    "StackTrace",
    "RenderMode",
    "funcname",
    "render_stack",
    # Chain links
    "Fundamental",
    "WithStack",
    "WithMessage",
    "render_error",
]
