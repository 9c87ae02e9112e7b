"""Exceptions raised by stackerr itself.

These signal misuse of the library (a bad ``as_`` target, a broken config
file). They are never used as links in a caller's error chain.
"""

from __future__ import annotations


class StackerrError(Exception):
    """Base exception for all stackerr errors."""


class InvalidTargetError(StackerrError, TypeError):
    """``as_`` was given a target that is not an exception type.

    Attributes:
        target: The rejected target object.
    """

    def __init__(self, message: str, target: object = None) -> None:
        super().__init__(message)
        self.target = target


class ConfigError(StackerrError, ValueError):
    """Configuration could not be loaded or is invalid."""
