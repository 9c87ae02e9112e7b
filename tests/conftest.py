"""Shared test fixtures for stackerr."""

from collections.abc import Iterator

import pytest

from stackerr.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Make every test start from the environment-derived configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sentinel() -> LookupError:
    """Return a sentinel exception instance."""
    return LookupError("sentinel")


@pytest.fixture
def eof() -> EOFError:
    """Return a foreign exception with a fixed message."""
    return EOFError("EOF")
