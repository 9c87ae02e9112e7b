"""Version information for stackerr."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _resolve_version() -> str:
    """Return the installed distribution version, or the source checkout's.

    Raises:
        RuntimeError: If neither metadata nor pyproject.toml is available
    """
    try:
        return version("stackerr")
    except PackageNotFoundError:
        pass

    if not _PYPROJECT.exists():
        raise RuntimeError("Could not determine stackerr version")
    with _PYPROJECT.open("rb") as f:
        return str(tomllib.load(f)["project"]["version"])


__version__ = _resolve_version()

__all__ = ["__version__"]
