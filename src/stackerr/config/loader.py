"""Configuration loader with YAML parsing and environment variable substitution.

Also holds the active configuration that capture code reads its defaults
from. Until :func:`set_config` is called the active configuration is built
from ``STACKERR_*`` environment variables on first use.
"""

from __future__ import annotations

import os
import re
import threading
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from stackerr.exceptions import ConfigError

from .schema import StackerrConfig

log = structlog.get_logger()

_active: StackerrConfig | None = None
_active_lock = threading.Lock()


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ConfigError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> StackerrConfig:
    """
    Load configuration from YAML file with environment variable substitution.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated StackerrConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If environment variables are missing or config is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)

    try:
        config_dict = yaml.safe_load(yaml_with_env) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    try:
        config = StackerrConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    log.debug("config_loaded", path=str(path), max_depth=config.capture.max_depth)
    return config


def get_config() -> StackerrConfig:
    """Return the active configuration, building it from the environment on first use.

    Never raises: an invalid ``STACKERR_*`` environment is logged and the
    defaults are used instead.
    """
    global _active
    config = _active
    if config is not None:
        return config
    with _active_lock:
        if _active is None:
            try:
                _active = StackerrConfig()
            except ValidationError as e:
                log.warning("config_invalid", source="environment", error=str(e))
                _active = StackerrConfig.model_construct()
        return _active


def set_config(config: StackerrConfig) -> None:
    """Replace the active configuration.

    Args:
        config: Configuration to activate
    """
    global _active
    with _active_lock:
        _active = config
    log.debug("config_activated", max_depth=config.capture.max_depth)


def reset_config() -> None:
    """Drop the active configuration so the next read rebuilds it from the environment."""
    global _active
    with _active_lock:
        _active = None
