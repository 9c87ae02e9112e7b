"""Configuration loading and validation."""

from .loader import get_config, load_config, reset_config, set_config
from .schema import CaptureConfig, FileLoggingConfig, LoggingConfig, StackerrConfig

__all__ = [
    # Loader
    "load_config",
    # Active config
    "get_config",
    "set_config",
    "reset_config",
    # Root config
    "StackerrConfig",
    # Sections
    "CaptureConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
