"""Structured logging configuration with error-chain rendering.

This module provides logging setup for applications using stackerr:
- Configurable log levels and output formats (JSON/console)
- A structlog processor that expands stackerr chains into captured stacks
- Context injection for correlation
- File and console output support

The library itself only emits debug-level configuration events; deciding
when an application's errors get logged stays with the application.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from enum import StrEnum
from pathlib import Path
from typing import Any, cast

import structlog
from structlog.typing import WrappedLogger

from stackerr.config.schema import LoggingConfig
from stackerr.core.chain import iter_chain, stack_trace
from stackerr.models.errors import render_error
from stackerr.models.frame import RenderMode

log = structlog.get_logger()


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def error_chain_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor that expands exceptions carrying captured stacks.

    For every value that is an exception with a stack somewhere in its chain,
    adds ``<key>_stack`` (the extended rendering) and ``<key>_chain`` (the
    ``str()`` of each link, outermost first). Other values pass through.

    Args:
        logger: Logger instance (unused)
        method_name: Log method name (unused)
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with expanded chains
    """
    additions: dict[str, Any] = {}
    for key, value in event_dict.items():
        if not isinstance(value, BaseException):
            continue
        if stack_trace(value) is None:
            continue
        additions[f"{key}_stack"] = render_error(value, RenderMode.EXTENDED)
        additions[f"{key}_chain"] = [str(link) for link in iter_chain(value)]
    event_dict.update(additions)
    return event_dict


def add_context_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add contextual information to all log entries.

    Adds standard fields for correlation and debugging:
    - service: Always "stackerr"
    - version: Current library version (if available)

    Args:
        logger: Logger instance (unused)
        method_name: Log method name (unused)
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with added context
    """
    event_dict["service"] = "stackerr"

    try:
        from stackerr._version import __version__

        event_dict["version"] = __version__
    except (ImportError, RuntimeError):
        pass

    return event_dict


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_format: LogFormat | str = LogFormat.JSON,
    file_path: Path | str | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging.

    This function sets up structlog with:
    - Appropriate processors for the output format
    - Error-chain expansion for stackerr exceptions
    - Context injection
    - Optional file output

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging

    Example:
        # For development (colored console output)
        configure_logging(level="DEBUG", log_format="console")

        # For production (JSON for log aggregation)
        configure_logging(level="INFO", log_format="json")
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    numeric_level = getattr(logging, level.value)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_context_processor,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        error_chain_processor,
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        # exceptions left in the event are rendered by str() rather than rejected
        shared_processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    handlers.append(console_handler)

    if file_enabled and file_path:
        try:
            file_path = Path(file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(file_path)
            file_handler.setLevel(numeric_level)
            handlers.append(file_handler)
        except OSError as e:
            # Log warning but don't fail - continue with console only
            console_logger = logging.getLogger("stackerr.logging")
            console_logger.warning(f"Could not create log file {file_path}: {e}")

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )
    log.debug(LogEventNames.LOGGING_CONFIGURED, level=level.value, format=log_format.value)


def configure_logging_from_config(config: LoggingConfig) -> None:
    """Configure logging from the ``logging`` section of a StackerrConfig.

    Args:
        config: Logging section to apply
    """
    configure_logging(
        level=config.level,
        log_format=config.format,
        file_path=config.file.path,
        file_enabled=config.file.enabled,
    )


def get_logger(name: str | None = None) -> WrappedLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Configured structlog logger
    """
    return cast(WrappedLogger, structlog.get_logger(name))


class LogEventNames:
    """Log event names emitted by stackerr."""

    CONFIG_LOADED = "config_loaded"
    CONFIG_ACTIVATED = "config_activated"
    CONFIG_INVALID = "config_invalid"
    LOGGING_CONFIGURED = "logging_configured"
