"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CaptureConfig(BaseModel):
    """Stack capture configuration."""

    max_depth: int = Field(32, ge=1, le=1024, description="Max frames kept per stack trace")


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("stackerr.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"
    file: FileLoggingConfig = FileLoggingConfig()


class StackerrConfig(BaseSettings):
    """Root configuration for stackerr."""

    capture: CaptureConfig = CaptureConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="STACKERR_",
        env_nested_delimiter="__",
    )
