"""Configuration management for paramguard using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from paramguard.interceptor import ValidatingInterceptor
from paramguard.messages import DEFAULT_HEADER, DefaultErrorMessageGenerator
from paramguard.validation import ValidatorSet, create_validator

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".paramguard.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class MessageConfig(BaseModel):
    """Fault message configuration section."""
    header: str = DEFAULT_HEADER

    @field_validator("header")
    @classmethod
    def validate_header(cls, v):
        if "{operation}" not in v:
            raise ValueError("header must contain the {operation} placeholder")
        try:
            v.format(operation="operation")
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            raise ValueError(f"header may only use the {{operation}} placeholder: {e!r}") from e
        return v


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO


class GuardConfig(BaseModel):
    """Complete paramguard configuration model."""
    validators: list[str] = Field(default_factory=lambda: ["null_check", "annotations"])
    messages: MessageConfig = Field(default_factory=MessageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("validators")
    @classmethod
    def validate_validators(cls, v):
        if not v:
            raise ValueError("at least one validator is required")
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate validators: {', '.join(duplicates)}")
        return v

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> GuardConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .paramguard.json

    Returns:
        GuardConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        logger.debug(f"Loading configuration from {config_path}")
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return GuardConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .paramguard.json by searching up the directory tree."""
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> GuardConfig:
    return GuardConfig()


def build_interceptor(config: GuardConfig | None = None) -> ValidatingInterceptor:
    """Create an interceptor with validators resolved from the registry.

    Raises:
        ConfigurationError: If a validator name is not registered
    """
    config = config or create_default_config()
    validators = ValidatorSet(create_validator(name) for name in config.validators)
    generator = DefaultErrorMessageGenerator(header=config.messages.header)
    return ValidatingInterceptor(validators, generator)
