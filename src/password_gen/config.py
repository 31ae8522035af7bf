"""
Default settings, read from the environment.

A .env file in the working directory is loaded first, so values can be
kept there instead of exported:

    PASSWORD_GEN_LENGTH=20
    PASSWORD_GEN_CHARSET=passphrase
    PASSWORD_GEN_DICTIONARY=/path/to/words.yaml
    PASSWORD_GEN_LOG_LEVEL=DEBUG
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .models import CharSetKind, ConfigurationError, ParseError

ENV_PREFIX = "PASSWORD_GEN_"

DEFAULT_LENGTH = 16
DEFAULT_CHARSET = CharSetKind.ASCII
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """Defaults used when the caller does not specify a value."""
    length: int = DEFAULT_LENGTH
    char_set: CharSetKind = DEFAULT_CHARSET
    dictionary_path: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(use_dotenv: bool = True) -> Settings:
    """
    Build Settings from PASSWORD_GEN_* environment variables.

    Args:
        use_dotenv: Load a .env file before reading the environment.
            Variables already set in the environment take precedence.

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    settings = Settings()

    length = os.getenv(f"{ENV_PREFIX}LENGTH")
    if length:
        try:
            settings.length = int(length)
        except ValueError:
            raise ConfigurationError(
                f"{ENV_PREFIX}LENGTH must be a whole number, got {length!r}"
            ) from None
        if settings.length < 0:
            raise ConfigurationError(f"{ENV_PREFIX}LENGTH must not be negative")

    char_set = os.getenv(f"{ENV_PREFIX}CHARSET")
    if char_set:
        try:
            settings.char_set = CharSetKind.parse(char_set)
        except ParseError as e:
            raise ConfigurationError(f"{ENV_PREFIX}CHARSET: {e}") from e

    dictionary_path = os.getenv(f"{ENV_PREFIX}DICTIONARY")
    if dictionary_path:
        settings.dictionary_path = Path(dictionary_path)

    log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level:
        log_level = log_level.upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"{ENV_PREFIX}LOG_LEVEL: unknown level {log_level!r}")
        settings.log_level = log_level

    return settings
