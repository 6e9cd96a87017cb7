"""
Configuration Management Module
Handles loading and validation of environment variables and settings
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .security_validators import MAX_MIME_PARTS, MAX_NESTING_DEPTH

LOG_FORMATS = ("color", "json", "plain")


class ConfigurationError(ValueError):
    """Raised when a configuration value is missing or invalid"""

    pass


@dataclass
class ParserLimits:
    """Structural limits enforced while building a MIME tree"""
    max_depth: int = MAX_NESTING_DEPTH
    max_parts: int = MAX_MIME_PARTS


@dataclass
class SystemConfig:
    """Configuration for logging"""
    log_level: str = "INFO"
    log_format: str = "color"
    log_file: Optional[str] = None


class Config:
    """Main configuration class"""

    ENV_PREFIX = "MIMEPARSER_"

    def __init__(self, env_file: str = ".env"):
        """
        Initialize configuration from environment file

        Variables already present in the environment win over the file.

        Args:
            env_file: Path to environment file (default: .env)
        """
        load_dotenv(env_file)

        self.limits = self._load_parser_limits()
        self.system = self._load_system_config()

    def _load_parser_limits(self) -> ParserLimits:
        """Load parser limits"""
        return ParserLimits(
            max_depth=self._get_int("MAX_DEPTH", MAX_NESTING_DEPTH),
            max_parts=self._get_int("MAX_PARTS", MAX_MIME_PARTS),
        )

    def _load_system_config(self) -> SystemConfig:
        """Load logging configuration"""
        return SystemConfig(
            log_level=self._get("LOG_LEVEL", "INFO"),
            log_format=self._get("LOG_FORMAT", "color").lower(),
            log_file=self._get("LOG_FILE") or None,
        )

    @classmethod
    def _get(cls, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(cls.ENV_PREFIX + key, default)

    @classmethod
    def _get_int(cls, key: str, default: int) -> int:
        """Convert environment variable to int"""
        value = cls._get(key)
        if value is None or not value.strip():
            return default
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(
                f"{cls.ENV_PREFIX}{key} must be an integer, got {value!r}"
            ) from e

    def validate(self) -> bool:
        """
        Validate configuration

        Returns:
            True if configuration is valid

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.limits.max_depth <= 0:
            raise ConfigurationError("MIMEPARSER_MAX_DEPTH must be positive")

        if self.limits.max_parts <= 0:
            raise ConfigurationError("MIMEPARSER_MAX_PARTS must be positive")

        if self.system.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"MIMEPARSER_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}"
            )

        if self.system.log_level.upper() not in logging._nameToLevel:
            raise ConfigurationError(f"Unknown log level '{self.system.log_level}'")

        return True
