"""
Library configuration using pydantic-settings with nested structure
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path


# ============================================================================
# NESTED CONFIGURATION MODELS
# ============================================================================

# .env is looked up in the current working directory
_ENV_FILE = Path.cwd() / ".env"

_VALID_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class LoggerConfig(BaseSettings):
    """Logger configuration settings."""
    default_level: str = "WARNING"
    file_path: str = ""  # Empty disables the file sink
    rotation: str = "10 MB"
    retention: str = "30 days"
    model_config = SettingsConfigDict(
        env_prefix="LOGGER__", env_file=str(_ENV_FILE), env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("default_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _VALID_LEVELS:
            raise ValueError(f"Invalid level '{value}'. Choose from: {', '.join(_VALID_LEVELS)}")
        return level


class IndicatorDefaults(BaseSettings):
    """Default periods used by the indicators' default() constructors and the CLI."""
    adx_period: int = Field(default=14, ge=2)
    rsi_period: int = Field(default=14, ge=1)
    correl_period: int = Field(default=30, ge=1)
    adx_rounding: bool = False
    model_config = SettingsConfigDict(
        env_prefix="INDICATORS__", env_file=str(_ENV_FILE), env_file_encoding="utf-8", extra="ignore"
    )


# ============================================================================
# MAIN SETTINGS CLASS
# ============================================================================

class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Nested sections read their own env vars, prefixed with the section
    name and a double underscore (__).

    Example:
        LOGGER__DEFAULT_LEVEL=DEBUG
        INDICATORS__ADX_PERIOD=21
    """

    APP_NAME: str = "tam"
    APP_VERSION: str = "0.1.0"

    LOGGER: Optional[LoggerConfig] = None
    INDICATORS: Optional[IndicatorDefaults] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.LOGGER is None:
            self.LOGGER = LoggerConfig()
        if self.INDICATORS is None:
            self.INDICATORS = IndicatorDefaults()

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix=""
    )


# Global settings instance
settings = Settings()
