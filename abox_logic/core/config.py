"""
Configuration management for abox-logic.

Supports environment variables and programmatic configuration.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from abox_logic.core.exceptions import InvalidConfigError
from abox_logic.core.types import MatchMode


class EngineConfig(BaseSettings):
    """Configuration for the fixpoint engine."""

    model_config = SettingsConfigDict(env_prefix="ABOX_ENGINE_")

    # None means unbounded
    max_rounds: Optional[int] = None
    match_mode: MatchMode = MatchMode.HOMOMORPHIC

    @field_validator("max_rounds")
    @classmethod
    def _positive_rounds(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("max_rounds must be at least 1")
        return value


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    model_config = SettingsConfigDict(env_prefix="ABOX_LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "console"] = "console"
    file_path: str = ""  # Empty means no file logging


class Config(BaseSettings):
    """
    Main configuration class for abox-logic.

    Can be configured via:
    - Environment variables (ABOX_* prefix)
    - Programmatic instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="ABOX_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create config from a dictionary."""
        try:
            return cls(**data)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            raise InvalidConfigError(key, error.get("input"), error["msg"]) from e


# Global default config instance
_default_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _default_config
    if _default_config is None:
        _default_config = Config.from_env()
    return _default_config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance. ``None`` resets to the environment."""
    global _default_config
    _default_config = config
