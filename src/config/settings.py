"""
Configuration settings for the HTTP dialect converter.
Uses pydantic-settings for environment variable management.
"""

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.sql_dialects import Dialect
from src.utils.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TARGET_DIALECT,
    PROTOCOL_VERSION,
)
from src.utils.exceptions import ConfigurationError


class DialectConverterSettings(BaseSettings):
    """Conversion service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DIALECT_CONVERTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    services: str = Field(
        default="",
        description="Semicolon-delimited host:port list of conversion services",
    )
    service_url: str = Field(
        default="",
        description="Initial override URL; takes precedence over the service pool",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT, gt=0, description="HTTP request timeout"
    )
    target_dialect: str = Field(
        default=DEFAULT_TARGET_DIALECT,
        description="Native dialect of the engine, sent as the 'to' field",
    )
    protocol_version: str = Field(
        default=PROTOCOL_VERSION, description="Conversion protocol version"
    )

    @field_validator("target_dialect")
    @classmethod
    def _known_target_dialect(cls, value: str) -> str:
        dialect = Dialect.get_by_name(value)
        if dialect is None:
            raise ValueError(f"Unknown target dialect: {value}")
        return dialect.value


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_name: str = Field(default="HTTP Dialect Converter", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    dialect_converter: DialectConverterSettings = Field(
        default_factory=DialectConverterSettings
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises:
        ConfigurationError: If environment or .env values are invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid dialect converter configuration: {e}") from e
