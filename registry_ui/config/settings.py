"""
Application settings and configuration management.

This module provides centralized configuration management using Pydantic settings
for type safety and validation. It handles environment variables, default values,
and configuration validation.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Registry file storage settings."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    registry_file: Path = Field(default=Path("./data/registry.json"))
    """JSON file holding the registered registries and the last issued id."""

    @field_validator("registry_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string paths to Path objects."""
        return Path(v) if isinstance(v, str) else v


class ProbeSettings(BaseSettings):
    """Settings for the validation request sent before a registry is saved."""

    model_config = SettingsConfigDict(env_prefix="PROBE_")

    timeout_seconds: float = Field(default=5.0, gt=0)
    """Upper bound for the whole probe request."""


class RegistryClientSettings(BaseSettings):
    """Settings for calls made against stored registries."""

    model_config = SettingsConfigDict(env_prefix="REGISTRY_CLIENT_")

    timeout_seconds: float = Field(default=10.0, gt=0)
    """Timeout for catalog, tag and manifest requests."""

    readme_timeout_seconds: float = Field(default=5.0, gt=0)
    """Timeout for README downloads."""

    catalog_page_size: int = Field(default=100, ge=1)
    """Number of repositories requested per catalog page."""


class APISettings(BaseSettings):
    """API configuration settings."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = Field(default="127.0.0.1")
    """API server host."""

    port: int = Field(default=8000)
    """API server port."""

    reload: bool = Field(default=False)
    """Enable auto-reload for development."""

    workers: int = Field(default=1)
    """Number of API workers. Registry writes are serialized per process."""

    debug: bool = Field(default=False)
    """Enable debug mode."""

    cors_origins: List[str] = Field(default=["http://localhost:3000", "http://localhost:8000"])
    """List of allowed CORS origins."""


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    """Log message format."""

    file_path: Optional[Path] = Field(default=None)
    """Path to log file. If None, logs to console only."""

    max_file_size: int = Field(default=10 * 1024 * 1024)  # 10MB
    """Maximum log file size before rotation."""

    backup_count: int = Field(default=5)
    """Number of backup log files to keep."""


class Settings(BaseSettings):
    """
    Main application settings.

    This class combines all configuration settings and provides a single
    point of access for application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    probe: ProbeSettings = Field(default_factory=ProbeSettings)
    registry_client: RegistryClientSettings = Field(default_factory=RegistryClientSettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Application metadata
    app_name: str = Field(default="Docker Registry UI", validation_alias="APP_NAME")
    version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    environment: str = Field(default="development", validation_alias="APP_ENV")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global application settings instance.

    Only one settings instance exists throughout the application lifecycle.

    Returns:
        Settings: The global application settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from environment variables.

    Useful for testing or when environment variables change during runtime.

    Returns:
        Settings: A new settings instance with current environment values.
    """
    global _settings
    _settings = Settings()
    return _settings
