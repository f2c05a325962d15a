"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings v2.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- RegistryConfig: Searchable registry behavior (web search conventions,
  suggestion inhibition, notification workers, manifest location)
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WEB_SEARCH_ACTION = "android.intent.action.WEB_SEARCH"


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("searchables.log")
    real_time_debug: bool = True


class RegistryConfig(BaseModel):
    """Searchable registry configuration."""

    # Components whose default suggestion intent action is this are web search targets
    web_search_action: str = WEB_SEARCH_ACTION
    # Suggestion authorities that also mark a component as a web search target
    web_search_authorities: list[str] = []
    # Drop every suggestion field while parsing
    inhibit_suggestions: bool = False
    # Worker threads delivering "searchables changed" notifications
    notify_workers: int = 2
    # Directory of XML package manifests read by the CLI
    manifest_dir: Path = Path("manifests")

    @field_validator("notify_workers")
    @classmethod
    def _at_least_one_worker(cls, value: int) -> int:
        if value < 1:
            raise ValueError("notify_workers must be at least 1")
        return value


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: CONSOLE_LOG_LEVEL, SEARCHABLES_MANIFEST_DIR
    - Nested: LOGGING__CONSOLE_LEVEL, REGISTRY__MANIFEST_DIR

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Nested configuration groups
    logging: LoggingConfig = LoggingConfig()
    registry: RegistryConfig = RegistryConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Handles legacy flat env vars (CONSOLE_LOG_LEVEL) and maps them to the
        nested structure expected by the models (logging.console_level).
        """
        if not isinstance(data, dict):
            return data

        transformed = {}

        # Logging mappings
        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)

        # Registry mappings
        registry_mapping = {
            "searchables_web_search_action": "web_search_action",
            "searchables_inhibit_suggestions": "inhibit_suggestions",
            "searchables_notify_workers": "notify_workers",
            "searchables_manifest_dir": "manifest_dir",
        }
        for env_key, field_key in registry_mapping.items():
            if env_key in data:
                transformed.setdefault("registry", {})[field_key] = data.pop(env_key)

        # Merge transformed nested structure back into data
        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                values = {**existing, **values}
            data[section] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# FLAT KEY ACCESS
# =============================================================================

_LEGACY_KEY_MAP = {
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    # Registry settings
    "SEARCHABLES_WEB_SEARCH_ACTION": lambda: settings.registry.web_search_action,
    "SEARCHABLES_WEB_SEARCH_AUTHORITIES": lambda: settings.registry.web_search_authorities,
    "SEARCHABLES_INHIBIT_SUGGESTIONS": lambda: settings.registry.inhibit_suggestions,
    "SEARCHABLES_NOTIFY_WORKERS": lambda: settings.registry.notify_workers,
    "SEARCHABLES_MANIFEST_DIR": lambda: settings.registry.manifest_dir,
}


def get_config(key: str, default=None):
    """Get configuration value by key with optional default.

    Maps flat keys to the nested Pydantic settings structure.

    Args:
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example:
        >>> workers = get_config("SEARCHABLES_NOTIFY_WORKERS", 2)
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()

    return default
