"""
Configuration Management.

Loads settings from config/settings/*.yaml and environment overrides
from TOODOOIST_* variables (optionally via config/.env).

Settings (YAML):
    application.yaml   - App identity
    logging.yaml       - Logging configuration
    board.yaml         - Trash zone geometry, deletion delay, default color
    storage.yaml       - Persistent store backend and location

Overrides (environment):
    TOODOOIST_STORAGE_BACKEND, TOODOOIST_STORAGE_DIRECTORY
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from toodooist.core.config_schema import (
    ApplicationSchema,
    BoardSchema,
    LoggingSchema,
    StorageSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides. Unset values fall back to the YAML settings."""

    storage_backend: str | None = None
    storage_directory: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="TOODOOIST_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str, overrides: dict[str, Any] | None = None) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    if overrides:
        raw.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Missing keys, wrong types, or unknown fields raise a clear error
    immediately instead of causing cryptic KeyErrors later.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._board = _load_validated(BoardSchema, "board.yaml")
        self._storage = _load_validated(
            StorageSchema,
            "storage.yaml",
            {
                "backend": settings.storage_backend,
                "directory": settings.storage_directory,
            },
        )

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def board(self) -> BoardSchema:
        """Board interaction settings."""
        return self._board

    @property
    def storage(self) -> StorageSchema:
        """Persistent store settings."""
        return self._storage


@lru_cache
def get_settings() -> Settings:
    """Get cached environment overrides. Reads config/.env when present."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig(get_settings())


def resolve_project_path(configured_path: str) -> Path:
    """Resolve a configured path relative to the project root."""
    path = Path(configured_path)
    if path.is_absolute():
        return path
    return find_project_root() / path
