"""Configuration service for pomoclock.

``ConfigService`` is the single source of truth for settings. It loads and
saves ``config.json`` under the platform config directory, creates defaults on
first run and offers dotted-key access used by the ``config`` commands.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from pomoclock.errors import ConfigurationError
from pomoclock.models.config_models import AppConfig

logger = logging.getLogger("pomoclock.config")


class ConfigService:
    """Service for loading, saving and editing the application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("pomoclock"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("pomoclock"))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        # Text of config.json as last parsed or written by this instance
        self._raw: str | None = None

    @property
    def config(self) -> AppConfig:
        """Get the current configuration, picking up edits made on disk."""
        return self.load_config()

    def load_config(self) -> AppConfig:
        """Load configuration from storage.

        The file is re-parsed only when its text differs from what this
        instance last saw, so another ``pomoclock config set`` reaches a
        running timer on its next operation. Once a configuration has been
        loaded, a broken edit is logged and the last good one is kept.
        """
        try:
            with open(self.config_path, encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            # First run, or the file was removed underneath us
            if self._config is None:
                self._config = AppConfig()
            self.save_config()
            return self._config
        except OSError as e:
            raise ConfigurationError(f"Failed to load config: {e}") from e

        if raw == self._raw and self._config is not None:
            return self._config

        try:
            config = AppConfig.model_validate_json(raw)
        except ValidationError as e:
            if self._config is None:
                raise ConfigurationError(f"Invalid config {self.config_path}: {e}") from e
            logger.warning("ignoring invalid edit to %s: %s", self.config_path, e)
            self._raw = raw
            return self._config

        self._config = config
        self._raw = raw
        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        if self._config is None:
            self._config = AppConfig()
        raw = self._config.model_dump_json(indent=4)
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(raw)
        except OSError as e:
            raise ConfigurationError(f"Failed to save config: {e}") from e
        self._raw = raw

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return _lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        The whole document is re-validated, so an invalid value (for example a
        long break frequency of 0) raises ``ConfigurationError`` and leaves the
        stored configuration untouched.
        """
        keys = key.split(".")
        config_dict = self.config.model_dump(mode="json")

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise ConfigurationError(f"Unknown config key: {key}")
            current = current[k]
        if keys[-1] not in current:
            raise ConfigurationError(f"Unknown config key: {key}")

        current[keys[-1]] = value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for {key}: {e}") from e
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or everything, to defaults."""
        if key is None:
            self.reset_config()
            return

        default_value = _lookup(AppConfig(), key)
        if isinstance(default_value, BaseModel):
            default_value = default_value.model_dump(mode="json")
        self.set(key, default_value)

    def clock_db_path(self) -> Path:
        """Location of the clock log database."""
        if self.config.database:
            return Path(self.config.database).expanduser()
        return self.data_dir / "clock.db"


def _lookup(config: AppConfig, key: str) -> Any:
    value: Any = config
    for k in key.split("."):
        if not isinstance(value, BaseModel) or k not in type(value).model_fields:
            raise ConfigurationError(f"Unknown config key: {key}")
        value = getattr(value, k)
    return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
