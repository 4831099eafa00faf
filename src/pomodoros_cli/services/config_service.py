"""Configuration service for Pomodoros CLI.

Default timer settings can be stored in ``config.json`` under the user config
directory. Command-line options always win over the file, and the file wins
over the built-in defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from pomodoros_cli.models.timer.config import (
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_LONG_BREAK_EVERY,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_TICK_MS,
    TimerConfig,
)

_APP_NAME = "pomodoros_cli"
_CONFIG_FILE = "config.json"


class ConfigError(Exception):
    """Raised when the config file or an option value is invalid."""


class ConfigFile(BaseModel):
    """Settings stored in config.json."""

    model_config = {"extra": "forbid"}

    focus_minutes: int = Field(default=DEFAULT_FOCUS_MINUTES, ge=0)
    short_break_minutes: int = Field(default=DEFAULT_SHORT_BREAK_MINUTES, ge=0)
    long_break_minutes: int = Field(default=DEFAULT_LONG_BREAK_MINUTES, ge=0)
    long_break_every: int = Field(default=DEFAULT_LONG_BREAK_EVERY, ge=1)
    mute: bool = Field(default=False)
    tick_ms: int = Field(default=DEFAULT_TICK_MS, ge=1)


class ConfigService:
    """Loads and saves the defaults file."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / _CONFIG_FILE
        self._config: ConfigFile | None = None

    @property
    def config(self) -> ConfigFile:
        """Get or load the stored defaults."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> ConfigFile:
        """Load defaults from disk; a missing file means built-in defaults."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = ConfigFile.model_validate_json(f.read())
        except FileNotFoundError:
            self._config = ConfigFile()
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self.config_path}: {e}") from e

        return self._config

    def save_config(self, config: ConfigFile | None = None) -> None:
        """Write *config* (or the loaded config) to disk."""
        if config is not None:
            self._config = config
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e

    def set_value(self, key: str, value: str) -> ConfigFile:
        """Update one stored setting from its string form and save."""
        if key not in ConfigFile.model_fields:
            raise ConfigError(f"Unknown setting '{key}'")

        data = self.config.model_dump()
        data[key] = value
        try:
            updated = ConfigFile.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for '{key}': {value}") from e

        self.save_config(updated)
        return updated

    def build_timer_config(
        self,
        focus_minutes: int | None = None,
        short_break_minutes: int | None = None,
        long_break_minutes: int | None = None,
        long_break_every: int | None = None,
        mute: bool | None = None,
        tick_ms: int | None = None,
    ) -> TimerConfig:
        """Merge command-line overrides over the stored defaults."""
        overrides = {
            "focus_minutes": focus_minutes,
            "short_break_minutes": short_break_minutes,
            "long_break_minutes": long_break_minutes,
            "long_break_every": long_break_every,
            "mute": mute,
            "tick_ms": tick_ms,
        }
        values = self.config.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return TimerConfig.from_minutes(
                focus=values["focus_minutes"],
                short_break=values["short_break_minutes"],
                long_break=values["long_break_minutes"],
                every=values["long_break_every"],
                mute=values["mute"],
                tick_ms=values["tick_ms"],
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid timer settings: {e}") from e


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the shared ConfigService."""
    return ConfigService()
