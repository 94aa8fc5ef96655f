"""
Configuration management for Dropgate.

Handles loading, saving, and accessing configuration values from
environment variables, config files, and default values.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from dropgate.constants import (
    APP_NAME,
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_FILE,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_LEVEL,
)
from dropgate.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class NotificationConfig:
    """Configuration for user notifications."""

    app_name: str = APP_NAME
    sound: bool = True


@dataclass
class Config:
    """
    Main configuration container for Dropgate.

    Configuration is loaded from (in order of precedence):
    1. Environment variables (DROPGATE_*)
    2. Config file (~/.dropgate/config.json)
    3. Default values

    Example:
        config = Config.load()
        print(config.auto_accept)

        # Or with custom config file
        config = Config.load(Path("/custom/config.json"))
    """

    # Directory paths
    config_dir: Path = field(default_factory=lambda: DEFAULT_CONFIG_DIR)
    log_dir: Path = field(default_factory=lambda: DEFAULT_LOG_DIR)

    # Consent policy
    auto_accept: bool = False

    # Sub-configurations
    notifications: NotificationConfig = field(default_factory=NotificationConfig)

    # Logging
    log_level: str = DEFAULT_LOG_LEVEL
    log_to_file: bool = False

    def __post_init__(self) -> None:
        """Ensure paths are Path objects."""
        self.config_dir = Path(self.config_dir)
        self.log_dir = Path(self.log_dir)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file and environment.

        Args:
            config_path: Optional path to config file. If not provided,
                        uses default location (~/.dropgate/config.json).

        Returns:
            Config instance with loaded values.
        """
        # Load environment variables from .env file if present
        load_dotenv()

        config_path = config_path or DEFAULT_CONFIG_FILE
        config_data = cls._read_file(config_path)

        # Apply environment variable overrides
        config_data = cls._apply_env_overrides(config_data)

        return cls._from_dict(config_data)

    @staticmethod
    def _read_file(config_path: Path) -> dict[str, Any]:
        """Read raw config data, returning an empty dict on failure."""
        if not config_path.exists():
            return {}
        try:
            with open(config_path) as f:
                data = json.load(f)
            logger.debug(f"Loaded config from {config_path}")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {config_path}: not a JSON object")
            return {}
        return data

    @classmethod
    def _apply_env_overrides(cls, config_data: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config data."""
        env_mappings = {
            "DROPGATE_CONFIG_DIR": "config_dir",
            "DROPGATE_LOG_DIR": "log_dir",
            "DROPGATE_LOG_LEVEL": "log_level",
            "DROPGATE_AUTO_ACCEPT": "auto_accept",
            "DROPGATE_APP_NAME": ("notifications", "app_name"),
            "DROPGATE_NOTIFICATION_SOUND": ("notifications", "sound"),
        }

        for env_var, config_key in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                if isinstance(config_key, tuple):
                    # Nested config
                    section, key = config_key
                    if not isinstance(config_data.get(section), dict):
                        config_data[section] = {}
                    config_data[section][key] = cls._parse_env_value(value)
                else:
                    config_data[config_key] = cls._parse_env_value(value)

        return config_data

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        # Boolean
        if value.lower() in ("true", "yes", "on", "1"):
            return True
        if value.lower() in ("false", "no", "off", "0"):
            return False

        # Integer
        try:
            return int(value)
        except ValueError:
            pass

        # String
        return value

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from dictionary."""
        notification_data = data.pop("notifications", {})
        if not isinstance(notification_data, dict):
            logger.warning("Ignoring 'notifications' config: not an object")
            notification_data = {}

        known = {f.name for f in fields(NotificationConfig)}
        for key in notification_data.keys() - known:
            logger.warning(f"Ignoring unknown notification setting: {key}")
        notifications = NotificationConfig(
            **{k: v for k, v in notification_data.items() if k in known}
        )
        notifications.sound = cls._parse_bool(
            "notifications.sound", notifications.sound, True
        )

        return cls(
            config_dir=Path(data.get("config_dir", DEFAULT_CONFIG_DIR)),
            log_dir=Path(data.get("log_dir", DEFAULT_LOG_DIR)),
            auto_accept=cls._parse_bool("auto_accept", data.get("auto_accept", False), False),
            notifications=notifications,
            log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
            log_to_file=cls._parse_bool("log_to_file", data.get("log_to_file", False), False),
        )

    @classmethod
    def _parse_bool(cls, name: str, value: Any, default: bool) -> bool:
        """Coerce a file or environment value to bool, falling back to default."""
        if isinstance(value, str):
            value = cls._parse_env_value(value)
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        logger.warning(f"Invalid value for {name}: {value!r}, using {default}")
        return default

    def save(self, config_path: Optional[Path] = None) -> None:
        """
        Save configuration to file.

        Args:
            config_path: Optional path to save to. If not provided,
                        uses default location.

        Raises:
            ConfigError: If the file cannot be written.
        """
        config_path = config_path or DEFAULT_CONFIG_FILE

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w") as f:
                json.dump(self.to_dict(), f, indent=2, default=str)
        except OSError as e:
            raise ConfigError(str(config_path), str(e)) from e

        logger.info(f"Saved config to {config_path}")

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "config_dir": str(self.config_dir),
            "log_dir": str(self.log_dir),
            "auto_accept": self.auto_accept,
            "notifications": asdict(self.notifications),
            "log_level": self.log_level,
            "log_to_file": self.log_to_file,
        }

    def ensure_directories(self) -> None:
        """Create all configured directories if they don't exist."""
        for directory in [self.config_dir, self.log_dir]:
            directory.mkdir(parents=True, exist_ok=True)


class AutoAcceptSetting:
    """
    Persisted auto-accept toggle.

    The value is read back from disk on every call to enabled(), so a
    change made by another process (or another CLI invocation) applies
    to the next incoming offer.

    Example:
        setting = AutoAcceptSetting()
        orchestrator = Orchestrator(transport, presenter,
                                    auto_accept=setting.enabled)
        setting.toggle()
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = config_path or DEFAULT_CONFIG_FILE

    @property
    def config_path(self) -> Path:
        """The file the setting is persisted in."""
        return self._config_path

    def enabled(self) -> bool:
        """Current value of the setting."""
        return Config.load(self._config_path).auto_accept

    def set(self, value: bool) -> None:
        """Persist a new value."""
        config = Config.load(self._config_path)
        config.auto_accept = value
        config.save(self._config_path)
        logger.info(f"Auto-accept {'enabled' if value else 'disabled'}")

    def toggle(self) -> bool:
        """Flip the setting and return the new value."""
        new_value = not self.enabled()
        self.set(new_value)
        return new_value


# Global config instance (lazy loaded)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reload_config(config_path: Optional[Path] = None) -> Config:
    """Reload configuration from file."""
    global _config
    _config = Config.load(config_path)
    return _config
