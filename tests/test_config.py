"""Tests for Dropgate configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dropgate.config import AutoAcceptSetting, Config, NotificationConfig
from dropgate.constants import APP_NAME


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DROPGATE_* variables from the environment out of the tests."""
    for name in (
        "DROPGATE_CONFIG_DIR",
        "DROPGATE_LOG_DIR",
        "DROPGATE_LOG_LEVEL",
        "DROPGATE_AUTO_ACCEPT",
        "DROPGATE_APP_NAME",
        "DROPGATE_NOTIFICATION_SOUND",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("dropgate.config.load_dotenv", lambda: False)


class TestConfig:
    """Tests for Config class."""

    def test_defaults(self, test_config: Config) -> None:
        """Auto-accept should be off by default."""
        assert test_config.auto_accept is False
        assert test_config.notifications == NotificationConfig()
        assert test_config.notifications.app_name == APP_NAME
        assert test_config.log_level == "WARNING"

    def test_load_missing_file(self, config_file: Path) -> None:
        """A missing file should give defaults."""
        config = Config.load(config_file)

        assert config.auto_accept is False

    def test_load_invalid_json(self, config_file: Path) -> None:
        """Unreadable files should be ignored."""
        config_file.parent.mkdir(parents=True)
        config_file.write_text("{not json")

        config = Config.load(config_file)

        assert config.auto_accept is False

    def test_load_non_object(self, config_file: Path) -> None:
        """Files that are not JSON objects should be ignored."""
        config_file.parent.mkdir(parents=True)
        config_file.write_text("[1, 2]")

        assert Config.load(config_file).auto_accept is False

    def test_save_and_load(self, test_config: Config, config_file: Path) -> None:
        """Saved settings should load back."""
        test_config.auto_accept = True
        test_config.notifications.sound = False
        test_config.save(config_file)

        loaded = Config.load(config_file)

        assert loaded.auto_accept is True
        assert loaded.notifications.sound is False
        assert loaded.config_dir == test_config.config_dir

    def test_env_override(self, config_file: Path, monkeypatch) -> None:
        """Environment variables should override the file."""
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"auto_accept": False}))
        monkeypatch.setenv("DROPGATE_AUTO_ACCEPT", "yes")
        monkeypatch.setenv("DROPGATE_APP_NAME", "QuickDrop")

        config = Config.load(config_file)

        assert config.auto_accept is True
        assert config.notifications.app_name == "QuickDrop"

    def test_string_booleans_in_file(self, config_file: Path) -> None:
        """Hand-edited string values should be parsed, not truth-tested."""
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({
            "auto_accept": "false",
            "log_to_file": "yes",
            "notifications": {"sound": "off"},
        }))

        config = Config.load(config_file)

        assert config.auto_accept is False
        assert config.log_to_file is True
        assert config.notifications.sound is False
        assert AutoAcceptSetting(config_file).enabled() is False

    def test_invalid_boolean_falls_back(self, config_file: Path) -> None:
        """Values that are not booleans should give the default."""
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"auto_accept": "sometimes"}))

        assert Config.load(config_file).auto_accept is False

    def test_unknown_notification_keys(self, config_file: Path) -> None:
        """Unknown notification settings should be ignored."""
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({
            "auto_accept": True,
            "notifications": {"badge": 1, "app_name": "QuickDrop"},
        }))

        config = Config.load(config_file)

        assert config.auto_accept is True
        assert config.notifications == NotificationConfig(app_name="QuickDrop")

    def test_notifications_not_an_object(self, config_file: Path, monkeypatch) -> None:
        """A malformed notifications section should not break loading."""
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"notifications": "loud"}))
        monkeypatch.setenv("DROPGATE_NOTIFICATION_SOUND", "0")

        config = Config.load(config_file)

        assert config.notifications.app_name == APP_NAME
        assert config.notifications.sound is False

    def test_log_level_from_env(self, config_file: Path, monkeypatch) -> None:
        monkeypatch.setenv("DROPGATE_LOG_LEVEL", "debug")

        assert Config.load(config_file).log_level == "DEBUG"

    def test_to_dict(self, test_config: Config) -> None:
        """to_dict should be JSON serializable."""
        data = test_config.to_dict()

        assert json.loads(json.dumps(data))["auto_accept"] is False
        assert data["notifications"]["app_name"] == APP_NAME

    def test_ensure_directories(self, test_config: Config) -> None:
        """ensure_directories should create configured directories."""
        test_config.ensure_directories()

        assert test_config.config_dir.is_dir()
        assert test_config.log_dir.is_dir()


class TestAutoAcceptSetting:
    """Tests for AutoAcceptSetting class."""

    def test_disabled_by_default(self, config_file: Path) -> None:
        assert AutoAcceptSetting(config_file).enabled() is False

    def test_set(self, config_file: Path) -> None:
        """set should persist the value."""
        AutoAcceptSetting(config_file).set(True)

        assert json.loads(config_file.read_text())["auto_accept"] is True
        assert AutoAcceptSetting(config_file).enabled() is True

    def test_toggle(self, config_file: Path) -> None:
        """toggle should flip and return the new value."""
        setting = AutoAcceptSetting(config_file)

        assert setting.toggle() is True
        assert setting.toggle() is False
        assert setting.enabled() is False

    def test_reads_changes_from_disk(self, config_file: Path) -> None:
        """Changes made elsewhere should be picked up on the next call."""
        setting = AutoAcceptSetting(config_file)
        assert setting.enabled() is False

        AutoAcceptSetting(config_file).set(True)

        assert setting.enabled() is True
