"""
Pytest configuration and fixtures for Dropgate tests.

This module provides common fixtures used across the test suite,
including sample transfers, a recording transport, and an in-memory
notification center.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable

import pytest

from dropgate.config import Config
from dropgate.core.notifications import MemoryNotificationCenter, NotificationPresenter
from dropgate.core.transfer import (
    ConsentRegistry,
    FileInfo,
    Orchestrator,
    RemoteDeviceInfo,
    TransferMetadata,
)


# Test transfer data
TEST_DEVICE_ID = "a1b2c3d4"
TEST_DEVICE_NAME = "Pixel 8"
TEST_PIN_CODE = "482913"


class RecordingTransport:
    """Transport double that records every consent decision."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._decisions: list[tuple[str, bool]] = []

    def submit_consent(self, transfer_id: str, accept: bool) -> None:
        with self._lock:
            self._decisions.append((transfer_id, accept))

    @property
    def decisions(self) -> list[tuple[str, bool]]:
        with self._lock:
            return list(self._decisions)

    def decisions_for(self, transfer_id: str) -> list[bool]:
        return [accept for tid, accept in self.decisions if tid == transfer_id]


class AutoAcceptSwitch:
    """Mutable auto-accept setting for tests."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def __call__(self) -> bool:
        return self.enabled


@pytest.fixture
def device() -> RemoteDeviceInfo:
    """Create a sample remote device."""
    return RemoteDeviceInfo(id=TEST_DEVICE_ID, name=TEST_DEVICE_NAME)


@pytest.fixture
def make_transfer() -> Callable[..., TransferMetadata]:
    """Factory for transfer offers."""

    def _make(
        transfer_id: str = "t1",
        files: tuple[str, ...] = ("photo.jpg",),
        pin_code: str = TEST_PIN_CODE,
        text_description: str | None = None,
    ) -> TransferMetadata:
        return TransferMetadata(
            id=transfer_id,
            pin_code=pin_code,
            text_description=text_description,
            files=tuple(FileInfo(name=name, size=1024) for name in files),
        )

    return _make


@pytest.fixture
def transport() -> RecordingTransport:
    """Create a recording transport double."""
    return RecordingTransport()


@pytest.fixture
def center() -> MemoryNotificationCenter:
    """Create an in-memory notification center."""
    return MemoryNotificationCenter()


@pytest.fixture
def presenter(center: MemoryNotificationCenter) -> NotificationPresenter:
    """Create a presenter backed by the in-memory center."""
    presenter = NotificationPresenter(center)
    presenter.start()
    return presenter


@pytest.fixture
def registry() -> ConsentRegistry:
    """Create an empty registry."""
    return ConsentRegistry()


@pytest.fixture
def auto_accept() -> AutoAcceptSwitch:
    """Auto-accept setting, off by default."""
    return AutoAcceptSwitch(enabled=False)


@pytest.fixture
def orchestrator(
    transport: RecordingTransport,
    presenter: NotificationPresenter,
    registry: ConsentRegistry,
    auto_accept: AutoAcceptSwitch,
) -> Orchestrator:
    """Create an orchestrator wired to the test doubles."""
    return Orchestrator(
        transport=transport,
        presenter=presenter,
        registry=registry,
        auto_accept=auto_accept,
        app_name="Dropgate",
    )


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with temporary directories."""
    return Config(
        config_dir=tmp_path / "config",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path of a not-yet-existing config file."""
    return tmp_path / "config" / "config.json"
