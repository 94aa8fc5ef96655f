"""
Notification center backends.

A notification center is the platform side of user notifications: it
displays requests, forgets delivered ones, and asks the user for
permission. The presenter talks to it through the NotificationCenter
protocol so the platform can be swapped out.

Example:
    center = ConsoleNotificationCenter()
    center.request_authorization(lambda granted: print(granted))
    center.add(Notification(identifier="transfer_1", title="Dropgate",
                            body="Pixel is sending you photo.jpg"))
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Protocol

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from dropgate.constants import (
    ACTION_ACCEPT,
    ACTION_DECLINE,
    CATEGORY_ERRORS,
    CATEGORY_INCOMING_TRANSFERS,
    ERROR_NOTIFICATION_PREFIX,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationCategory:
    """A set of actions a notification offers."""

    identifier: str
    actions: tuple[str, ...] = ()


INCOMING_TRANSFERS_CATEGORY = NotificationCategory(
    identifier=CATEGORY_INCOMING_TRANSFERS,
    actions=(ACTION_ACCEPT, ACTION_DECLINE),
)
ERRORS_CATEGORY = NotificationCategory(identifier=CATEGORY_ERRORS)

CATEGORIES: dict[str, NotificationCategory] = {
    c.identifier: c for c in (INCOMING_TRANSFERS_CATEGORY, ERRORS_CATEGORY)
}


@dataclass
class Notification:
    """A notification request handed to the center."""

    identifier: str
    title: str
    body: str
    subtitle: Optional[str] = None
    category: str = CATEGORY_ERRORS
    user_info: dict[str, Any] = field(default_factory=dict)
    sound: bool = True

    @property
    def actions(self) -> tuple[str, ...]:
        """Action identifiers offered by this notification."""
        category = CATEGORIES.get(self.category)
        return category.actions if category else ()

    @property
    def actionable(self) -> bool:
        """Whether the user can respond to this notification."""
        return bool(self.actions)


class NotificationCenter(Protocol):
    """Platform notification service."""

    def request_authorization(self, callback: Callable[[bool], None]) -> None:
        ...

    def add(self, notification: Notification) -> None:
        ...

    def remove_delivered(self, identifiers: Iterable[str]) -> None:
        ...

    def remove_all_delivered(self) -> None:
        ...


class MemoryNotificationCenter:
    """
    Notification center that keeps delivered notifications in memory.

    Adding a notification with an identifier that is already delivered
    replaces it, matching how desktop notification centers behave.
    """

    def __init__(self, grant_authorization: bool = True):
        self._grant = grant_authorization
        self._delivered: dict[str, Notification] = {}
        self._history: list[Notification] = []
        self._lock = threading.Lock()

    @property
    def delivered(self) -> dict[str, Notification]:
        """Currently visible notifications keyed by identifier."""
        with self._lock:
            return dict(self._delivered)

    @property
    def history(self) -> list[Notification]:
        """Every notification ever added, in order."""
        with self._lock:
            return list(self._history)

    def request_authorization(self, callback: Callable[[bool], None]) -> None:
        callback(self._grant)

    def add(self, notification: Notification) -> None:
        with self._lock:
            self._delivered[notification.identifier] = notification
            self._history.append(notification)

    def remove_delivered(self, identifiers: Iterable[str]) -> None:
        with self._lock:
            for identifier in identifiers:
                self._delivered.pop(identifier, None)

    def remove_all_delivered(self) -> None:
        with self._lock:
            self._delivered.clear()


class ConsoleNotificationCenter(MemoryNotificationCenter):
    """Notification center that renders notifications on a Rich console."""

    def __init__(
        self,
        console: Optional[Console] = None,
        grant_authorization: bool = True,
    ):
        super().__init__(grant_authorization=grant_authorization)
        self._console = console or Console()

    def add(self, notification: Notification) -> None:
        super().add(notification)

        content = Text()
        if notification.subtitle:
            content.append(f"{notification.subtitle}\n", style="bold")
        content.append(notification.body)
        if notification.actions:
            content.append(
                "\n[" + "] [".join(notification.actions) + "]",
                style="cyan",
            )

        if notification.identifier.startswith(ERROR_NOTIFICATION_PREFIX):
            style = "red"
        else:
            style = "blue"
        self._console.print(
            Panel(
                content,
                title=notification.title,
                subtitle=notification.identifier,
                border_style=style,
            )
        )

    def remove_delivered(self, identifiers: Iterable[str]) -> None:
        identifiers = list(identifiers)
        delivered = self.delivered
        super().remove_delivered(identifiers)
        for identifier in identifiers:
            if identifier in delivered:
                self._console.print(f"[dim]Removed notification {identifier}[/dim]")
