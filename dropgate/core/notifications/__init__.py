"""
Notification module for Dropgate.

This module posts transfer prompts and error notices through a
platform notification center.

Example:
    from dropgate.core.notifications import (
        ConsoleNotificationCenter,
        NotificationPresenter,
    )

    presenter = NotificationPresenter(ConsoleNotificationCenter())
    presenter.start()
"""

from dropgate.core.notifications.center import (
    ConsoleNotificationCenter,
    MemoryNotificationCenter,
    Notification,
    NotificationCategory,
    NotificationCenter,
)
from dropgate.core.notifications.presenter import NotificationPresenter

__all__ = [
    "ConsoleNotificationCenter",
    "MemoryNotificationCenter",
    "Notification",
    "NotificationCategory",
    "NotificationCenter",
    "NotificationPresenter",
]
