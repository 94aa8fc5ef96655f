"""
User-facing prompts for incoming transfers.

The presenter turns transfer events into notification requests with
stable identifiers, so a prompt posted for a transfer can later be
removed by transfer ID alone. Error notices use a separate identifier
prefix and are never removed together with the prompt.

Example:
    presenter = NotificationPresenter(ConsoleNotificationCenter())
    presenter.start()
    presenter.present("t1", "Dropgate", "PIN: 1234",
                      "Pixel is sending you photo.jpg", actionable=True)
    presenter.remove_delivered([presenter.notification_id("t1")])
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from dropgate.constants import (
    CATEGORY_ERRORS,
    CATEGORY_INCOMING_TRANSFERS,
    ERROR_NOTIFICATION_PREFIX,
    TRANSFER_ERROR_TITLE_FORMAT,
    TRANSFER_ID_KEY,
    TRANSFER_NOTIFICATION_PREFIX,
)
from dropgate.core.notifications.center import Notification, NotificationCenter

logger = logging.getLogger(__name__)


class NotificationPresenter:
    """
    Posts and removes transfer notifications on a notification center.

    Permission is requested once by start(). If the user denies it the
    presenter keeps posting; the center is expected to drop the requests.
    """

    def __init__(self, center: NotificationCenter, sound: bool = True):
        """
        Initialize the presenter.

        Args:
            center: Platform notification center to post to.
            sound: Whether notifications should play a sound.
        """
        self._center = center
        self._sound = sound
        self._authorized: Optional[bool] = None

    @property
    def authorized(self) -> Optional[bool]:
        """Result of the permission request, None until it completes."""
        return self._authorized

    @staticmethod
    def notification_id(transfer_id: str) -> str:
        """Identifier of the prompt posted for a transfer."""
        return TRANSFER_NOTIFICATION_PREFIX + transfer_id

    @staticmethod
    def error_notification_id(transfer_id: str) -> str:
        """Identifier of the error notice posted for a transfer."""
        return ERROR_NOTIFICATION_PREFIX + transfer_id

    def start(self) -> None:
        """Request notification permission. Call once at startup."""
        if self._authorized is not None:
            return
        self._center.request_authorization(self._on_authorization)

    def _on_authorization(self, granted: bool) -> None:
        self._authorized = granted
        if granted:
            logger.debug("Notification permission granted")
        else:
            logger.warning(
                "Notification permission denied; incoming transfer prompts "
                "will not be visible"
            )

    def present(
        self,
        transfer_id: str,
        title: str,
        subtitle: Optional[str],
        body: str,
        actionable: bool,
    ) -> None:
        """
        Post the notification for an incoming transfer.

        Actionable notifications offer Accept and Decline and carry the
        transfer ID so the response can be routed back.
        """
        notification = Notification(
            identifier=self.notification_id(transfer_id),
            title=title,
            subtitle=subtitle,
            body=body,
            category=CATEGORY_INCOMING_TRANSFERS if actionable else CATEGORY_ERRORS,
            user_info={TRANSFER_ID_KEY: transfer_id} if actionable else {},
            sound=self._sound,
        )
        logger.debug(f"Posting {'prompt' if actionable else 'notice'} {notification.identifier}")
        self._center.add(notification)

    def present_error(self, transfer_id: str, device_name: str, message: str) -> None:
        """Post a notice that a transfer from device_name failed."""
        notification = Notification(
            identifier=self.error_notification_id(transfer_id),
            title=TRANSFER_ERROR_TITLE_FORMAT.format(device=device_name),
            body=message,
            category=CATEGORY_ERRORS,
            sound=self._sound,
        )
        logger.debug(f"Posting error notice {notification.identifier}")
        self._center.add(notification)

    def remove_delivered(self, identifiers: Iterable[str]) -> None:
        """Remove delivered notifications; unknown identifiers are ignored."""
        self._center.remove_delivered(set(identifiers))

    def remove_all_delivered(self) -> None:
        """Remove every notification this application delivered."""
        self._center.remove_all_delivered()
