"""
Consent orchestration for incoming transfers.

The orchestrator sits between the transport, which offers transfers and
reports when they finish, and the user, who answers transfer prompts.
Both sides call in from their own threads. Every offer is resolved
exactly once: the transport hears at most one consent decision per
transfer, and a transfer leaves the registry exactly once.

Example:
    orchestrator = Orchestrator(
        transport=connection_manager,
        presenter=NotificationPresenter(ConsoleNotificationCenter()),
        auto_accept=AutoAcceptSetting().enabled,
    )

    # Called by the transport
    orchestrator.offer(transfer, device)

    # Called by the notification center when the user clicks a button
    orchestrator.user_response(transfer.id, UserAction.ACCEPT)

    # Called by the transport once the transfer is over
    orchestrator.transfer_finished(transfer.id, error=None)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol, Union

from dropgate.constants import (
    APP_NAME,
    DEVICE_SENDING_FILES_FORMAT,
    PIN_CODE_FORMAT,
    RECEIVING_FILES_FORMAT,
    TRANSFER_ID_KEY,
)
from dropgate.core.notifications.presenter import NotificationPresenter
from dropgate.core.transfer.errors import ErrorTranslator
from dropgate.core.transfer.models import (
    RemoteDeviceInfo,
    TransferMetadata,
    TransferSession,
    TransferState,
    UserAction,
)
from dropgate.core.transfer.policy import PolicyDecision, decide
from dropgate.core.transfer.registry import ConsentRegistry
from dropgate.exceptions import ErrorKind

logger = logging.getLogger(__name__)

TransferFailure = Union[ErrorKind, BaseException]


class ConsentTransport(Protocol):
    """The part of the transport that receives consent decisions."""

    def submit_consent(self, transfer_id: str, accept: bool) -> None:
        ...


class Orchestrator:
    """
    Drives the per-transfer consent state machine.

    A transfer is offered, then either auto-accepted or held until the
    user responds. Declining removes it immediately; otherwise it stays
    registered until the transport reports that it finished.

    The transport and presenter are never called while the registry
    lock is held.
    """

    def __init__(
        self,
        transport: ConsentTransport,
        presenter: NotificationPresenter,
        registry: Optional[ConsentRegistry] = None,
        auto_accept: Callable[[], bool] = lambda: False,
        translator: Optional[ErrorTranslator] = None,
        app_name: str = APP_NAME,
    ):
        """
        Initialize the orchestrator.

        Args:
            transport: Receives submit_consent() calls.
            presenter: Posts and removes notifications.
            registry: Registry of active transfers. A new one is created
                     if not given.
            auto_accept: Returns the current auto-accept setting. Called
                        once for every new offer.
            translator: Maps transport failures to messages.
            app_name: Title of transfer prompts.
        """
        self._transport = transport
        self._presenter = presenter
        self._registry = registry if registry is not None else ConsentRegistry()
        self._auto_accept = auto_accept
        self._translator = translator or ErrorTranslator()
        self._app_name = app_name

        self._on_resolved: list[Callable[[TransferSession], None]] = []

    @property
    def registry(self) -> ConsentRegistry:
        """Registry of active transfers."""
        return self._registry

    def on_session_resolved(self, callback: Callable[[TransferSession], None]) -> None:
        """
        Register callback for resolved transfers.

        The callback is called with the session once it has been removed
        from the registry as DECLINED, COMPLETED or FAILED.

        Args:
            callback: Function to call with the resolved session.
        """
        self._on_resolved.append(callback)

    def active_sessions(self) -> list[TransferSession]:
        """Snapshot of all transfers that are not resolved yet."""
        return self._registry.sessions()

    def offer(self, transfer: TransferMetadata, device: RemoteDeviceInfo) -> None:
        """
        Handle a new transfer offer from the transport.

        With auto-accept on, consent is sent right away and an
        informational notification is shown. Otherwise the user is
        prompted and nothing is sent until they respond.
        """
        decision = decide(self._auto_accept())
        session = TransferSession(transfer=transfer, device=device)

        if decision is PolicyDecision.AUTO_ACCEPT:
            session.advance(TransferState.AUTO_ACCEPTED)
            session.consent = True
        else:
            session.advance(TransferState.PENDING_USER_CHOICE)

        if not self._registry.put_if_absent(session):
            logger.warning(f"Ignoring duplicate offer for active transfer {transfer.id}")
            return

        logger.info(
            f"Transfer {transfer.id} offered by {device.name}: "
            f"{transfer.summary} ({decision.value})"
        )

        subtitle = None
        if transfer.pin_code:
            subtitle = PIN_CODE_FORMAT.format(pin=transfer.pin_code)

        # Post before consenting: the transport may finish the transfer
        # as soon as it has consent
        if decision is PolicyDecision.AUTO_ACCEPT:
            self._presenter.present(
                transfer.id,
                self._app_name,
                subtitle,
                RECEIVING_FILES_FORMAT.format(files=transfer.summary, device=device.name),
                actionable=False,
            )
            self._transport.submit_consent(transfer.id, True)
        else:
            self._presenter.present(
                transfer.id,
                self._app_name,
                subtitle,
                DEVICE_SENDING_FILES_FORMAT.format(device=device.name, files=transfer.summary),
                actionable=True,
            )

        if self._registry.get(transfer.id) is not session:
            # Finished before the notification was posted
            logger.debug(f"Transfer {transfer.id} resolved during offer, removing its notification")
            self._presenter.remove_delivered([self._presenter.notification_id(transfer.id)])

    def user_response(self, transfer_id: str, action: UserAction) -> None:
        """
        Handle the user's answer to a transfer prompt.

        Only transfers waiting for the user are affected; responses for
        anything else are ignored. Any response other than ACCEPT
        declines the transfer.
        """
        if action is UserAction.ACCEPT:
            session = self._registry.transition(
                transfer_id,
                TransferState.PENDING_USER_CHOICE,
                TransferState.ACCEPTED,
            )
            if session is None:
                logger.debug(f"Ignoring accept for transfer {transfer_id}: not pending")
                return
            session.consent = True
            logger.info(f"User accepted transfer {transfer_id}")
            self._transport.submit_consent(transfer_id, True)
            return

        session = self._registry.remove_if_present(
            transfer_id,
            expected_state=TransferState.PENDING_USER_CHOICE,
        )
        if session is None:
            logger.debug(f"Ignoring {action.value} for transfer {transfer_id}: not pending")
            return

        session.advance(TransferState.DECLINED)
        session.consent = False
        logger.info(f"User declined transfer {transfer_id} ({action.value})")
        self._transport.submit_consent(transfer_id, False)
        self._presenter.remove_delivered([self._presenter.notification_id(transfer_id)])
        self._fire_resolved(session)

    def handle_notification_response(
        self,
        user_info: dict[str, Any],
        action_identifier: Optional[str],
    ) -> None:
        """
        Route a response delivered by the notification center.

        Args:
            user_info: Payload of the notification the user acted on.
            action_identifier: Identifier of the chosen action, or of the
                              dismiss/default action.
        """
        transfer_id = user_info.get(TRANSFER_ID_KEY)
        if not isinstance(transfer_id, str):
            logger.warning(f"Notification response without a transfer ID: {user_info!r}")
            return
        self.user_response(transfer_id, UserAction.from_identifier(action_identifier))

    def transfer_finished(
        self,
        transfer_id: str,
        error: Optional[TransferFailure] = None,
    ) -> None:
        """
        Handle the end of a transfer reported by the transport.

        Repeated calls, and calls for transfers that were declined, are
        ignored.
        """
        session = self._registry.remove_if_present(transfer_id)
        if session is None:
            logger.debug(f"Ignoring finish for transfer {transfer_id}: not active")
            return

        if error is None:
            session.advance(TransferState.COMPLETED)
            logger.info(f"Transfer {transfer_id} from {session.device.name} completed")
        else:
            session.advance(TransferState.FAILED)
            logger.warning(f"Transfer {transfer_id} from {session.device.name} failed: {error}")
            message = self._translate(error, transfer_id)
            if message is not None:
                self._presenter.present_error(transfer_id, session.device.name, message)

        self._presenter.remove_delivered([self._presenter.notification_id(transfer_id)])
        self._fire_resolved(session)

    def shutdown(self) -> None:
        """Forget all active transfers and clear delivered notifications."""
        sessions = self._registry.clear()
        if sessions:
            logger.info(f"Shutting down with {len(sessions)} unresolved transfer(s)")
        self._presenter.remove_all_delivered()

    def _translate(self, error: TransferFailure, transfer_id: str) -> Optional[str]:
        try:
            return self._translator.translate(error, transfer_id=transfer_id)
        except Exception:
            logger.exception(f"Failed to translate error for transfer {transfer_id}")
            return str(error) or type(error).__name__

    def _fire_resolved(self, session: TransferSession) -> None:
        for callback in self._on_resolved:
            try:
                callback(session)
            except Exception as e:
                logger.warning(f"Error in resolved callback: {e}")
