"""
Registry of in-flight incoming transfers.

The registry is the only shared mutable state in the consent flow. User
responses and transport callbacks may arrive on different threads, so
every operation runs under the registry's own lock, and the
check-and-remove / check-and-advance operations are atomic.

Example:
    registry = ConsentRegistry()
    registry.put(session.transfer_id, session)

    # Whichever caller removes first wins, the other gets None
    session = registry.remove_if_present("t1")
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional

from dropgate.core.transfer.models import TransferSession, TransferState

logger = logging.getLogger(__name__)


class ConsentRegistry:
    """
    Thread-safe map of transfer ID to TransferSession.

    No operation raises for an unknown transfer ID; lookups and removals
    simply return None.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, TransferSession] = {}
        self._lock = threading.RLock()

    def put(self, transfer_id: str, session: TransferSession) -> None:
        """Insert a session, replacing any existing one with the same ID."""
        with self._lock:
            self._sessions[transfer_id] = session

    def put_if_absent(self, session: TransferSession) -> bool:
        """
        Insert a session unless its transfer ID is already active.

        Returns:
            True if the session was inserted.
        """
        with self._lock:
            if session.transfer_id in self._sessions:
                return False
            self._sessions[session.transfer_id] = session
            return True

    def get(self, transfer_id: str) -> Optional[TransferSession]:
        """Get the active session for a transfer, if any."""
        with self._lock:
            return self._sessions.get(transfer_id)

    def remove_if_present(
        self,
        transfer_id: str,
        expected_state: Optional[TransferState] = None,
    ) -> Optional[TransferSession]:
        """
        Atomically remove a session.

        Args:
            transfer_id: Transfer to remove.
            expected_state: If given, only remove the session while it is
                           in this state.

        Returns:
            The removed session, or None if nothing was removed.
        """
        with self._lock:
            session = self._sessions.get(transfer_id)
            if session is None:
                return None
            if expected_state is not None and session.state != expected_state:
                return None
            del self._sessions[transfer_id]
            return session

    def transition(
        self,
        transfer_id: str,
        expected_state: TransferState,
        new_state: TransferState,
    ) -> Optional[TransferSession]:
        """
        Atomically advance a session that is in an expected state.

        Returns:
            The session after advancing, or None if it is absent or in a
            different state.

        Raises:
            InvalidStateTransitionError: If expected_state cannot move to
                                        new_state.
        """
        with self._lock:
            session = self._sessions.get(transfer_id)
            if session is None or session.state != expected_state:
                return None
            session.advance(new_state)
            return session

    def active_ids(self) -> list[str]:
        """IDs of all active transfers, oldest first."""
        with self._lock:
            return list(self._sessions)

    def sessions(self) -> list[TransferSession]:
        """Snapshot of all active sessions, oldest first."""
        with self._lock:
            return list(self._sessions.values())

    def clear(self) -> list[TransferSession]:
        """Remove and return every active session."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        if sessions:
            logger.debug(f"Cleared {len(sessions)} active transfer(s)")
        return sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, transfer_id: object) -> bool:
        with self._lock:
            return transfer_id in self._sessions

    def __iter__(self) -> Iterator[str]:
        return iter(self.active_ids())
