"""
Data models for incoming transfers.

This module defines the information a transport hands over when a nearby
device offers a transfer, and the session object that tracks the offer
until it is resolved.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from dropgate.constants import ACTION_ACCEPT, ACTION_DECLINE, N_FILES_FORMAT
from dropgate.exceptions import InvalidStateTransitionError


class TransferState(Enum):
    """State of an incoming transfer session."""

    OFFERED = "offered"
    AUTO_ACCEPTED = "auto_accepted"
    PENDING_USER_CHOICE = "pending_user_choice"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_final(self) -> bool:
        """Whether no further transition is possible."""
        return not _TRANSITIONS[self]

    def can_transition_to(self, target: TransferState) -> bool:
        """Check whether moving to target is allowed."""
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[TransferState, frozenset[TransferState]] = {
    TransferState.OFFERED: frozenset({
        TransferState.AUTO_ACCEPTED,
        TransferState.PENDING_USER_CHOICE,
    }),
    TransferState.AUTO_ACCEPTED: frozenset({
        TransferState.COMPLETED,
        TransferState.FAILED,
    }),
    TransferState.PENDING_USER_CHOICE: frozenset({
        TransferState.ACCEPTED,
        TransferState.DECLINED,
        TransferState.COMPLETED,
        TransferState.FAILED,
    }),
    TransferState.ACCEPTED: frozenset({
        TransferState.COMPLETED,
        TransferState.FAILED,
    }),
    TransferState.DECLINED: frozenset(),
    TransferState.COMPLETED: frozenset(),
    TransferState.FAILED: frozenset(),
}


class UserAction(Enum):
    """Response a user gave to a transfer prompt."""

    ACCEPT = "accept"
    DECLINE = "decline"
    OTHER = "other"

    @classmethod
    def from_identifier(cls, identifier: Optional[str]) -> UserAction:
        """
        Map a notification action identifier to a UserAction.

        Anything that is not an explicit accept or decline (dismissing
        the notification, clicking its body, expiry) maps to OTHER.
        """
        if identifier == ACTION_ACCEPT:
            return cls.ACCEPT
        if identifier == ACTION_DECLINE:
            return cls.DECLINE
        return cls.OTHER


@dataclass(frozen=True)
class RemoteDeviceInfo:
    """
    The peer device offering a transfer.

    Attributes:
        id: Device identifier announced by the peer
        name: Human-readable device name (e.g., "Pixel 8")
    """

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class FileInfo:
    """A single file announced in a transfer offer."""

    name: str
    size: int = 0


@dataclass(frozen=True)
class TransferMetadata:
    """
    What a peer is offering to send.

    Attributes:
        id: Transfer identifier, unique among active transfers
        pin_code: Verification code shown to the user, if any
        text_description: Set when the peer is sending text instead of files
        files: Files in the order the peer announced them
    """

    id: str
    pin_code: Optional[str] = None
    text_description: Optional[str] = None
    files: tuple[FileInfo, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable one
        object.__setattr__(self, "files", tuple(self.files))

    @property
    def total_size(self) -> int:
        """Sum of all announced file sizes in bytes."""
        return sum(f.size for f in self.files)

    @property
    def summary(self) -> str:
        """Short description of the payload for notifications."""
        if self.text_description:
            return self.text_description
        if len(self.files) == 1:
            return self.files[0].name
        return N_FILES_FORMAT.format(count=len(self.files))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "pin_code": self.pin_code,
            "text_description": self.text_description,
            "files": [{"name": f.name, "size": f.size} for f in self.files],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransferMetadata:
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            pin_code=data.get("pin_code"),
            text_description=data.get("text_description"),
            files=tuple(
                FileInfo(name=f["name"], size=int(f.get("size", 0)))
                for f in data.get("files", [])
            ),
        )


@dataclass
class TransferSession:
    """
    Tracks one transfer offer from arrival until it is resolved.

    Sessions are created by the orchestrator and only change state
    through advance(), which rejects moves the state machine does not
    allow.
    """

    transfer: TransferMetadata
    device: RemoteDeviceInfo
    state: TransferState = TransferState.OFFERED
    created_at: float = field(default_factory=time.time)
    consent: Optional[bool] = None

    @property
    def transfer_id(self) -> str:
        """Identifier of the underlying transfer."""
        return self.transfer.id

    def advance(self, target: TransferState) -> None:
        """
        Move the session to a new state.

        Raises:
            InvalidStateTransitionError: If the move is not allowed.
        """
        if not self.state.can_transition_to(target):
            raise InvalidStateTransitionError(self.transfer_id, self.state, target)
        self.state = target

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "transfer": self.transfer.to_dict(),
            "device": self.device.to_dict(),
            "state": self.state.value,
            "created_at": self.created_at,
            "consent": self.consent,
        }
