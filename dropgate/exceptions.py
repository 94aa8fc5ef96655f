"""
Custom exceptions for the Dropgate package.

All Dropgate-specific exceptions inherit from DropgateError to allow
catching all package exceptions with a single except clause.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from dropgate.core.transfer.models import TransferState


class DropgateError(Exception):
    """Base exception for all Dropgate errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


# Transfer errors
class TransferError(DropgateError):
    """Base class for incoming transfer errors."""

    pass


class ErrorKind(Enum):
    """Failure kinds a transport can report for an incoming transfer."""

    IO = "io"
    PROTOCOL = "protocol"
    REQUIRED_FIELD_MISSING = "required_field_missing"
    CRYPTO = "crypto"
    CANCELED = "canceled"


class TransportError(TransferError):
    """A transfer failed inside the transport."""

    def __init__(self, kind: ErrorKind, description: Optional[str] = None):
        self.kind = kind
        self.description = description
        super().__init__(
            f"Transport error ({kind.value})",
            description,
        )


class InvalidStateTransitionError(TransferError):
    """A transfer session was asked to move to a state it cannot reach."""

    def __init__(
        self,
        transfer_id: str,
        current: TransferState,
        target: TransferState,
    ):
        self.transfer_id = transfer_id
        self.current = current
        self.target = target
        super().__init__(
            "Invalid state transition",
            f"Transfer {transfer_id}: {current.value} -> {target.value}"
        )


# Configuration errors
class ConfigError(DropgateError):
    """Configuration could not be read or written."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        details = f"File: {path}"
        if reason:
            details += f", Reason: {reason}"
        super().__init__("Configuration error", details)
