"""
Translation of transport failures into user-facing messages.

Example:
    translator = ErrorTranslator()
    translator.translate(TransportError(ErrorKind.CRYPTO))  # "Encryption error"
    translator.translate(OSError("disk full"))              # "disk full"
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from dropgate.constants import (
    ERROR_MESSAGE_CRYPTO,
    ERROR_MESSAGE_IO,
    ERROR_MESSAGE_PROTOCOL,
)
from dropgate.exceptions import ErrorKind, TransportError

logger = logging.getLogger(__name__)


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.IO: ERROR_MESSAGE_IO,
    ErrorKind.PROTOCOL: ERROR_MESSAGE_PROTOCOL,
    ErrorKind.REQUIRED_FIELD_MISSING: ERROR_MESSAGE_PROTOCOL,
    ErrorKind.CRYPTO: ERROR_MESSAGE_CRYPTO,
}


class ErrorTranslator:
    """Maps errors reported by the transport to short user-facing messages."""

    def __init__(self, messages: Optional[dict[ErrorKind, str]] = None):
        self._messages = dict(ERROR_MESSAGES if messages is None else messages)

    def translate(
        self,
        error: Union[ErrorKind, BaseException],
        transfer_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Get the message to show for a failed transfer.

        Args:
            error: An ErrorKind, a TransportError, or any other exception
                  raised by the transport.
            transfer_id: Used for logging only.

        Returns:
            The message to show, or None if the error must not be shown
            to the user (a cancellation reported for an incoming transfer).
        """
        kind = error if isinstance(error, ErrorKind) else getattr(error, "kind", None)

        if kind is ErrorKind.CANCELED:
            # Incoming transfers are never canceled by the transport
            logger.error(
                f"Transport reported cancellation for incoming transfer "
                f"{transfer_id or '<unknown>'}"
            )
            return None

        if isinstance(kind, ErrorKind) and kind in self._messages:
            return self._messages[kind]

        return self.describe(error)

    @staticmethod
    def describe(error: Union[ErrorKind, BaseException]) -> str:
        """Human-readable description supplied by the error itself."""
        if isinstance(error, ErrorKind):
            return error.value.replace("_", " ").capitalize()
        if isinstance(error, TransportError) and error.description:
            return error.description
        return str(error) or type(error).__name__


__all__ = [
    "ERROR_MESSAGES",
    "ErrorTranslator",
]
