"""
Incoming transfer module for Dropgate.

This module tracks transfer offers from nearby devices and resolves each
one exactly once, either through the user's consent or the auto-accept
policy.

Example:
    from dropgate.core.transfer import Orchestrator, UserAction

    orchestrator = Orchestrator(transport, presenter)
    orchestrator.offer(transfer, device)
    orchestrator.user_response(transfer.id, UserAction.ACCEPT)
"""

from dropgate.core.transfer.errors import ErrorTranslator
from dropgate.core.transfer.models import (
    FileInfo,
    RemoteDeviceInfo,
    TransferMetadata,
    TransferSession,
    TransferState,
    UserAction,
)
from dropgate.core.transfer.orchestrator import ConsentTransport, Orchestrator
from dropgate.core.transfer.policy import PolicyDecision, decide
from dropgate.core.transfer.registry import ConsentRegistry

__all__ = [
    "ConsentRegistry",
    "ConsentTransport",
    "ErrorTranslator",
    "FileInfo",
    "Orchestrator",
    "PolicyDecision",
    "RemoteDeviceInfo",
    "TransferMetadata",
    "TransferSession",
    "TransferState",
    "UserAction",
    "decide",
]
