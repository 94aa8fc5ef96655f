"""
Dropgate - Consent handling for incoming nearby-share transfers.

This package decides what happens when a nearby device offers to send
files or text: it prompts the user (or auto-accepts), reports the
decision back to the transport, and shows the outcome.
"""

from dropgate.constants import VERSION

__version__ = VERSION
__author__ = "Dropgate Contributors"

from dropgate.core.transfer import (
    ConsentRegistry,
    Orchestrator,
    RemoteDeviceInfo,
    TransferMetadata,
    UserAction,
)

__all__ = [
    "ConsentRegistry",
    "Orchestrator",
    "RemoteDeviceInfo",
    "TransferMetadata",
    "UserAction",
    "__version__",
]
