"""
Dropgate core library modules.

This package contains the consent flow for incoming transfers and the
notifications it shows.
"""

from dropgate.core.notifications import NotificationPresenter
from dropgate.core.transfer import ConsentRegistry, Orchestrator

__all__ = [
    "ConsentRegistry",
    "NotificationPresenter",
    "Orchestrator",
]
