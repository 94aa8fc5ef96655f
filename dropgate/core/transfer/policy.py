"""Consent policy for incoming transfers."""

from __future__ import annotations

from enum import Enum


class PolicyDecision(Enum):
    """How a new offer should be handled."""

    AUTO_ACCEPT = "auto_accept"
    REQUIRE_USER_CHOICE = "require_user_choice"


def decide(auto_accept_enabled: bool) -> PolicyDecision:
    """
    Decide whether a new offer needs the user's consent.

    Called once per offer with the setting as it is at that moment, so
    changing the setting never affects offers that are already pending.
    """
    if auto_accept_enabled:
        return PolicyDecision.AUTO_ACCEPT
    return PolicyDecision.REQUIRE_USER_CHOICE
