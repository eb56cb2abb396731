"""Invitation statistics entities.

Rates are fractions in ``[0, 1]`` and are ``0.0`` when there is nothing to
count. ``as_percent`` converts them for display.
"""

import math
from dataclasses import dataclass


def _ratio(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return part / total


def as_percent(rate: float) -> int:
    """Round a rate to a whole percentage, halves rounding up.

    Example:
        as_percent(0.6) == 60
        as_percent(0.125) == 13
    """
    return math.floor(rate * 100 + 0.5)


@dataclass(frozen=True)
class Counters:
    """Tally of invitations by outcome.

    Attributes:
        total: All invitations counted.
        pending: Invitations awaiting a response.
        accepted: Accepted invitations.
        declined: Declined invitations.
    """

    total: int = 0
    pending: int = 0
    accepted: int = 0
    declined: int = 0

    def __post_init__(self) -> None:
        for name in ("total", "pending", "accepted", "declined"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @property
    def success_rate(self) -> float:
        return _ratio(self.accepted, self.total)

    @property
    def pending_rate(self) -> float:
        return _ratio(self.pending, self.total)

    @property
    def decline_rate(self) -> float:
        return _ratio(self.declined, self.total)


@dataclass(frozen=True)
class InvitationStats:
    """Snapshot of received and sent invitation counters."""

    received_invitations: Counters
    sent_invitations: Counters

    @property
    def total_invitations(self) -> int:
        return self.received_invitations.total + self.sent_invitations.total

    @property
    def total_accepted(self) -> int:
        return self.received_invitations.accepted + self.sent_invitations.accepted

    @property
    def overall_success_rate(self) -> float:
        """Accepted share across both received and sent invitations."""
        return _ratio(self.total_accepted, self.total_invitations)
