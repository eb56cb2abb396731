"""Domain services for the ProHelper invitations client.

Services contain logic that doesn't naturally fit within a single entity.
They have no dependencies on infrastructure or external frameworks.
"""

from prohelper.domain.services.expiry_calculator import (
    days_until_expiry,
    is_expiring_soon,
    is_past_expiry,
    time_until_expiry,
)
from prohelper.domain.services.invitation_gateway import InvitationGateway

__all__ = [
    "InvitationGateway",
    "days_until_expiry",
    "is_expiring_soon",
    "is_past_expiry",
    "time_until_expiry",
]
