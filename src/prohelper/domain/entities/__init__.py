"""Domain entities for the ProHelper invitations client.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from prohelper.domain.entities.invitation import (
    AcceptResult,
    ConnectedContractor,
    Invitation,
    InvitationStatus,
    InvitedBy,
    OrganizationInfo,
    mark_accepted,
    mark_declined,
)
from prohelper.domain.entities.invitation_list import (
    InvitationFilters,
    InvitationPage,
    Pagination,
)
from prohelper.domain.entities.invitation_stats import (
    Counters,
    InvitationStats,
    as_percent,
)

__all__ = [
    "AcceptResult",
    "ConnectedContractor",
    "Counters",
    "Invitation",
    "InvitationFilters",
    "InvitationPage",
    "InvitationStats",
    "InvitationStatus",
    "InvitedBy",
    "OrganizationInfo",
    "Pagination",
    "as_percent",
    "mark_accepted",
    "mark_declined",
]
