"""Contractor invitation entity.

An invitation is a time-bounded offer of a contractor relationship from one
organization to another. The backend owns the lifecycle; the client holds
immutable snapshots and only patches them through ``mark_accepted`` and
``mark_declined`` after the backend confirmed the action.

State machine::

    pending -> accepted   (terminal)
    pending -> declined   (terminal)
    pending -> expired    (terminal, decided by the backend)
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, assert_never

from prohelper.domain.exceptions import InvitationStateError


class InvitationStatus(str, Enum):
    """Lifecycle status of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self is not InvitationStatus.PENDING

    @property
    def label(self) -> str:
        """Human-readable status label."""
        match self:
            case InvitationStatus.PENDING:
                return "Awaiting response"
            case InvitationStatus.ACCEPTED:
                return "Accepted"
            case InvitationStatus.DECLINED:
                return "Declined"
            case InvitationStatus.EXPIRED:
                return "Expired"
            case _:
                assert_never(self)

    @property
    def badge_style(self) -> str:
        """Badge style name used when rendering the status."""
        match self:
            case InvitationStatus.PENDING:
                return "warning"
            case InvitationStatus.ACCEPTED:
                return "success"
            case InvitationStatus.DECLINED:
                return "muted"
            case InvitationStatus.EXPIRED:
                return "inactive"
            case _:
                assert_never(self)


@dataclass(frozen=True)
class OrganizationInfo:
    """Read-only snapshot of the inviting organization.

    Attributes:
        id: Organization identifier.
        name: Display name.
        city: City the organization is registered in.
        is_verified: Whether the organization passed verification.
        legal_name: Registered legal name (optional).
        country: Country (optional).
        description: Free-form description (optional).
        logo_path: Path or URL of the logo (optional).
        contractor_connections_count: Number of existing contractor links (optional).
    """

    id: int
    name: str
    city: str = ""
    is_verified: bool = False
    legal_name: str | None = None
    country: str | None = None
    description: str | None = None
    logo_path: str | None = None
    contractor_connections_count: int | None = None


@dataclass(frozen=True)
class InvitedBy:
    """The user who sent the invitation."""

    name: str
    email: str


@dataclass(frozen=True)
class Invitation:
    """Immutable snapshot of a contractor invitation.

    ``is_expired`` and ``can_be_accepted`` are computed by the backend and are
    the authoritative guards for issuing actions. The expiry timestamps are
    only used for display timing.

    Attributes:
        id: Stable invitation identifier.
        status: Current lifecycle status.
        invitation_message: Message written by the inviter.
        created_at: When the invitation was created.
        expires_at: When the invitation stops being acceptable.
        from_organization: Inviting organization snapshot.
        invited_by: Inviting user snapshot.
        token: Credential granting accept/decline rights (only for the addressee).
        accepted_at: When the invitation was accepted.
        declined_at: When the invitation was declined.
        decline_reason: Optional reason given when declining.
        is_expired: Backend-computed expiry flag.
        can_be_accepted: Backend-computed acceptability flag.
        metadata: Open key-value bag (project type, budget range, ...).
    """

    id: int
    status: InvitationStatus
    invitation_message: str
    created_at: datetime
    expires_at: datetime
    from_organization: OrganizationInfo
    invited_by: InvitedBy
    token: str | None = None
    accepted_at: datetime | None = None
    declined_at: datetime | None = None
    decline_reason: str | None = None
    is_expired: bool = False
    can_be_accepted: bool = False
    metadata: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the state machine invariants."""
        if self.status is InvitationStatus.ACCEPTED:
            if self.accepted_at is None:
                raise InvitationStateError("Accepted invitation requires accepted_at")
            if self.declined_at is not None or self.decline_reason is not None:
                raise InvitationStateError("Accepted invitation cannot carry decline data")
        if self.status is InvitationStatus.DECLINED:
            if self.declined_at is None:
                raise InvitationStateError("Declined invitation requires declined_at")
            if self.accepted_at is not None:
                raise InvitationStateError("Declined invitation cannot carry accepted_at")
        if self.can_be_accepted and (
            self.status is not InvitationStatus.PENDING or self.is_expired
        ):
            raise InvitationStateError(
                "Only pending, unexpired invitations can be acceptable"
            )

    @property
    def is_pending(self) -> bool:
        """Check if the invitation is still awaiting a response."""
        return self.status is InvitationStatus.PENDING

    @property
    def project_type(self) -> str | None:
        return self.metadata.get("project_type")

    @property
    def budget_range(self) -> str | None:
        return self.metadata.get("budget_range")


@dataclass(frozen=True)
class ConnectedContractor:
    """Contractor linkage created by accepting an invitation."""

    id: int
    name: str
    connected_at: datetime


@dataclass(frozen=True)
class AcceptResult:
    """Backend confirmation of an accepted invitation."""

    contractor: ConnectedContractor
    message: str


def _require_pending(invitation: Invitation, at: datetime) -> None:
    if invitation.status.is_terminal:
        raise InvitationStateError(
            f"Invitation {invitation.id} is already {invitation.status.value}"
        )
    if at.tzinfo is None:
        raise ValueError("Transition timestamp must be timezone-aware")


def mark_accepted(invitation: Invitation, at: datetime) -> Invitation:
    """Return a copy of a pending invitation moved to ``accepted``.

    Args:
        invitation: The pending invitation the backend just accepted.
        at: Acceptance timestamp (timezone-aware).

    Returns:
        A new Invitation with status, accepted_at and guard flags updated.

    Raises:
        InvitationStateError: If the invitation is not pending.
    """
    _require_pending(invitation, at)
    return replace(
        invitation,
        status=InvitationStatus.ACCEPTED,
        accepted_at=at,
        declined_at=None,
        decline_reason=None,
        can_be_accepted=False,
    )


def mark_declined(
    invitation: Invitation, at: datetime, reason: str | None = None
) -> Invitation:
    """Return a copy of a pending invitation moved to ``declined``.

    An empty reason is stored as no reason.

    Raises:
        InvitationStateError: If the invitation is not pending.
    """
    _require_pending(invitation, at)
    return replace(
        invitation,
        status=InvitationStatus.DECLINED,
        declined_at=at,
        decline_reason=reason or None,
        accepted_at=None,
        can_be_accepted=False,
    )
