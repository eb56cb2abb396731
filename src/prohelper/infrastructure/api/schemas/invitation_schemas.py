"""Pydantic schemas for the contractor invitation API payloads.

The backend wraps most payloads in a ``{"data": ...}`` envelope. Schemas
ignore unknown fields and convert to domain entities via ``to_entity``.
Naive timestamps are interpreted as UTC.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from prohelper.domain.entities import (
    AcceptResult,
    ConnectedContractor,
    Counters,
    Invitation,
    InvitationPage,
    InvitationStats,
    InvitationStatus,
    InvitedBy,
    OrganizationInfo,
    Pagination,
)


def _assume_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class ApiModel(BaseModel):
    """Base schema for backend payloads."""

    model_config = ConfigDict(extra="ignore")


class OrganizationInfoSchema(ApiModel):
    """Inviting organization as sent by the backend."""

    id: int = Field(..., description="Organization ID")
    name: str = Field(..., description="Display name")
    legal_name: str | None = Field(None, description="Registered legal name")
    city: str = Field("", description="City")
    country: str | None = Field(None, description="Country")
    is_verified: bool = Field(False, description="Verification flag")
    description: str | None = Field(None, description="Organization description")
    logo_path: str | None = Field(None, description="Logo path or URL")
    contractor_connections_count: int | None = Field(
        None, description="Number of existing contractor connections"
    )

    def to_entity(self) -> OrganizationInfo:
        return OrganizationInfo(**self.model_dump())


class InvitedBySchema(ApiModel):
    """Inviting user."""

    name: str
    email: str

    def to_entity(self) -> InvitedBy:
        return InvitedBy(name=self.name, email=self.email)


class InvitationSchema(ApiModel):
    """Contractor invitation payload."""

    id: int = Field(..., description="Invitation ID")
    token: str | None = Field(None, description="Token granting accept/decline rights")
    status: InvitationStatus = Field(..., description="Current invitation status")
    invitation_message: str | None = Field(None, description="Message from the inviter")
    created_at: UtcDatetime = Field(..., description="Creation timestamp")
    expires_at: UtcDatetime = Field(..., description="Expiration timestamp")
    accepted_at: UtcDatetime | None = Field(None, description="Acceptance timestamp")
    declined_at: UtcDatetime | None = Field(None, description="Decline timestamp")
    decline_reason: str | None = Field(None, description="Reason given when declining")
    is_expired: bool = Field(False, description="Backend-computed expiry flag")
    can_be_accepted: bool = Field(False, description="Backend-computed acceptability flag")
    from_organization: OrganizationInfoSchema
    invited_by: InvitedBySchema
    metadata: dict[str, Any] | None = Field(None, description="Open key-value bag")

    def to_entity(self) -> Invitation:
        """Convert to the domain entity.

        Raises:
            InvitationStateError: If the payload violates the state machine.
        """
        return Invitation(
            id=self.id,
            token=self.token or None,
            status=self.status,
            invitation_message=self.invitation_message or "",
            created_at=self.created_at,
            expires_at=self.expires_at,
            accepted_at=self.accepted_at,
            declined_at=self.declined_at,
            decline_reason=self.decline_reason or None,
            is_expired=self.is_expired,
            can_be_accepted=self.can_be_accepted,
            from_organization=self.from_organization.to_entity(),
            invited_by=self.invited_by.to_entity(),
            metadata=dict(self.metadata or {}),
        )


class PaginationSchema(ApiModel):
    """Pagination block of the list response."""

    current_page: int = 1
    last_page: int = 1
    per_page: int = 15
    total: int = 0
    has_more_pages: bool = False

    def to_entity(self) -> Pagination:
        return Pagination(
            current_page=self.current_page,
            last_page=self.last_page,
            per_page=self.per_page,
            total=self.total,
            has_more=self.has_more_pages,
        )


class InvitationListResponse(ApiModel):
    """Body of ``GET /contractor-invitations`` inside the data envelope."""

    data: list[InvitationSchema] = Field(default_factory=list)
    pagination: PaginationSchema = Field(default_factory=PaginationSchema)

    def to_entity(self) -> InvitationPage:
        return InvitationPage(
            items=tuple(item.to_entity() for item in self.data),
            pagination=self.pagination.to_entity(),
        )


class ConnectedContractorSchema(ApiModel):
    id: int
    name: str
    connected_at: UtcDatetime


class InvitationAcceptResponse(ApiModel):
    """Body of the accept endpoint inside the data envelope."""

    contractor: ConnectedContractorSchema
    message: str = ""

    def to_entity(self) -> AcceptResult:
        return AcceptResult(
            contractor=ConnectedContractor(
                id=self.contractor.id,
                name=self.contractor.name,
                connected_at=self.contractor.connected_at,
            ),
            message=self.message,
        )


class InvitationDeclineRequest(BaseModel):
    """Request body for the decline endpoint."""

    reason: str | None = None


class InvitationDeclineResponse(ApiModel):
    message: str = ""


class CountersSchema(ApiModel):
    total: int = 0
    pending: int = 0
    accepted: int = 0
    declined: int = 0

    def to_entity(self) -> Counters:
        return Counters(**self.model_dump())


class InvitationStatsResponse(ApiModel):
    """Body of the stats endpoint inside the data envelope."""

    received_invitations: CountersSchema = Field(default_factory=CountersSchema)
    sent_invitations: CountersSchema = Field(default_factory=CountersSchema)

    def to_entity(self) -> InvitationStats:
        return InvitationStats(
            received_invitations=self.received_invitations.to_entity(),
            sent_invitations=self.sent_invitations.to_entity(),
        )


class ApiErrorResponse(ApiModel):
    """Error body returned by the backend."""

    success: bool = False
    message: str | None = None
    errors: dict[str, list[str]] | None = None
