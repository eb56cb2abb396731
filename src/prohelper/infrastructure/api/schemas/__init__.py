"""Pydantic schemas for backend payloads."""

from prohelper.infrastructure.api.schemas.invitation_schemas import (
    ApiErrorResponse,
    InvitationAcceptResponse,
    InvitationDeclineRequest,
    InvitationDeclineResponse,
    InvitationListResponse,
    InvitationSchema,
    InvitationStatsResponse,
)

__all__ = [
    "ApiErrorResponse",
    "InvitationAcceptResponse",
    "InvitationDeclineRequest",
    "InvitationDeclineResponse",
    "InvitationListResponse",
    "InvitationSchema",
    "InvitationStatsResponse",
]
