"""Pytest configuration and shared factories for all tests."""

from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from prohelper.domain.entities import (
    Invitation,
    InvitationPage,
    InvitationStatus,
    InvitedBy,
    OrganizationInfo,
    Pagination,
)
from prohelper.domain.services.invitation_gateway import InvitationGateway

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_invitation(invitation_id: int = 1, **overrides: Any) -> Invitation:
    """Build a pending, acceptable invitation expiring in a week."""
    fields: dict[str, Any] = {
        "id": invitation_id,
        "token": f"token-{invitation_id}",
        "status": InvitationStatus.PENDING,
        "invitation_message": "Join our residential project",
        "created_at": NOW - timedelta(days=1),
        "expires_at": NOW + timedelta(days=7),
        "is_expired": False,
        "can_be_accepted": True,
        "from_organization": OrganizationInfo(
            id=10, name="StroyGroup", city="Moscow", is_verified=True
        ),
        "invited_by": InvitedBy(name="Ivan Petrov", email="ivan@stroygroup.example"),
        "metadata": {"project_type": "residential"},
    }
    fields.update(overrides)
    return Invitation(**fields)


def make_page(
    items: list[Invitation],
    current_page: int = 1,
    last_page: int = 1,
    total: int | None = None,
    per_page: int = 15,
) -> InvitationPage:
    return InvitationPage(
        items=tuple(items),
        pagination=Pagination(
            current_page=current_page,
            last_page=last_page,
            per_page=per_page,
            total=total if total is not None else len(items),
            has_more=current_page < last_page,
        ),
    )


def invitation_payload(invitation_id: int = 1, **overrides: Any) -> dict[str, Any]:
    """Build an invitation as the backend serializes it."""
    payload: dict[str, Any] = {
        "id": invitation_id,
        "token": f"token-{invitation_id}",
        "status": "pending",
        "invitation_message": "Join our residential project",
        "created_at": "2025-03-09T12:00:00.000000Z",
        "expires_at": "2025-03-17T12:00:00.000000Z",
        "accepted_at": None,
        "declined_at": None,
        "is_expired": False,
        "can_be_accepted": True,
        "from_organization": {
            "id": 10,
            "name": "StroyGroup",
            "legal_name": "StroyGroup LLC",
            "city": "Moscow",
            "is_verified": True,
            "logo_path": None,
            "contractor_connections_count": 4,
        },
        "invited_by": {"name": "Ivan Petrov", "email": "ivan@stroygroup.example"},
        "metadata": {"project_type": "residential", "budget_range": "1-5M"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Gateway mock constrained to the InvitationGateway interface."""
    return AsyncMock(spec=InvitationGateway)
