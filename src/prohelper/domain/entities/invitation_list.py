"""Filter and pagination entities for incoming invitation lists."""

from dataclasses import dataclass, replace
from datetime import date

from prohelper.domain.entities.invitation import Invitation, InvitationStatus


@dataclass(frozen=True)
class InvitationFilters:
    """Filter set for the incoming invitations list.

    Instances are immutable; use the ``with_*`` helpers to derive a new
    filter set. Any change to the filters invalidates the loaded pages.

    Attributes:
        status: Only return invitations in this status.
        date_from: Only return invitations created on or after this date.
        date_to: Only return invitations created on or before this date.
        per_page: Page size requested from the backend.
    """

    status: InvitationStatus | None = None
    date_from: date | None = None
    date_to: date | None = None
    per_page: int | None = None

    def __post_init__(self) -> None:
        if self.per_page is not None and self.per_page <= 0:
            raise ValueError("per_page must be positive")
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")

    def with_status(self, status: InvitationStatus | None) -> "InvitationFilters":
        return replace(self, status=status)

    def with_date_range(
        self, date_from: date | None = None, date_to: date | None = None
    ) -> "InvitationFilters":
        return replace(self, date_from=date_from, date_to=date_to)

    def with_per_page(self, per_page: int | None) -> "InvitationFilters":
        return replace(self, per_page=per_page)

    @classmethod
    def cleared(cls) -> "InvitationFilters":
        """Return an empty filter set."""
        return cls()

    def to_query_params(self) -> dict[str, str]:
        """Serialize the set fields to query parameters."""
        params: dict[str, str] = {}
        if self.status is not None:
            params["status"] = self.status.value
        if self.date_from is not None:
            params["date_from"] = self.date_from.isoformat()
        if self.date_to is not None:
            params["date_to"] = self.date_to.isoformat()
        if self.per_page is not None:
            params["per_page"] = str(self.per_page)
        return params


@dataclass(frozen=True)
class Pagination:
    """Pagination cursor reported by the backend."""

    current_page: int
    last_page: int
    per_page: int
    total: int
    has_more: bool


@dataclass(frozen=True)
class InvitationPage:
    """One page of incoming invitations."""

    items: tuple[Invitation, ...]
    pagination: Pagination
