"""Notification badge state for pending invitations.

Notifications are derived from a list controller that loads pending
invitations. Dismissals only hide an invitation locally for the lifetime of
this object; the invitation stays pending on the backend.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from prohelper.application.services.invitation_list_controller import (
    InvitationListController,
)
from prohelper.domain.entities import Invitation, InvitationFilters, InvitationStatus
from prohelper.domain.services.expiry_calculator import (
    DEFAULT_EXPIRING_SOON_WINDOW,
    is_expiring_soon,
)
from prohelper.domain.services.invitation_gateway import InvitationGateway

NOTIFICATION_PER_PAGE = 10
DEFAULT_BADGE_CAP = 99

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotificationAggregator:
    """Derives active and urgent notifications with a local dismissal set."""

    def __init__(
        self,
        list_controller: InvitationListController,
        clock: Clock = utc_now,
        expiring_soon_window: timedelta = DEFAULT_EXPIRING_SOON_WINDOW,
        badge_cap: int = DEFAULT_BADGE_CAP,
    ) -> None:
        self.list_controller = list_controller
        self.clock = clock
        self.expiring_soon_window = expiring_soon_window
        self.badge_cap = badge_cap
        self._dismissed: set[int] = set()

    @classmethod
    def for_gateway(
        cls,
        gateway: InvitationGateway,
        per_page: int = NOTIFICATION_PER_PAGE,
        **kwargs,
    ) -> "NotificationAggregator":
        """Build an aggregator over a fresh pending-only list controller."""
        list_controller = InvitationListController(
            gateway,
            filters=InvitationFilters(status=InvitationStatus.PENDING, per_page=per_page),
        )
        return cls(list_controller, **kwargs)

    @property
    def dismissed(self) -> frozenset[int]:
        return frozenset(self._dismissed)

    def dismiss(self, invitation_id: int) -> None:
        """Hide an invitation from the notification surface."""
        self._dismissed.add(invitation_id)

    def active_notifications(self) -> list[Invitation]:
        """Pending, acceptable, unexpired and not dismissed invitations."""
        return [
            invitation
            for invitation in self.list_controller.items
            if invitation.is_pending
            and invitation.id not in self._dismissed
            and invitation.can_be_accepted
            and not invitation.is_expired
        ]

    def urgent_notifications(self) -> list[Invitation]:
        """Active notifications that expire within the warning window."""
        now = self.clock()
        return [
            invitation
            for invitation in self.active_notifications()
            if is_expiring_soon(invitation.expires_at, now, self.expiring_soon_window)
        ]

    def badge_count(self) -> int:
        return len(self.active_notifications())

    def urgent_count(self) -> int:
        return len(self.urgent_notifications())

    def badge_label(self) -> str:
        """Display text for the badge: empty, the count, or ``"99+"``."""
        count = self.badge_count()
        if count == 0:
            return ""
        if count > self.badge_cap:
            return f"{self.badge_cap}+"
        return str(count)

    async def refresh(self) -> bool:
        return await self.list_controller.refresh()
