"""Detail view of a single invitation opened by its token."""

from datetime import datetime

from prohelper.core.logging import get_logger
from prohelper.domain.entities import Invitation, mark_accepted, mark_declined
from prohelper.domain.exceptions import ErrorKind, InvitationError
from prohelper.domain.services.invitation_gateway import InvitationGateway

logger = get_logger(__name__)


class InvitationDetailsController:
    """Loads and holds one invitation.

    A failed load keeps the previously loaded invitation so the view can
    offer a retry without going blank.
    """

    def __init__(self, gateway: InvitationGateway, token: str | None) -> None:
        self.gateway = gateway
        self.token = token or None
        self.invitation: Invitation | None = None
        self.loading = False
        self.error: str | None = None
        self.error_kind: ErrorKind | None = None

    async def load(self) -> Invitation | None:
        """Fetch the invitation for ``token``; a missing token is a no-op."""
        if self.token is None or self.loading:
            return self.invitation

        self.loading = True
        self.error = None
        self.error_kind = None
        try:
            self.invitation = await self.gateway.get_by_token(self.token)
        except InvitationError as e:
            self.error = e.message
            self.error_kind = e.kind
            logger.warning("Failed to load invitation", kind=e.kind.value, error=e.message)
        finally:
            self.loading = False
        return self.invitation

    def apply_accepted(self, now: datetime) -> Invitation | None:
        """Patch the held invitation after a confirmed accept."""
        if self.invitation is not None:
            self.invitation = mark_accepted(self.invitation, now)
        return self.invitation

    def apply_declined(self, now: datetime, reason: str | None = None) -> Invitation | None:
        """Patch the held invitation after a confirmed decline."""
        if self.invitation is not None:
            self.invitation = mark_declined(self.invitation, now, reason)
        return self.invitation
