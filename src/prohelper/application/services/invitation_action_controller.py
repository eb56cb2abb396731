"""Accept and decline actions for contractor invitations.

Accept and decline run in separate lanes. Each lane has its own busy flag
and last error, so a failure in one lane never masks or clears the other.
"""

from dataclasses import dataclass
from datetime import datetime

from prohelper.core.logging import LoggingContext, get_logger
from prohelper.domain.entities import (
    AcceptResult,
    Invitation,
    mark_accepted,
    mark_declined,
)
from prohelper.domain.exceptions import (
    ErrorKind,
    InvitationAlreadyProcessedError,
    InvitationError,
)
from prohelper.domain.services.invitation_gateway import InvitationGateway

logger = get_logger(__name__)


@dataclass
class ActionLane:
    """Busy/error state of one action type."""

    name: str
    busy: bool = False
    error: str | None = None
    error_kind: ErrorKind | None = None

    def start(self) -> None:
        self.busy = True
        self.error = None
        self.error_kind = None

    def fail(self, error: InvitationError) -> None:
        self.error = error.message
        self.error_kind = error.kind


class InvitationActionController:
    """Runs accept/decline requests against the gateway.

    Calls with a missing token are no-ops returning None. A call made while
    the same lane is busy is ignored and also returns None.
    """

    def __init__(self, gateway: InvitationGateway) -> None:
        self.gateway = gateway
        self.accept_lane = ActionLane("accept")
        self.decline_lane = ActionLane("decline")

    @property
    def accepting(self) -> bool:
        return self.accept_lane.busy

    @property
    def declining(self) -> bool:
        return self.decline_lane.busy

    @property
    def accept_error(self) -> str | None:
        return self.accept_lane.error

    @property
    def decline_error(self) -> str | None:
        return self.decline_lane.error

    async def accept(self, token: str | None) -> AcceptResult | None:
        """Accept an invitation.

        Args:
            token: Invitation token.

        Returns:
            The backend confirmation, or None if the call was skipped or failed.
        """
        lane = self.accept_lane
        if not token or lane.busy:
            return None

        lane.start()
        with LoggingContext(lane=lane.name):
            try:
                result = await self.gateway.accept(token)
            except InvitationError as e:
                lane.fail(e)
                logger.warning("Failed to accept invitation", kind=e.kind.value, error=e.message)
                return None
            finally:
                lane.busy = False
            logger.info("Invitation accepted", contractor_id=result.contractor.id)
            return result

    async def decline(self, token: str | None, reason: str | None = None) -> bool | None:
        """Decline an invitation.

        Args:
            token: Invitation token.
            reason: Optional reason, forwarded as-is. Empty means no reason.

        Returns:
            True on success, False on failure, None if the call was skipped.
        """
        lane = self.decline_lane
        if not token or lane.busy:
            return None

        lane.start()
        with LoggingContext(lane=lane.name):
            try:
                await self.gateway.decline(token, reason)
            except InvitationError as e:
                lane.fail(e)
                logger.warning("Failed to decline invitation", kind=e.kind.value, error=e.message)
                return False
            finally:
                lane.busy = False
            logger.info("Invitation declined")
            return True

    async def accept_invitation(
        self, invitation: Invitation, now: datetime
    ) -> Invitation | None:
        """Accept a loaded invitation and return its patched snapshot.

        The invitation must be pending and acceptable according to the
        backend flags; otherwise the accept lane reports it as already
        processed and no request is made.

        Returns:
            The invitation moved to ``accepted``, or None.
        """
        if self.accept_lane.busy:
            return None
        if not invitation.is_pending or not invitation.can_be_accepted:
            self.accept_lane.fail(InvitationAlreadyProcessedError())
            return None
        if await self.accept(invitation.token) is None:
            return None
        return mark_accepted(invitation, now)

    async def decline_invitation(
        self, invitation: Invitation, now: datetime, reason: str | None = None
    ) -> Invitation | None:
        """Decline a loaded invitation and return its patched snapshot.

        Returns:
            The invitation moved to ``declined``, or None.
        """
        if self.decline_lane.busy:
            return None
        if not invitation.is_pending:
            self.decline_lane.fail(InvitationAlreadyProcessedError())
            return None
        if not await self.decline(invitation.token, reason):
            return None
        return mark_declined(invitation, now, reason)
