"""Abstract interface to the remote invitation API.

Defines the operations the controllers depend on. Implementations translate
every failure into an ``InvitationError`` subclass.
"""

from abc import ABC, abstractmethod

from prohelper.domain.entities import (
    AcceptResult,
    Invitation,
    InvitationFilters,
    InvitationPage,
    InvitationStats,
)


class InvitationGateway(ABC):
    """Abstract base class for invitation API gateways."""

    @abstractmethod
    async def list_incoming(
        self, filters: InvitationFilters, page: int = 1
    ) -> InvitationPage:
        """Fetch one page of invitations addressed to the current actor.

        Args:
            filters: Filter set to apply.
            page: 1-based page number.

        Returns:
            The requested page with its pagination cursor.

        Raises:
            InvitationError: If the request fails.
        """
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Invitation:
        """Fetch a single invitation by its token.

        Raises:
            InvitationError: If the request fails.
        """
        pass

    @abstractmethod
    async def get_by_id(self, invitation_id: int) -> Invitation:
        """Fetch a single invitation by id for the signed-in actor.

        Raises:
            InvitationError: If the request fails.
        """
        pass

    @abstractmethod
    async def accept(self, token: str) -> AcceptResult:
        """Accept the invitation identified by ``token``.

        Raises:
            InvitationError: If the request fails.
        """
        pass

    @abstractmethod
    async def decline(self, token: str, reason: str | None = None) -> str:
        """Decline the invitation identified by ``token``.

        Args:
            token: Invitation token.
            reason: Optional free-text reason, forwarded as-is.

        Returns:
            The backend confirmation message.

        Raises:
            InvitationError: If the request fails.
        """
        pass

    @abstractmethod
    async def get_stats(self) -> InvitationStats:
        """Fetch received/sent invitation counters.

        Raises:
            InvitationError: If the request fails.
        """
        pass
