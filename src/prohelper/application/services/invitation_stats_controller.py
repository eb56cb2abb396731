"""Received/sent invitation statistics."""

import asyncio

from prohelper.core.logging import get_logger
from prohelper.domain.entities import InvitationStats
from prohelper.domain.exceptions import ErrorKind, InvitationError
from prohelper.domain.services.invitation_gateway import InvitationGateway

logger = get_logger(__name__)


class InvitationStatsController:
    """Fetches and holds the latest statistics snapshot.

    Only one fetch runs at a time; concurrent ``refresh`` calls wait for the
    fetch already in flight. A failed fetch keeps the previous snapshot.
    """

    def __init__(self, gateway: InvitationGateway) -> None:
        self.gateway = gateway
        self.stats: InvitationStats | None = None
        self.error: str | None = None
        self.error_kind: ErrorKind | None = None
        self._in_flight: asyncio.Task[bool] | None = None

    @property
    def loading(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    async def refresh(self) -> bool:
        """Fetch a new snapshot.

        Returns:
            True if the snapshot was replaced.
        """
        if not self.loading:
            self._in_flight = asyncio.create_task(self._fetch())
        return await asyncio.shield(self._in_flight)

    async def _fetch(self) -> bool:
        self.error = None
        self.error_kind = None
        try:
            stats = await self.gateway.get_stats()
        except InvitationError as e:
            self.error = e.message
            self.error_kind = e.kind
            logger.warning("Failed to load invitation stats", kind=e.kind.value, error=e.message)
            return False
        self.stats = stats
        return True
