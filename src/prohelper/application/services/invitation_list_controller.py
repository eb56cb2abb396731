"""Paged, filterable view over incoming invitations.

Each fetch is tagged with the generation that was current when it was
issued. A REPLACE load starts a new generation, so any response still in
flight from an older generation is dropped on arrival (last filter wins).
Nothing is cancelled on the wire.
"""

from enum import Enum

from prohelper.core.logging import get_logger
from prohelper.domain.entities import (
    Invitation,
    InvitationFilters,
    InvitationPage,
    Pagination,
)
from prohelper.domain.exceptions import ErrorKind, InvitationError
from prohelper.domain.services.invitation_gateway import InvitationGateway

logger = get_logger(__name__)

DEFAULT_PER_PAGE = 15


class LoadMode(str, Enum):
    """How a fetched page is merged into the loaded items."""

    REPLACE = "replace"
    APPEND = "append"


class InvitationListController:
    """Holds the loaded pages of incoming invitations for one view.

    Attributes:
        gateway: Remote invitation API.
        default_per_page: Page size used when the filters don't set one.
        pagination: Cursor of the last applied page, None before the first load.
        loading: True while a fetch of the current generation is in flight.
        error: Message of the last failed fetch, None after a successful refresh.
        error_kind: Kind of the last failure.
    """

    def __init__(
        self,
        gateway: InvitationGateway,
        filters: InvitationFilters | None = None,
        default_per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self.gateway = gateway
        self.default_per_page = default_per_page
        self._filters = filters or InvitationFilters()
        self._items: list[Invitation] = []
        self._generation = 0
        self.pagination: Pagination | None = None
        self.loading = False
        self.error: str | None = None
        self.error_kind: ErrorKind | None = None

    @property
    def items(self) -> tuple[Invitation, ...]:
        return tuple(self._items)

    @property
    def filters(self) -> InvitationFilters:
        return self._filters

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_more(self) -> bool:
        """Whether the backend reported more pages after the current one."""
        return self.pagination is not None and self.pagination.has_more

    def request_filters(self) -> InvitationFilters:
        """Filters sent to the backend, with the default page size applied."""
        if self._filters.per_page is None:
            return self._filters.with_per_page(self.default_per_page)
        return self._filters

    async def load(self, mode: LoadMode = LoadMode.REPLACE) -> bool:
        """Fetch a page and merge it into the loaded items.

        REPLACE fetches page 1 and starts a new generation. APPEND fetches the
        page after the current one; it does nothing when there are no more
        pages or another fetch is in flight.

        Args:
            mode: Merge mode.

        Returns:
            True if a response was applied, False otherwise.
        """
        if mode is LoadMode.APPEND:
            if self.loading or not self.has_more:
                return False
            page_number = self.pagination.current_page + 1
        else:
            self._generation += 1
            page_number = 1
            self.error = None
            self.error_kind = None

        generation = self._generation
        filters = self.request_filters()
        self.loading = True

        try:
            page = await self.gateway.list_incoming(filters, page=page_number)
        except InvitationError as e:
            if generation != self._generation:
                logger.debug("Discarding stale invitation list failure", generation=generation)
                return False
            self.loading = False
            self.error = e.message
            self.error_kind = e.kind
            logger.warning(
                "Failed to load invitations",
                page=page_number,
                kind=e.kind.value,
                error=e.message,
            )
            return False

        if generation != self._generation:
            logger.debug("Discarding stale invitation list page", generation=generation)
            return False

        self.loading = False
        self._apply(page, mode)
        return True

    def _apply(self, page: InvitationPage, mode: LoadMode) -> None:
        # Pages are assumed disjoint; ids are not de-duplicated across pages
        if mode is LoadMode.APPEND:
            self._items.extend(page.items)
        else:
            self._items = list(page.items)
        self.pagination = page.pagination

    async def refresh(self) -> bool:
        """Reload page 1 with the current filters."""
        return await self.load(LoadMode.REPLACE)

    async def load_more(self) -> bool:
        """Append the next page."""
        return await self.load(LoadMode.APPEND)

    async def set_filters(self, filters: InvitationFilters) -> bool:
        """Replace the filter set and reload from page 1."""
        self._filters = filters
        return await self.load(LoadMode.REPLACE)

    def replace_item(self, invitation: Invitation) -> bool:
        """Swap in an updated snapshot of a loaded invitation.

        Used after an optimistic accept/decline patch.

        Returns:
            True if an item with the same id was loaded.
        """
        replaced = False
        for index, item in enumerate(self._items):
            if item.id == invitation.id:
                self._items[index] = invitation
                replaced = True
        return replaced

    def clear(self) -> None:
        """Drop all loaded state; in-flight responses will be ignored."""
        self._generation += 1
        self._items = []
        self.pagination = None
        self.loading = False
        self.error = None
        self.error_kind = None
