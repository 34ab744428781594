"""Library browsing service.

Backs the library view: owns the active FilterCriteria, forwards filter and
scroll triggers to the incremental loader, and handles the detail panel
actions (recording a download, requesting a trial license).
"""

from typing import Any

import structlog

from cnc_library.application.auth_service import AuthSession
from cnc_library.application.catalog_loader import IncrementalCatalogLoader
from cnc_library.application.notifications import Notification
from cnc_library.domain import (
    CatalogAPIError,
    CatalogEntry,
    FilterCriteria,
    FilterOptions,
    LoadState,
    NotAuthenticatedError,
    SortMode,
)
from cnc_library.infrastructure.catalog_gateway import CatalogGateway

logger = structlog.get_logger()


class LibraryBrowser:
    """State and actions of the library view."""

    def __init__(
        self,
        gateway: CatalogGateway,
        loader: IncrementalCatalogLoader,
        session: AuthSession,
        sort_mode: SortMode = SortMode.POPULAR,
    ) -> None:
        """Initialize the browser.

        Args:
            gateway: Backend gateway.
            loader: Loader that owns the entry list.
            session: Current user session.
            sort_mode: Initial sort preset.
        """
        self.gateway = gateway
        self.loader = loader
        self.session = session
        self.sort_mode = sort_mode
        self.criteria = FilterCriteria.for_mode(sort_mode)
        self.filter_options = FilterOptions()
        self.selected: CatalogEntry | None = None

    @property
    def state(self) -> LoadState:
        return self.loader.state

    @property
    def active_filter_count(self) -> int:
        return self.criteria.active_filter_count

    async def open(self) -> None:
        """Load filter options and the first page."""
        try:
            self.filter_options = await self.gateway.filter_options()
        except CatalogAPIError as e:
            # Filter menus stay empty; browsing still works
            logger.info("Filter options unavailable", error=e.message)
        await self.loader.reset(self.criteria)

    def close(self) -> None:
        """Leave the view; late responses are discarded."""
        self.loader.close()

    # =========================================================================
    # Filtering & Paging
    # =========================================================================

    async def set_filter(self, field: str, value: Any) -> None:
        """Change one filter; empty values clear it."""
        await self._apply(self.criteria.with_filter(field, value))

    async def set_query(self, query: str) -> None:
        await self._apply(self.criteria.with_filter("query", query.strip()))

    async def clear_filters(self) -> None:
        await self._apply(self.criteria.cleared())

    async def set_sort_mode(self, mode: SortMode) -> None:
        self.sort_mode = mode
        await self._apply(self.criteria.with_sort(mode))

    async def scroll_near_end(self) -> None:
        await self.loader.on_scroll_near_end()

    async def retry(self) -> None:
        await self.loader.retry()

    async def _apply(self, criteria: FilterCriteria) -> None:
        self.criteria = criteria
        await self.loader.on_criteria_change(criteria)

    # =========================================================================
    # Detail Panel
    # =========================================================================

    def select(self, entry: CatalogEntry) -> None:
        self.selected = entry

    def deselect(self) -> None:
        self.selected = None

    async def product_detail(self, product_id: int) -> CatalogEntry:
        """Fetch a single product for the detail page.

        Raises:
            CatalogAPIError: If the product cannot be loaded.
        """
        entry = await self.gateway.get_product(product_id)
        self.selected = entry
        return entry

    async def record_download(self) -> Notification | None:
        """Record a download of the selected entry.

        Returns:
            Outcome notification, or None when nothing is selected.
        """
        entry = self.selected
        if entry is None:
            return None
        try:
            await self.gateway.record_download(entry.id)
        except CatalogAPIError as e:
            logger.warning("Download not recorded", product_id=entry.id, error=e.message)
            return Notification.error("Download failed")
        if self.selected is not None and self.selected.id == entry.id:
            self.selected = self.selected.with_download_recorded()
        return Notification.success("Download recorded")

    async def request_trial(self) -> Notification | None:
        """Request a trial license for the selected entry.

        Returns:
            Outcome notification, or None when nothing is selected.
        """
        entry = self.selected
        if entry is None:
            return None
        try:
            user = self.session.require_user("request a trial license")
            await self.gateway.issue_trial(user.user_id, entry.id)
        except NotAuthenticatedError as e:
            return Notification.error(e.message)
        except CatalogAPIError as e:
            logger.warning("Trial not issued", product_id=entry.id, error=e.message)
            return Notification.error("Failed to issue trial")
        return Notification.success("Trial license issued!")
