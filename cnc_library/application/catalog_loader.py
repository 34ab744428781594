"""Incremental catalog loader.

Keeps the list of catalog entries shown by the library view. Filter, sort
or page-size changes reset the list and fetch page 0; scroll-proximity
triggers append following pages until the backend runs out.

Every fetch is tagged with the criteria generation active when it was
dispatched. Responses from an older generation are dropped on arrival.
Follow-up page fetches are serialized by the ``is_loading_more`` flag, which
is set before the first await so rapid repeated triggers issue one request.
"""

from dataclasses import replace
from typing import Callable, Iterable, Protocol

import structlog

from cnc_library.domain import (
    CatalogAPIError,
    CatalogEntry,
    FilterCriteria,
    LoadFailed,
    LoadFailureKind,
    LoadState,
    SearchPage,
)

logger = structlog.get_logger()

StateListener = Callable[[LoadState], None]
ErrorListener = Callable[[LoadFailed], None]


class CatalogSearch(Protocol):
    """Backend search operation consumed by the loader.

    Must be idempotent and side-effect free. Raises CatalogAPIError on failure.
    """

    async def search(
        self,
        criteria: FilterCriteria,
        page: int,
        size: int,
    ) -> SearchPage: ...


class IncrementalCatalogLoader:
    """Paged, deduplicated, generation-guarded catalog list.

    Example usage:
        loader = IncrementalCatalogLoader(gateway, page_size=24)
        loader.subscribe(view.render)
        await loader.reset(FilterCriteria.for_mode(SortMode.RECENT))
        await loader.load_more()
    """

    def __init__(
        self,
        search: CatalogSearch,
        page_size: int = 24,
        criteria: FilterCriteria | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            search: Backend search collaborator.
            page_size: Entries requested per page.
            criteria: Initial criteria; nothing is fetched until reset().
        """
        _check_page_size(page_size)
        self._search = search
        self._page_size = page_size
        self._criteria = criteria or FilterCriteria()
        self._generation = 0
        self._state = LoadState()
        self._seen_ids: set[int] = set()
        self._state_listeners: list[StateListener] = []
        self._error_listeners: list[ErrorListener] = []
        self._closed = False

    # =========================================================================
    # Read-only view
    # =========================================================================

    @property
    def state(self) -> LoadState:
        """Current state snapshot."""
        return self._state

    @property
    def criteria(self) -> FilterCriteria:
        """Criteria of the current generation."""
        return self._criteria

    @property
    def page_size(self) -> int:
        """Entries requested per page."""
        return self._page_size

    @property
    def generation(self) -> int:
        """Current criteria generation."""
        return self._generation

    @property
    def closed(self) -> bool:
        """Whether close() was called."""
        return self._closed

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Receive every new state snapshot.

        Args:
            listener: Called synchronously after each mutation.

        Returns:
            Callable that removes the listener.
        """
        self._state_listeners.append(listener)
        return lambda: _discard(self._state_listeners, listener)

    def subscribe_errors(self, listener: ErrorListener) -> Callable[[], None]:
        """Receive LoadFailed events.

        Args:
            listener: Called synchronously when a fetch fails.

        Returns:
            Callable that removes the listener.
        """
        self._error_listeners.append(listener)
        return lambda: _discard(self._error_listeners, listener)

    # =========================================================================
    # Operations
    # =========================================================================

    async def reset(self, criteria: FilterCriteria | None = None) -> None:
        """Start a new generation and fetch its first page.

        Args:
            criteria: New criteria; None reuses the current ones.
        """
        if self._closed:
            return
        if criteria is not None:
            self._criteria = criteria
        self._generation += 1
        generation = self._generation
        criteria = self._criteria
        size = self._page_size

        self._seen_ids = set()
        self._publish(LoadState(has_more=True, is_loading_initial=True))
        logger.debug("Catalog reset", generation=generation, page_size=size)

        try:
            page = await self._search.search(criteria, 0, size)
        except Exception as e:
            if not self._is_current(generation, page=0):
                return
            reason = _failure_reason(e)
            self._publish(LoadState(has_more=False, error=reason))
            self._emit_error(LoadFailureKind.INITIAL, reason, generation, page=0)
            return

        if not self._is_current(generation, page=0):
            return

        fresh = self._take_unseen(page.content)
        returned = len(page.content)
        self._publish(
            LoadState(
                entries=tuple(fresh),
                has_more=returned == size and returned < page.total_elements,
                total_elements=page.total_elements,
            )
        )
        logger.debug(
            "Catalog first page loaded",
            generation=generation,
            returned=returned,
            total=page.total_elements,
        )

    async def load_more(self) -> None:
        """Fetch and append the next page.

        No-op while any fetch is in flight, when the list is exhausted,
        or after close().
        """
        state = self._state
        if self._closed or state.is_loading or not state.has_more:
            return

        generation = self._generation
        criteria = self._criteria
        size = self._page_size
        page_index = len(state.entries) // size

        # Guard flag must be set before the first await
        self._publish(replace(state, is_loading_more=True))
        logger.debug("Catalog loading more", generation=generation, page=page_index)

        try:
            page = await self._search.search(criteria, page_index, size)
        except Exception as e:
            if not self._is_current(generation, page=page_index):
                return
            reason = _failure_reason(e)
            self._publish(replace(self._state, is_loading_more=False))
            self._emit_error(LoadFailureKind.INCREMENTAL, reason, generation, page=page_index)
            return

        if not self._is_current(generation, page=page_index):
            return

        current = self._state
        fresh = self._take_unseen(page.content)
        entries = current.entries + tuple(fresh)
        returned = len(page.content)
        if len(fresh) < returned:
            logger.info(
                "Dropped overlapping entries",
                generation=generation,
                page=page_index,
                duplicates=returned - len(fresh),
            )
        self._publish(
            replace(
                current,
                entries=entries,
                has_more=returned == size and len(entries) < page.total_elements,
                is_loading_more=False,
                total_elements=page.total_elements,
            )
        )

    async def set_page_size(self, page_size: int) -> None:
        """Change the page size; forces a reset with the current criteria."""
        _check_page_size(page_size)
        self._page_size = page_size
        await self.reset()

    async def retry(self) -> None:
        """Reset with the current criteria (retry after a failed first page)."""
        await self.reset()

    async def on_criteria_change(self, criteria: FilterCriteria) -> None:
        """View trigger: filters or sort changed."""
        await self.reset(criteria)

    async def on_scroll_near_end(self) -> None:
        """View trigger: the user scrolled close to the end of the list."""
        await self.load_more()

    def close(self) -> None:
        """Detach from the view.

        Responses still in flight are discarded on arrival.
        """
        self._closed = True
        self._generation += 1
        self._state_listeners.clear()
        self._error_listeners.clear()

    # =========================================================================
    # Internals
    # =========================================================================

    def _is_current(self, generation: int, page: int) -> bool:
        if generation == self._generation:
            return True
        logger.debug(
            "Discarding stale catalog response",
            generation=generation,
            current_generation=self._generation,
            page=page,
        )
        return False

    def _take_unseen(self, entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
        """Filter out already-loaded ids, first occurrence wins."""
        fresh = []
        for entry in entries:
            if entry.id in self._seen_ids:
                continue
            self._seen_ids.add(entry.id)
            fresh.append(entry)
        return fresh

    def _publish(self, state: LoadState) -> None:
        self._state = state
        for listener in list(self._state_listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Catalog state listener failed")

    def _emit_error(
        self,
        kind: LoadFailureKind,
        reason: str,
        generation: int,
        page: int,
    ) -> None:
        event = LoadFailed(kind=kind, reason=reason, generation=generation, page=page)
        logger.warning("Catalog load failed", **event.to_dict()["payload"])
        for listener in list(self._error_listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Catalog error listener failed")


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"Page size must be positive, got {page_size}")


def _discard(listeners: list, listener: object) -> None:
    if listener in listeners:
        listeners.remove(listener)


def _failure_reason(error: Exception) -> str:
    if isinstance(error, CatalogAPIError):
        return error.message
    logger.exception("Unexpected catalog search error")
    return f"Unexpected error: {error}"
