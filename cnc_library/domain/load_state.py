"""Load state of the incremental catalog loader.

A LoadState is an immutable snapshot. The loader publishes a new one after
every mutation, so subscribers can keep a reference without copying.
"""

from dataclasses import dataclass
from enum import Enum

from cnc_library.domain.entities import CatalogEntry


class LoadFailureKind(str, Enum):
    """Which fetch failed.

    INITIAL failures clear the list and disable paging until the next reset.
    INCREMENTAL failures leave the list untouched and may be retried.
    """

    INITIAL = "initial"
    INCREMENTAL = "incremental"


@dataclass(frozen=True)
class LoadState:
    """Snapshot of the loaded catalog.

    Attributes:
        entries: Loaded entries in fetch order, unique by id.
        has_more: Whether another page may exist.
        is_loading_initial: Page 0 fetch is in flight.
        is_loading_more: A follow-up page fetch is in flight.
        total_elements: Backend-reported total, once known.
        error: Reason of the last initial-load failure, if any.
    """

    entries: tuple[CatalogEntry, ...] = ()
    has_more: bool = True
    is_loading_initial: bool = False
    is_loading_more: bool = False
    total_elements: int | None = None
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        """Check if any fetch is in flight."""
        return self.is_loading_initial or self.is_loading_more

    @property
    def is_empty(self) -> bool:
        """Check if nothing is loaded and nothing is loading."""
        return not self.entries and not self.is_loading

    def ids(self) -> list[int]:
        """Identifiers of the loaded entries, in order."""
        return [entry.id for entry in self.entries]
