"""Domain events for the catalog client.

Events are published by the incremental catalog loader to the view layer
when a fetch fails. State changes are published as LoadState snapshots.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from cnc_library.domain.base import DomainEvent
from cnc_library.domain.load_state import LoadFailureKind


@dataclass(frozen=True)
class LoadFailed(DomainEvent):
    """Event raised when a catalog fetch fails."""

    event_type: ClassVar[str] = "catalog.load_failed"

    kind: LoadFailureKind = LoadFailureKind.INITIAL
    reason: str = ""
    generation: int = 0
    page: int = 0

    @property
    def is_fatal_for_paging(self) -> bool:
        """Check if paging stays disabled until the next reset."""
        return self.kind == LoadFailureKind.INITIAL

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "kind": self.kind.value,
            "reason": self.reason,
            "generation": self.generation,
            "page": self.page,
        }

