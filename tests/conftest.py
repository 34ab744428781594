"""Pytest configuration and shared fixtures."""

import asyncio
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cnc_library.application import AuthSession
from cnc_library.domain import (
    AuthUser,
    CatalogEntry,
    ContentCategory,
    ContentType,
    FilterCriteria,
    MachineType,
    PublicationStatus,
    SearchPage,
    UserRole,
)
from cnc_library.infrastructure.api_client import CatalogAPIClient
from cnc_library.infrastructure.catalog_gateway import CatalogGateway
from cnc_library.infrastructure.session_store import SessionStore


# ============================================================================
# Entry Builders
# ============================================================================


def make_entry(entry_id: int, name: str | None = None, **overrides: Any) -> CatalogEntry:
    """Build a catalog entry with sensible defaults."""
    values: dict[str, Any] = {
        "id": entry_id,
        "name": name or f"Product {entry_id}",
        "content_type": ContentType.POST_PROCESSOR,
        "category": ContentCategory.CNC_MACHINES,
        "machine_type": MachineType.MILLING,
        "machine_manufacturer": "Haas",
        "number_of_axes": 3,
        "price_eur": Decimal("0"),
        "publication_status": PublicationStatus.PUBLISHED,
    }
    values.update(overrides)
    return CatalogEntry(**values)


def make_user(role: UserRole = UserRole.USER, user_id: int = 7) -> AuthUser:
    return AuthUser(user_id=user_id, username=f"{role.value.lower()}1", role=role, token="tok-123")


# ============================================================================
# Search Doubles
# ============================================================================


@dataclass
class SearchCall:
    """One call recorded by ControlledSearch."""

    criteria: FilterCriteria
    page: int
    size: int
    future: "asyncio.Future[SearchPage]"

    def resolve(self, entries: list[CatalogEntry], total: int) -> None:
        self.future.set_result(SearchPage(content=entries, total_elements=total))

    def fail(self, error: Exception) -> None:
        self.future.set_exception(error)


class ControlledSearch:
    """Search collaborator whose responses are released by the test.

    Each call parks on a future, so tests decide when (and in which order)
    responses arrive.
    """

    def __init__(self) -> None:
        self.calls: list[SearchCall] = []

    async def search(self, criteria: FilterCriteria, page: int, size: int) -> SearchPage:
        future: asyncio.Future[SearchPage] = asyncio.get_running_loop().create_future()
        self.calls.append(SearchCall(criteria, page, size, future))
        return await future

    @property
    def last(self) -> SearchCall:
        return self.calls[-1]


class ListSearch:
    """Search collaborator serving pages from a fixed list.

    Args:
        entries: Backend contents in sort order.
        shift: Entries inserted ahead of the cursor after the first page,
            which makes later pages overlap earlier ones.
    """

    def __init__(self, entries: list[CatalogEntry], shift: int = 0) -> None:
        self.entries = entries
        self.shift = shift
        self.calls: list[tuple[int, int]] = []

    async def search(self, criteria: FilterCriteria, page: int, size: int) -> SearchPage:
        self.calls.append((page, size))
        start = page * size
        if page > 0:
            start = max(0, start - self.shift)
        return SearchPage(
            content=self.entries[start : start + size],
            total_elements=len(self.entries),
        )


async def settle() -> None:
    """Let started tasks run up to their next suspension point."""
    for _ in range(3):
        await asyncio.sleep(0)


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def controlled_search() -> ControlledSearch:
    return ControlledSearch()


@pytest.fixture
def mock_gateway() -> MagicMock:
    """Create a mock catalog gateway."""
    gateway = MagicMock(spec=CatalogGateway)
    gateway.client = MagicMock(spec=CatalogAPIClient)

    # Make all methods async
    gateway.search = AsyncMock()
    gateway.filter_options = AsyncMock()
    gateway.get_product = AsyncMock()
    gateway.all_products = AsyncMock(return_value=[])
    gateway.my_products = AsyncMock(return_value=[])
    gateway.create_product = AsyncMock()
    gateway.update_product = AsyncMock()
    gateway.update_status = AsyncMock()
    gateway.record_download = AsyncMock()
    gateway.delete_product = AsyncMock()
    gateway.login = AsyncMock()
    gateway.issue_trial = AsyncMock()
    gateway.user_licenses = AsyncMock()

    return gateway


@pytest.fixture
def session_file(tmp_path: Path) -> Path:
    return tmp_path / "session.json"


@pytest.fixture
def anonymous_session(mock_gateway: MagicMock) -> AuthSession:
    return AuthSession(mock_gateway)


def session_as(gateway: MagicMock, role: UserRole, store: SessionStore | None = None) -> AuthSession:
    """Create a session already logged in with the given role."""
    session = AuthSession(gateway, store)
    session._user = make_user(role)
    return session
