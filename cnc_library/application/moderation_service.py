"""Admin moderation service.

Admins review every product: publish or reject submissions, hide
published products, and delete. Transitions are checked against the
publication state machine before the backend is called.
"""

from collections import Counter

import structlog

from cnc_library.application.auth_service import AuthSession
from cnc_library.application.notifications import Notification
from cnc_library.domain import (
    CatalogAPIError,
    CatalogEntry,
    InvalidStateTransitionError,
    PublicationStatus,
    UserRole,
    validate_publication_transition,
)
from cnc_library.infrastructure.catalog_gateway import CatalogGateway

logger = structlog.get_logger()

ALL_STATUSES = "ALL"


class ModerationQueue:
    """All products with status tabs and moderation actions."""

    def __init__(self, gateway: CatalogGateway, session: AuthSession) -> None:
        """Initialize the queue.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
            PermissionDeniedError: If the user is not an admin.
        """
        session.require_role(UserRole.ADMIN)
        self.gateway = gateway
        self.session = session
        self.products: list[CatalogEntry] = []
        self.selected: CatalogEntry | None = None

    async def refresh(self) -> Notification | None:
        """Reload all products.

        Returns:
            An error notification on failure, else None.
        """
        try:
            self.products = await self.gateway.all_products()
        except CatalogAPIError:
            return Notification.error("Failed to load products")
        return None

    def visible(
        self,
        status: PublicationStatus | str = ALL_STATUSES,
        query: str = "",
    ) -> list[CatalogEntry]:
        """Products shown under a status tab, narrowed by a search query.

        Args:
            status: Status tab, or "ALL".
            query: Case-insensitive match on name, manufacturer or owner.

        Returns:
            Matching products in loaded order.
        """
        result = self.products
        if status != ALL_STATUSES:
            result = [p for p in result if p.publication_status == status]
        if query:
            q = query.lower()
            result = [
                p
                for p in result
                if q in p.name.lower()
                or q in p.machine_manufacturer.lower()
                or q in p.product_owner.lower()
            ]
        return result

    def status_counts(self) -> dict[str, int]:
        """Number of products per status tab, including "ALL"."""
        counts = Counter(p.publication_status.value for p in self.products)
        result = {ALL_STATUSES: len(self.products)}
        for status in PublicationStatus:
            result[status.value] = counts.get(status.value, 0)
        return result

    async def approve(self, entry: CatalogEntry) -> Notification:
        return await self._transition(
            entry,
            PublicationStatus.PUBLISHED,
            f'"{entry.name}" published and visible to customers',
            "Failed to approve",
        )

    async def reject(self, entry: CatalogEntry) -> Notification:
        return await self._transition(
            entry,
            PublicationStatus.REJECTED,
            f'"{entry.name}" rejected',
            "Failed to reject",
        )

    async def hide(self, entry: CatalogEntry) -> Notification:
        return await self._transition(
            entry,
            PublicationStatus.DRAFT,
            f'"{entry.name}" hidden from public',
            "Failed to hide",
        )

    async def delete(self, entry: CatalogEntry) -> Notification:
        """Delete a product."""
        try:
            await self.gateway.delete_product(entry.id)
        except CatalogAPIError as e:
            logger.warning("Product not deleted", product_id=entry.id, error=e.message)
            return Notification.error("Failed to delete")
        if self.selected is not None and self.selected.id == entry.id:
            self.selected = None
        await self.refresh()
        return Notification.success("Product deleted")

    async def _transition(
        self,
        entry: CatalogEntry,
        target: PublicationStatus,
        success_message: str,
        failure_message: str,
    ) -> Notification:
        try:
            validate_publication_transition(str(entry.id), entry.publication_status, target)
            await self.gateway.update_status(entry.id, target)
        except InvalidStateTransitionError as e:
            return Notification.error(e.message)
        except CatalogAPIError as e:
            logger.warning(
                "Status not changed",
                product_id=entry.id,
                target=target.value,
                error=e.message,
            )
            return Notification.error(failure_message)

        logger.info("Product status changed", product_id=entry.id, status=target.value)
        if self.selected is not None and self.selected.id == entry.id:
            self.selected = entry.with_status(target)
        await self.refresh()
        return Notification.success(success_message)
