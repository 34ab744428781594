"""Dealer authoring service.

Dealers (and vendors/admins) author products through a three-step form,
save them as drafts or submit them for review, and manage their own list.
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Self

import structlog

from cnc_library.application.auth_service import AuthSession
from cnc_library.application.notifications import Notification
from cnc_library.domain import (
    CatalogAPIError,
    CatalogEntry,
    ContentCategory,
    ContentType,
    ExperienceStatus,
    MachineType,
    PublicationStatus,
    UserRole,
    ValidationError,
    Visibility,
)
from cnc_library.infrastructure.catalog_gateway import CatalogGateway
from cnc_library.infrastructure.schemas import ProductWriteSchema

logger = structlog.get_logger()

DRAFT_STEPS = ("General Info", "Machine Parameters", "Pricing & Content")

AUTHOR_ROLES = (UserRole.DEALER, UserRole.VENDOR, UserRole.ADMIN)


# ============================================================================
# Product Draft
# ============================================================================


@dataclass
class ProductDraft:
    """Editable product form.

    Defaults match a new post-processor for a 3-axis milling machine with a
    30-day trial.
    """

    name: str = ""
    content_type: ContentType = ContentType.POST_PROCESSOR
    category: ContentCategory = ContentCategory.CNC_MACHINES
    description: str = ""
    kit_contents: str = ""
    min_software_version: str = ""
    machine_manufacturer: str = ""
    machine_series: str = ""
    machine_model: str = ""
    machine_type: MachineType = MachineType.MILLING
    number_of_axes: int = 3
    controller_manufacturer: str = ""
    controller_series: str = ""
    controller_model: str = ""
    price_eur: Decimal = Decimal("0")
    product_owner: str = ""
    author_name: str = ""
    trial_days: int = 30
    supported_codes: str = ""
    sample_output_code: str = ""
    image_url: str = ""
    visibility: Visibility = Visibility.PUBLIC
    experience_status: ExperienceStatus = ExperienceStatus.NOT_TESTED

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> Self:
        """Prefill the form from an existing product."""
        values = {f.name: getattr(entry, f.name) for f in fields(cls)}
        if values["machine_type"] is None:
            values["machine_type"] = MachineType.OTHER
        return cls(**values)

    def update(self, **changes: Any) -> None:
        """Set form fields by name.

        Raises:
            ValidationError: If a field name is unknown.
        """
        known = {f.name for f in fields(self)}
        for name, value in changes.items():
            if name not in known:
                raise ValidationError(name, "unknown field")
            setattr(self, name, value)

    def validate_step(self, step: int) -> None:
        """Validate the fields shown on one wizard step.

        Args:
            step: Zero-based step index into DRAFT_STEPS.

        Raises:
            ValidationError: On the first invalid field.
        """
        if step == 0:
            if not self.name.strip():
                raise ValidationError("name", "is required")
        elif step == 1:
            if self.number_of_axes < 0:
                raise ValidationError("number_of_axes", "cannot be negative")
        elif step == 2:
            if self.price_eur < 0:
                raise ValidationError("price_eur", "cannot be negative")
            if self.trial_days < 0:
                raise ValidationError("trial_days", "cannot be negative")
            if self.image_url and not self.image_url.startswith(("http://", "https://")):
                raise ValidationError("image_url", "must be an http(s) URL")
        else:
            raise IndexError(f"No such step: {step}")

    def validate(self) -> None:
        """Validate every step."""
        for step in range(len(DRAFT_STEPS)):
            self.validate_step(step)

    def to_payload(self, status: PublicationStatus) -> dict[str, Any]:
        """Serialize to the backend's camelCase product payload."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        schema = ProductWriteSchema(**values, publication_status=status)
        return schema.model_dump(by_alias=True, mode="json")


# ============================================================================
# Dealer Workspace
# ============================================================================


class DealerWorkspace:
    """The dealer's product list and authoring form."""

    def __init__(self, gateway: CatalogGateway, session: AuthSession) -> None:
        """Initialize the workspace.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
            PermissionDeniedError: If the user may not author products.
        """
        session.require_role(*AUTHOR_ROLES)
        self.gateway = gateway
        self.session = session
        self.products: list[CatalogEntry] = []
        self.draft = ProductDraft()
        self.editing: CatalogEntry | None = None

    async def refresh(self) -> Notification | None:
        """Reload the user's products, falling back to all products.

        Returns:
            An error notification if nothing could be loaded, else None.
        """
        try:
            self.products = await self.gateway.my_products()
            return None
        except CatalogAPIError as e:
            logger.info("Own products unavailable, falling back", error=e.message)
        try:
            self.products = await self.gateway.all_products()
        except CatalogAPIError:
            return Notification.error("Failed to load products")
        return None

    def new_draft(self) -> ProductDraft:
        """Start authoring a new product."""
        self.editing = None
        self.draft = ProductDraft()
        return self.draft

    def edit(self, entry: CatalogEntry) -> ProductDraft:
        """Start editing an existing product."""
        self.editing = entry
        self.draft = ProductDraft.from_entry(entry)
        return self.draft

    async def submit(self, as_draft: bool) -> Notification:
        """Save the form as a draft or submit it for review.

        Args:
            as_draft: Save with DRAFT status instead of PENDING_REVIEW.

        Returns:
            Outcome notification.
        """
        status = PublicationStatus.DRAFT if as_draft else PublicationStatus.PENDING_REVIEW
        try:
            self.draft.validate()
        except ValidationError as e:
            return Notification.error(e.message)

        payload = self.draft.to_payload(status)
        try:
            if self.editing is not None:
                await self.gateway.update_product(self.editing.id, payload)
                message = "Product updated!"
            else:
                await self.gateway.create_product(payload)
                message = (
                    "Product saved as draft!" if as_draft else "Product submitted for review!"
                )
        except CatalogAPIError as e:
            logger.warning("Product not saved", error=e.message)
            return Notification.error("Failed to save")

        logger.info("Product saved", status=status.value, updated=self.editing is not None)
        self.new_draft()
        await self.refresh()
        return Notification.success(message)

    async def delete(self, entry: CatalogEntry) -> Notification:
        """Delete one of the user's products."""
        try:
            await self.gateway.delete_product(entry.id)
        except CatalogAPIError as e:
            logger.warning("Product not deleted", product_id=entry.id, error=e.message)
            return Notification.error("Failed to delete")
        if self.editing is not None and self.editing.id == entry.id:
            self.new_draft()
        await self.refresh()
        return Notification.success("Product deleted")
