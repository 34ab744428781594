"""Pydantic schemas for the library REST API.

The backend speaks camelCase JSON. These models validate response payloads
and convert them to domain objects, and serialize outgoing product payloads.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from cnc_library.domain import (
    AuthUser,
    CatalogEntry,
    ContentCategory,
    ContentType,
    ExperienceStatus,
    FilterOptions,
    License,
    MachineType,
    PublicationStatus,
    SearchPage,
    UserRole,
    Visibility,
)


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(CamelModel):
    """Product as returned by the backend."""

    id: int = Field(..., description="Product ID")
    name: str = Field(..., description="Display name")
    content_type: ContentType
    category: ContentCategory
    description: str | None = None
    kit_contents: str | None = None
    min_software_version: str | None = None
    machine_manufacturer: str | None = None
    machine_series: str | None = None
    machine_model: str | None = None
    machine_type: MachineType | None = None
    number_of_axes: int | None = Field(default=None, ge=0)
    controller_manufacturer: str | None = None
    controller_series: str | None = None
    controller_model: str | None = None
    price_eur: Decimal | None = Field(default=None, ge=0)
    product_owner: str | None = None
    author_name: str | None = None
    trial_days: int | None = Field(default=None, ge=0)
    supported_codes: str | None = None
    sample_output_code: str | None = None
    image_url: str | None = None
    publication_status: PublicationStatus = PublicationStatus.DRAFT
    experience_status: ExperienceStatus = ExperienceStatus.NOT_TESTED
    visibility: Visibility = Visibility.PUBLIC
    download_count: int | None = Field(default=None, ge=0)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None

    def to_domain(self) -> CatalogEntry:
        """Convert to a CatalogEntry, replacing nulls with empty values."""
        return CatalogEntry(
            id=self.id,
            name=self.name,
            content_type=self.content_type,
            category=self.category,
            description=self.description or "",
            kit_contents=self.kit_contents or "",
            min_software_version=self.min_software_version or "",
            machine_manufacturer=self.machine_manufacturer or "",
            machine_series=self.machine_series or "",
            machine_model=self.machine_model or "",
            machine_type=self.machine_type,
            number_of_axes=self.number_of_axes or 0,
            controller_manufacturer=self.controller_manufacturer or "",
            controller_series=self.controller_series or "",
            controller_model=self.controller_model or "",
            price_eur=self.price_eur or Decimal("0"),
            product_owner=self.product_owner or "",
            author_name=self.author_name or "",
            trial_days=self.trial_days or 0,
            supported_codes=self.supported_codes or "",
            sample_output_code=self.sample_output_code or "",
            image_url=self.image_url or "",
            publication_status=self.publication_status,
            experience_status=self.experience_status,
            visibility=self.visibility,
            download_count=self.download_count or 0,
            created_at=self.created_at,
            updated_at=self.updated_at,
            published_at=self.published_at,
        )


class ProductWriteSchema(CamelModel):
    """Payload for creating or updating a product."""

    name: str
    content_type: ContentType
    category: ContentCategory
    description: str = ""
    kit_contents: str = ""
    min_software_version: str = ""
    machine_manufacturer: str = ""
    machine_series: str = ""
    machine_model: str = ""
    machine_type: MachineType
    number_of_axes: int = Field(..., ge=0)
    controller_manufacturer: str = ""
    controller_series: str = ""
    controller_model: str = ""
    price_eur: Decimal = Field(..., ge=0)
    product_owner: str = ""
    author_name: str = ""
    trial_days: int = Field(..., ge=0)
    supported_codes: str = ""
    sample_output_code: str = ""
    image_url: str = ""
    visibility: Visibility
    experience_status: ExperienceStatus
    publication_status: PublicationStatus

    @field_serializer("price_eur")
    def _serialize_price(self, value: Decimal) -> float:
        return float(value)


# ============================================================================
# Search Schemas
# ============================================================================


class SearchResponseSchema(CamelModel):
    """Paged search response (Spring-style page object)."""

    content: list[ProductSchema] = Field(default_factory=list)
    total_elements: int = Field(..., ge=0)
    total_pages: int | None = None
    number: int | None = None
    size: int | None = None

    def to_domain(self) -> SearchPage:
        """Convert to a SearchPage."""
        return SearchPage(
            content=[product.to_domain() for product in self.content],
            total_elements=self.total_elements,
        )


class FilterOptionsSchema(CamelModel):
    """Available filter values."""

    machine_manufacturers: list[str] = Field(default_factory=list)
    controller_manufacturers: list[str] = Field(default_factory=list)
    content_owners: list[str] = Field(default_factory=list)
    number_of_axes: list[int] = Field(default_factory=list)
    content_types: list[str] = Field(default_factory=list)
    machine_types: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)

    def to_domain(self) -> FilterOptions:
        """Convert to FilterOptions."""
        return FilterOptions(**self.model_dump())


# ============================================================================
# Auth & License Schemas
# ============================================================================


class AuthUserSchema(CamelModel):
    """Login response."""

    user_id: int
    username: str
    role: UserRole
    token: str

    def to_domain(self) -> AuthUser:
        """Convert to AuthUser."""
        return AuthUser(
            user_id=self.user_id,
            username=self.username,
            role=self.role,
            token=self.token,
        )

    @classmethod
    def from_domain(cls, user: AuthUser) -> "AuthUserSchema":
        """Build from an AuthUser (for persisting the session)."""
        return cls(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            token=user.token,
        )


class LicenseSchema(CamelModel):
    """License as returned by the backend."""

    id: int
    user_id: int
    product_id: int
    product_name: str = ""
    type: str
    expires_at: datetime | None = None
    created_at: datetime | None = None

    def to_domain(self) -> License:
        """Convert to License."""
        return License(**self.model_dump())
