"""Domain entities.

Catalog entries, the logged-in user, licenses and the search page
container. All are immutable from the client's point of view: the loader
and services replace whole objects, never individual fields.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Self

from cnc_library.domain.state_machines import PublicationStatus
from cnc_library.domain.value_objects import (
    ContentCategory,
    ContentType,
    ExperienceStatus,
    MachineType,
    UserRole,
    Visibility,
)


@dataclass(frozen=True)
class CatalogEntry:
    """One product listed in the library.

    Attributes:
        id: Unique, stable product identifier.
        name: Display name.
        content_type: Kind of content.
        category: Equipment category.
        machine_type: Machining process.
        machine_manufacturer: Machine manufacturer.
        number_of_axes: Axis count (0 when unknown).
        price_eur: Price in EUR; zero means free.
        download_count: Recorded downloads.
        publication_status: Moderation state.
    """

    id: int
    name: str
    content_type: ContentType
    category: ContentCategory
    description: str = ""
    kit_contents: str = ""
    min_software_version: str = ""
    machine_manufacturer: str = ""
    machine_series: str = ""
    machine_model: str = ""
    machine_type: MachineType | None = None
    number_of_axes: int = 0
    controller_manufacturer: str = ""
    controller_series: str = ""
    controller_model: str = ""
    price_eur: Decimal = Decimal("0")
    product_owner: str = ""
    author_name: str = ""
    trial_days: int = 0
    supported_codes: str = ""
    sample_output_code: str = ""
    image_url: str = ""
    publication_status: PublicationStatus = PublicationStatus.DRAFT
    experience_status: ExperienceStatus = ExperienceStatus.NOT_TESTED
    visibility: Visibility = Visibility.PUBLIC
    download_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None

    @property
    def is_free(self) -> bool:
        """Check if the product costs nothing."""
        return self.price_eur == 0

    @property
    def offers_trial(self) -> bool:
        """Check if a trial license can be requested."""
        return self.trial_days > 0

    @property
    def is_verified(self) -> bool:
        """Check if the content was verified on equipment."""
        return self.experience_status == ExperienceStatus.VERIFIED_ON_EQUIPMENT

    def with_download_recorded(self) -> Self:
        """Return a copy with the download counter incremented."""
        return replace(self, download_count=self.download_count + 1)

    def with_status(self, status: PublicationStatus) -> Self:
        """Return a copy with a new publication status."""
        return replace(self, publication_status=status)


@dataclass(frozen=True)
class AuthUser:
    """Logged-in user as returned by the backend."""

    user_id: int
    username: str
    role: UserRole
    token: str


@dataclass(frozen=True)
class License:
    """License issued to a user for a product."""

    id: int
    user_id: int
    product_id: int
    product_name: str
    type: str
    expires_at: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class FilterOptions:
    """Distinct values the backend offers for each filter."""

    machine_manufacturers: list[str] = field(default_factory=list)
    controller_manufacturers: list[str] = field(default_factory=list)
    content_owners: list[str] = field(default_factory=list)
    number_of_axes: list[int] = field(default_factory=list)
    content_types: list[str] = field(default_factory=list)
    machine_types: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SearchPage:
    """One page of search results.

    Attributes:
        content: Entries on this page, in backend sort order.
        total_elements: Matching entries across all pages.
    """

    content: list[CatalogEntry]
    total_elements: int
