"""Value Objects for the domain layer.

Classification enums shared with the backend and the immutable
FilterCriteria that drives catalog searches.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Self

from cnc_library.domain.base import ValueObject


# ============================================================================
# Classification Enums
# ============================================================================


class ContentType(str, Enum):
    """Kind of digital content sold in the library."""

    POST_PROCESSOR = "POST_PROCESSOR"
    MACHINE_SCHEMA = "MACHINE_SCHEMA"
    INTERPRETER = "INTERPRETER"
    DIGITAL_MACHINE_KIT = "DIGITAL_MACHINE_KIT"


class ContentCategory(str, Enum):
    """Top-level equipment category."""

    CNC_MACHINES = "CNC_MACHINES"
    ROBOTS = "ROBOTS"


class MachineType(str, Enum):
    """Machining process of the target machine."""

    MILLING = "MILLING"
    TURNING = "TURNING"
    MILL_TURN = "MILL_TURN"
    WIRE_EDM = "WIRE_EDM"
    LASER = "LASER"
    PLASMA = "PLASMA"
    WATERJET = "WATERJET"
    GRINDING = "GRINDING"
    ROBOT = "ROBOT"
    OTHER = "OTHER"


class ExperienceStatus(str, Enum):
    """Whether the content has been proven on real equipment."""

    NOT_TESTED = "NOT_TESTED"
    VERIFIED_ON_EQUIPMENT = "VERIFIED_ON_EQUIPMENT"


class Visibility(str, Enum):
    """Audience a product is visible to."""

    PUBLIC = "PUBLIC"
    DEALER = "DEALER"
    DEALERS = "DEALERS"
    VENDOR = "VENDOR"


class UserRole(str, Enum):
    """Roles known to the backend."""

    USER = "USER"
    DEALER = "DEALER"
    VENDOR = "VENDOR"
    ADMIN = "ADMIN"


# ============================================================================
# Sorting
# ============================================================================


class SortKey(str, Enum):
    """Backend field names accepted as sort keys."""

    CREATED_AT = "createdAt"
    DOWNLOAD_COUNT = "downloadCount"
    NAME = "name"
    PRICE = "priceEur"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class SortMode(str, Enum):
    """Sort presets offered by the library view."""

    RECENT = "recent"
    POPULAR = "popular"

    @property
    def key(self) -> SortKey:
        """Sort key this preset maps to."""
        if self == SortMode.RECENT:
            return SortKey.CREATED_AT
        return SortKey.DOWNLOAD_COUNT


# ============================================================================
# Filter Criteria
# ============================================================================


# Python field name -> backend search request field name
_FILTER_WIRE_NAMES: dict[str, str] = {
    "query": "query",
    "category": "category",
    "content_type": "contentType",
    "machine_type": "machineType",
    "machine_manufacturer": "machineManufacturer",
    "controller_manufacturer": "controllerManufacturer",
    "number_of_axes": "numberOfAxes",
    "content_owner": "contentOwner",
}


@dataclass(frozen=True)
class FilterCriteria(ValueObject):
    """Equality constraints plus sort order for a catalog search.

    Any change to a FilterCriteria invalidates the loaded page position,
    so instances are immutable and compared by value.

    Attributes:
        query: Free-text query.
        category: Equipment category.
        content_type: Kind of content.
        machine_type: Machining process.
        machine_manufacturer: Machine manufacturer ("Provided by").
        controller_manufacturer: Controller manufacturer.
        number_of_axes: Axis count.
        content_owner: Owner of the content.
        sort_by: Sort key.
        sort_dir: Sort direction.
    """

    query: str | None = None
    category: ContentCategory | None = None
    content_type: ContentType | None = None
    machine_type: MachineType | None = None
    machine_manufacturer: str | None = None
    controller_manufacturer: str | None = None
    number_of_axes: int | None = None
    content_owner: str | None = None
    sort_by: SortKey = SortKey.DOWNLOAD_COUNT
    sort_dir: SortDirection = SortDirection.DESC

    @classmethod
    def for_mode(cls, mode: SortMode) -> Self:
        """Create empty criteria sorted by a preset.

        Args:
            mode: Sort preset.

        Returns:
            FilterCriteria with no constraints.
        """
        return cls(sort_by=mode.key, sort_dir=SortDirection.DESC)

    @classmethod
    def filter_fields(cls) -> list[str]:
        """Names of the constraint fields (sort fields excluded)."""
        return list(_FILTER_WIRE_NAMES)

    def with_filter(self, field: str, value: Any) -> Self:
        """Return a copy with one constraint changed.

        Empty values ("" / None / 0) clear the constraint.

        Args:
            field: Constraint field name.
            value: New value.

        Returns:
            New FilterCriteria.

        Raises:
            KeyError: If field is not a constraint field.
        """
        if field not in _FILTER_WIRE_NAMES:
            raise KeyError(f"Unknown filter field: {field}")
        return replace(self, **{field: _coerce(field, value) if value else None})

    def with_sort(self, mode: SortMode) -> Self:
        """Return a copy sorted by a preset, constraints kept."""
        return replace(self, sort_by=mode.key, sort_dir=SortDirection.DESC)

    def cleared(self) -> Self:
        """Return a copy with every constraint removed, sort kept."""
        return replace(self, **{name: None for name in _FILTER_WIRE_NAMES})

    @property
    def active_filter_count(self) -> int:
        """Number of set constraints, free-text query excluded."""
        return sum(
            1
            for name in _FILTER_WIRE_NAMES
            if name != "query" and getattr(self, name) is not None
        )

    def to_search_request(self, page: int, size: int) -> dict[str, Any]:
        """Build the backend search request body.

        Args:
            page: Zero-based page index.
            size: Page size.

        Returns:
            camelCase request body with unset constraints omitted.
        """
        body: dict[str, Any] = {}
        for f in fields(self):
            wire_name = _FILTER_WIRE_NAMES.get(f.name)
            value = getattr(self, f.name)
            if wire_name is None or value is None:
                continue
            body[wire_name] = value.value if isinstance(value, Enum) else value
        body["sortBy"] = self.sort_by.value
        body["sortDir"] = self.sort_dir.value
        body["page"] = page
        body["size"] = size
        return body


def _coerce(field: str, value: Any) -> Any:
    """Convert raw filter input (e.g. from a select box) to the field's type."""
    if field == "category":
        return ContentCategory(value)
    if field == "content_type":
        return ContentType(value)
    if field == "machine_type":
        return MachineType(value)
    if field == "number_of_axes":
        return int(value)
    return str(value)
