"""Domain layer - Entities, value objects, state machine, domain events.

This module exports the core domain building blocks:

- **Entities**: Catalog entries, users, licenses, search pages
- **Value Objects**: Classification enums and FilterCriteria
- **State Machine**: Product publication lifecycle
- **Domain Events**: Loader fetch failures
- **Load State**: Immutable loader snapshots
- **Exceptions**: Client-side errors

Example usage:
    from cnc_library.domain import ContentType, FilterCriteria, SortMode

    criteria = FilterCriteria.for_mode(SortMode.RECENT)
    criteria = criteria.with_filter("content_type", ContentType.POST_PROCESSOR)
    criteria.to_search_request(page=0, size=24)
"""

# Base classes
from cnc_library.domain.base import DomainEvent, ValueObject

# Entities
from cnc_library.domain.entities import (
    AuthUser,
    CatalogEntry,
    FilterOptions,
    License,
    SearchPage,
)

# Domain Events
from cnc_library.domain.events import LoadFailed

# Exceptions
from cnc_library.domain.exceptions import (
    CatalogAPIError,
    DomainError,
    InvalidStateTransitionError,
    NotAuthenticatedError,
    PermissionDeniedError,
    ValidationError,
)

# Load state
from cnc_library.domain.load_state import LoadFailureKind, LoadState

# State Machine
from cnc_library.domain.state_machines import (
    PublicationStatus,
    validate_publication_transition,
)

# Value Objects
from cnc_library.domain.value_objects import (
    ContentCategory,
    ContentType,
    ExperienceStatus,
    FilterCriteria,
    MachineType,
    SortDirection,
    SortKey,
    SortMode,
    UserRole,
    Visibility,
)

__all__ = [
    # Base
    "DomainEvent",
    "ValueObject",
    # Entities
    "AuthUser",
    "CatalogEntry",
    "FilterOptions",
    "License",
    "SearchPage",
    # Events
    "LoadFailed",
    # Exceptions
    "CatalogAPIError",
    "DomainError",
    "InvalidStateTransitionError",
    "NotAuthenticatedError",
    "PermissionDeniedError",
    "ValidationError",
    # Load state
    "LoadFailureKind",
    "LoadState",
    # State Machine
    "PublicationStatus",
    "validate_publication_transition",
    # Value Objects
    "ContentCategory",
    "ContentType",
    "ExperienceStatus",
    "FilterCriteria",
    "MachineType",
    "SortDirection",
    "SortKey",
    "SortMode",
    "UserRole",
    "Visibility",
]
