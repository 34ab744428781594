"""Application layer - catalog loader and role-specific services."""

from cnc_library.application.auth_service import AuthSession
from cnc_library.application.catalog_loader import CatalogSearch, IncrementalCatalogLoader
from cnc_library.application.dealer_service import DRAFT_STEPS, DealerWorkspace, ProductDraft
from cnc_library.application.library_service import LibraryBrowser
from cnc_library.application.moderation_service import ALL_STATUSES, ModerationQueue
from cnc_library.application.notifications import Notification, Severity

__all__ = [
    "ALL_STATUSES",
    "AuthSession",
    "CatalogSearch",
    "DRAFT_STEPS",
    "DealerWorkspace",
    "IncrementalCatalogLoader",
    "LibraryBrowser",
    "ModerationQueue",
    "Notification",
    "ProductDraft",
    "Severity",
]
