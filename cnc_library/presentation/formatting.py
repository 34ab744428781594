"""Display labels and formatting for catalog values."""

import re
from decimal import Decimal

from cnc_library.domain import (
    CatalogEntry,
    ContentCategory,
    ContentType,
    MachineType,
    PublicationStatus,
)

PLACEHOLDER = "—"

CONTENT_TYPE_LABELS: dict[ContentType, str] = {
    ContentType.POST_PROCESSOR: "Post Processor",
    ContentType.MACHINE_SCHEMA: "Machine Schema",
    ContentType.INTERPRETER: "Interpreter",
    ContentType.DIGITAL_MACHINE_KIT: "Digital Machine Kit",
}

CATEGORY_LABELS: dict[ContentCategory, str] = {
    ContentCategory.CNC_MACHINES: "CNC Machines",
    ContentCategory.ROBOTS: "Robots",
}

MACHINE_TYPE_LABELS: dict[MachineType, str] = {
    MachineType.MILLING: "Milling",
    MachineType.TURNING: "Turning",
    MachineType.MILL_TURN: "Mill-Turn",
    MachineType.WIRE_EDM: "Wire EDM",
    MachineType.LASER: "Laser",
    MachineType.PLASMA: "Plasma",
    MachineType.WATERJET: "Waterjet",
    MachineType.GRINDING: "Grinding",
    MachineType.ROBOT: "Robot",
    MachineType.OTHER: "Other",
}

PUBLICATION_STATUS_LABELS: dict[PublicationStatus, str] = {
    PublicationStatus.DRAFT: "Draft",
    PublicationStatus.PENDING_REVIEW: "Pending Review",
    PublicationStatus.PUBLISHED: "Published",
    PublicationStatus.REJECTED: "Rejected",
}

CONTENT_TYPE_COLORS: dict[ContentType, str] = {
    ContentType.POST_PROCESSOR: "#2196f3",
    ContentType.MACHINE_SCHEMA: "#4caf50",
    ContentType.INTERPRETER: "#ff9800",
    ContentType.DIGITAL_MACHINE_KIT: "#9c27b0",
}

STATUS_COLORS: dict[PublicationStatus, str] = {
    PublicationStatus.DRAFT: "#9e9e9e",
    PublicationStatus.PENDING_REVIEW: "#ff9800",
    PublicationStatus.PUBLISHED: "#4caf50",
    PublicationStatus.REJECTED: "#f44336",
}

_UPPER_SNAKE = re.compile(r"^[A-Z_]+$")
_ACRONYM = re.compile(r"^[A-Z]{1,3}$")


def format_enum(value: str) -> str:
    """Humanize an UPPER_SNAKE backend value.

    Short all-caps words are treated as acronyms and kept, so
    ``WIRE_EDM`` becomes ``Wire EDM`` and ``CNC_MACHINES`` becomes
    ``CNC Machines``. Values that are not upper snake case (manufacturer
    names, for instance) are returned unchanged.
    """
    if not value:
        return value
    if "_" not in value and not _UPPER_SNAKE.match(value):
        return value
    return " ".join(
        word if _ACRONYM.match(word) else word[:1].upper() + word[1:].lower()
        for word in value.split("_")
    )


def format_price(price: Decimal) -> str:
    if price == 0:
        return "Free"
    return f"{price:.2f} €"


def format_trial(days: int) -> str:
    return f"{days} days" if days > 0 else PLACEHOLDER


def content_type_label(entry: CatalogEntry) -> str:
    return CONTENT_TYPE_LABELS.get(entry.content_type) or format_enum(entry.content_type.value)


def describe(entry: CatalogEntry) -> str:
    """One-line summary used by list views."""
    parts = [
        entry.name,
        content_type_label(entry),
        entry.machine_manufacturer or PLACEHOLDER,
        format_price(entry.price_eur),
        f"{entry.download_count} downloads",
    ]
    return " | ".join(parts)
