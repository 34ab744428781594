"""Tests for display formatting."""

from decimal import Decimal

import pytest

from cnc_library.domain import ContentCategory, ContentType, MachineType, PublicationStatus
from cnc_library.presentation.formatting import (
    CATEGORY_LABELS,
    CONTENT_TYPE_COLORS,
    CONTENT_TYPE_LABELS,
    MACHINE_TYPE_LABELS,
    PLACEHOLDER,
    PUBLICATION_STATUS_LABELS,
    STATUS_COLORS,
    describe,
    format_enum,
    format_price,
    format_trial,
)
from tests.conftest import make_entry


class TestFormatEnum:
    """Tests for humanizing backend values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("POST_PROCESSOR", "Post Processor"),
            ("WIRE_EDM", "Wire EDM"),
            ("CNC_MACHINES", "CNC Machines"),
            ("MILLING", "Milling"),
            ("DMG Mori", "DMG Mori"),
            ("", ""),
        ],
    )
    def test_format_enum(self, value: str, expected: str) -> None:
        assert format_enum(value) == expected

    def test_every_value_has_label(self) -> None:
        assert set(MACHINE_TYPE_LABELS) == set(MachineType)
        assert set(CONTENT_TYPE_LABELS) == set(CONTENT_TYPE_COLORS) == set(ContentType)
        assert set(CATEGORY_LABELS) == set(ContentCategory)
        assert set(PUBLICATION_STATUS_LABELS) == set(STATUS_COLORS) == set(PublicationStatus)


class TestFormatValues:
    """Tests for prices, trials and summaries."""

    def test_price(self) -> None:
        assert format_price(Decimal("0")) == "Free"
        assert format_price(Decimal("49.9")) == "49.90 €"

    def test_trial(self) -> None:
        assert format_trial(14) == "14 days"
        assert format_trial(0) == PLACEHOLDER

    def test_describe(self) -> None:
        entry = make_entry(
            1,
            "Haas PP",
            content_type=ContentType.DIGITAL_MACHINE_KIT,
            price_eur=Decimal("120"),
            download_count=3,
        )

        assert describe(entry) == "Haas PP | Digital Machine Kit | Haas | 120.00 € | 3 downloads"

    def test_describe_without_manufacturer(self) -> None:
        entry = make_entry(1, "Kit", machine_manufacturer="")

        assert describe(entry).split(" | ")[2] == PLACEHOLDER
