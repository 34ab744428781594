"""Tests for domain value objects."""

import pytest

from cnc_library.domain import (
    ContentCategory,
    ContentType,
    FilterCriteria,
    MachineType,
    SortDirection,
    SortKey,
    SortMode,
)


class TestSortMode:
    """Tests for sort presets."""

    def test_recent_sorts_by_creation(self) -> None:
        assert SortMode.RECENT.key == SortKey.CREATED_AT

    def test_popular_sorts_by_downloads(self) -> None:
        assert SortMode.POPULAR.key == SortKey.DOWNLOAD_COUNT


class TestFilterCriteria:
    """Tests for FilterCriteria."""

    def test_equal_by_value(self) -> None:
        a = FilterCriteria(content_type=ContentType.INTERPRETER)
        b = FilterCriteria().with_filter("content_type", "INTERPRETER")

        assert a == b
        assert hash(a) == hash(b)

    def test_with_filter_returns_copy(self) -> None:
        base = FilterCriteria()

        changed = base.with_filter("machine_manufacturer", "Haas")

        assert base.machine_manufacturer is None
        assert changed.machine_manufacturer == "Haas"

    @pytest.mark.parametrize("empty", ["", None, 0])
    def test_empty_value_clears_filter(self, empty) -> None:
        criteria = FilterCriteria(number_of_axes=5).with_filter("number_of_axes", empty)

        assert criteria.number_of_axes is None

    def test_values_are_coerced(self) -> None:
        criteria = (
            FilterCriteria()
            .with_filter("category", "ROBOTS")
            .with_filter("machine_type", "WIRE_EDM")
            .with_filter("number_of_axes", "5")
        )

        assert criteria.category == ContentCategory.ROBOTS
        assert criteria.machine_type == MachineType.WIRE_EDM
        assert criteria.number_of_axes == 5

    def test_unknown_field(self) -> None:
        with pytest.raises(KeyError):
            FilterCriteria().with_filter("sort_by", "name")

    def test_invalid_enum_value(self) -> None:
        with pytest.raises(ValueError):
            FilterCriteria().with_filter("content_type", "SPREADSHEET")

    def test_active_filter_count_ignores_query(self) -> None:
        criteria = FilterCriteria(
            query="haas",
            content_type=ContentType.POST_PROCESSOR,
            number_of_axes=3,
        )

        assert criteria.active_filter_count == 2

    def test_cleared_keeps_sort(self) -> None:
        criteria = FilterCriteria.for_mode(SortMode.RECENT).with_filter("query", "x")

        cleared = criteria.cleared()

        assert cleared == FilterCriteria.for_mode(SortMode.RECENT)

    def test_with_sort_keeps_constraints(self) -> None:
        criteria = FilterCriteria(content_owner="Acme").with_sort(SortMode.RECENT)

        assert criteria.content_owner == "Acme"
        assert criteria.sort_by == SortKey.CREATED_AT
        assert criteria.sort_dir == SortDirection.DESC

    def test_search_request_body(self) -> None:
        """Unset constraints are omitted and names are camelCase."""
        criteria = FilterCriteria(
            content_type=ContentType.MACHINE_SCHEMA,
            machine_manufacturer="DMG Mori",
            number_of_axes=5,
        )

        body = criteria.to_search_request(page=2, size=24)

        assert body == {
            "contentType": "MACHINE_SCHEMA",
            "machineManufacturer": "DMG Mori",
            "numberOfAxes": 5,
            "sortBy": "downloadCount",
            "sortDir": "desc",
            "page": 2,
            "size": 24,
        }

    def test_filter_fields(self) -> None:
        assert "sort_by" not in FilterCriteria.filter_fields()
        assert len(FilterCriteria.filter_fields()) == 8
