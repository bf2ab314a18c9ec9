"""Tests for draft filter editing and filter values."""

import pytest

from booksearch.filters import FilterDraftStore, coerce_year
from booksearch.models import EMPTY_FILTERS, FilterSet, SearchQuery


class TestCoerceYear:
    @pytest.mark.parametrize("value,expected", [
        ("", None),
        (None, None),
        ("1920", 1920),
        (" 1920 ", 1920),
        (1920, 1920),
        ("any", None),
        (True, None),
    ])
    def test_coercion(self, value, expected):
        assert coerce_year(value) == expected


class TestFilterDraftStore:
    def test_starts_empty(self):
        store = FilterDraftStore()
        assert store.snapshot() == EMPTY_FILTERS
        assert not store.has_values()

    def test_edits_show_in_snapshot(self):
        store = FilterDraftStore()
        store.set_author("Twain")
        store.set_language("FR")
        store.set_year("1920")
        assert store.snapshot() == FilterSet(author="Twain", language="fr", year=1920)
        assert store.has_values()

    def test_snapshot_is_detached(self):
        store = FilterDraftStore()
        snapshot = store.snapshot()
        store.set_author("Poe")
        assert snapshot.author == ""

    def test_clear_resets_fields_and_menu(self):
        store = FilterDraftStore(FilterSet(author="Twain", language="en", year=1884))
        store.toggle_language_menu()
        store.clear()
        assert store.snapshot() == EMPTY_FILTERS
        assert store.language_menu_open is False

    def test_choosing_language_closes_menu(self):
        store = FilterDraftStore()
        assert store.toggle_language_menu() is True
        store.set_language("de")
        assert store.language_menu_open is False

    def test_toggle_does_not_touch_filters(self):
        store = FilterDraftStore(FilterSet(language="es"))
        store.toggle_language_menu()
        store.toggle_language_menu()
        assert store.snapshot() == FilterSet(language="es")


class TestFilterSet:
    def test_params_order_and_omission(self):
        filters = FilterSet(author="Twain", year=1884)
        assert filters.params() == [("author", "Twain"), ("year", "1884")]

    def test_is_empty(self):
        assert FilterSet().is_empty()
        assert not FilterSet(year=0).is_empty()

    def test_with_changes_returns_new_value(self):
        filters = FilterSet(author="Twain")
        changed = filters.with_changes(year=1884)
        assert filters.year is None
        assert changed == FilterSet(author="Twain", year=1884)


class TestSearchQuery:
    def test_rejects_blank_terms(self):
        with pytest.raises(ValueError):
            SearchQuery("   ")

    def test_keeps_term(self):
        assert SearchQuery("dogs").term == "dogs"
