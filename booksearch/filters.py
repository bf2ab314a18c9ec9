"""Draft filter editing state."""

from typing import Optional

from .models import FilterSet, EMPTY_FILTERS


def coerce_year(value) -> Optional[int]:
    """Year picker value -> int, or None for "any year" and unparseable input"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


class FilterDraftStore:
    """In-progress filter selections that have not been applied yet."""

    def __init__(self, filters: FilterSet = EMPTY_FILTERS):
        self.author = ""
        self.language = ""
        self.year = None
        self.language_menu_open = False
        self.load(filters)

    def load(self, filters: FilterSet):
        self.author = filters.author
        self.language = filters.language
        self.year = filters.year

    def set_author(self, text):
        self.author = "" if text is None else str(text)

    def set_language(self, code):
        # Codes are the canonical key; names are only for display
        self.language = (code or "").strip().lower()
        self.language_menu_open = False

    def set_year(self, value):
        self.year = coerce_year(value)

    def toggle_language_menu(self):
        self.language_menu_open = not self.language_menu_open
        return self.language_menu_open

    def clear(self):
        self.author = ""
        self.language = ""
        self.year = None
        self.language_menu_open = False

    def has_values(self) -> bool:
        return not self.snapshot().is_empty()

    def snapshot(self) -> FilterSet:
        return FilterSet(author=self.author, language=self.language, year=self.year)
