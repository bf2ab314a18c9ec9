"""Mapping between search state and navigable locations, plus session history.

A location is the path-and-query part of a URL, e.g.
``/search?q=dogs&author=Twain``. Search locations carry the mandatory ``q``
parameter followed by ``author``, ``language`` and ``year`` in that order, each
present only when set. Everything here is pure apart from NavigationHistory,
which only holds strings.
"""

import logging
from collections import namedtuple
from typing import List, Optional
from urllib.parse import parse_qsl, quote, urlsplit

from .filters import coerce_year
from .models import EMPTY_FILTERS, FilterSet, SearchQuery

logger = logging.getLogger(__name__)

HOME_PATH = "/"
SEARCH_PATH = "/search"

ROUTE_HOME = "home"
ROUTE_SEARCH = "search"

# Characters encodeURIComponent leaves alone on top of quote()'s always-safe set
_COMPONENT_SAFE = "!~*'()"


Location = namedtuple("Location", ["route", "term", "filters"])


def quote_component(value) -> str:
    return quote(str(value), safe=_COMPONENT_SAFE)


def encode_query_string(term: str, filters: FilterSet = EMPTY_FILTERS) -> str:
    """``q=<term>`` followed by the non-empty filters in canonical order"""
    parts = [f"q={quote_component(term)}"]
    for name, value in filters.params():
        parts.append(f"{name}={quote_component(value)}")
    return "&".join(parts)


def encode(term: str, filters: FilterSet = EMPTY_FILTERS) -> str:
    return f"{SEARCH_PATH}?{encode_query_string(term, filters)}"


def _normalize_path(path: str) -> str:
    path = "/" + path.strip().strip("/")
    return path


def canonical_location(raw: Optional[str]) -> str:
    """Reduce a URL or location to path + query; "" and "/" are both home."""
    if not raw:
        return HOME_PATH
    try:
        parts = urlsplit(raw.strip())
    except ValueError:
        logger.debug(f"Unparseable location {raw!r}, treating as home")
        return HOME_PATH
    path = _normalize_path(parts.path)
    if parts.query:
        return f"{path}?{parts.query}"
    return path


def decode(raw: Optional[str]) -> Location:
    """Parse a location. Never raises: malformed pieces fall back to defaults."""
    try:
        parts = urlsplit((raw or "").strip())
    except ValueError:
        logger.debug(f"Unparseable location {raw!r}, treating as home")
        return Location(ROUTE_HOME, None, EMPTY_FILTERS)

    route = ROUTE_SEARCH if _normalize_path(parts.path) == SEARCH_PATH else ROUTE_HOME

    params = {}
    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        params.setdefault(name, value)

    term = params.get("q")
    if term is not None and not term.strip():
        term = None

    filters = FilterSet(
        author=params.get("author", ""),
        language=params.get("language", ""),
        year=coerce_year(params.get("year")),
    )
    return Location(route, term, filters)


def location_query(location: Location) -> Optional[SearchQuery]:
    if location.route != ROUTE_SEARCH or location.term is None:
        return None
    return SearchQuery(location.term)


class NavigationHistory:
    """Back/forward stack of visited locations."""

    def __init__(self, initial: str = HOME_PATH):
        self.entries: List[str] = [initial]
        self.index = 0

    @property
    def current(self) -> str:
        return self.entries[self.index]

    @property
    def can_go_back(self) -> bool:
        return self.index > 0

    @property
    def can_go_forward(self) -> bool:
        return self.index < len(self.entries) - 1

    def push(self, location: str) -> bool:
        """Add a new entry after the current one. Returns False if unchanged."""
        if location == self.current:
            return False
        del self.entries[self.index + 1:]
        self.entries.append(location)
        self.index += 1
        logger.debug(f"push {location} ({len(self.entries)} entries)")
        return True

    def replace(self, location: str):
        self.entries[self.index] = location
        logger.debug(f"replace -> {location}")

    def back(self) -> Optional[str]:
        if not self.can_go_back:
            return None
        self.index -= 1
        return self.current

    def forward(self) -> Optional[str]:
        if not self.can_go_forward:
            return None
        self.index += 1
        return self.current

    def __len__(self):
        return len(self.entries)
