"""Tests for location encoding/decoding and history."""

import pytest

from booksearch.models import EMPTY_FILTERS, FilterSet
from booksearch.navigation import (
    ROUTE_HOME,
    ROUTE_SEARCH,
    NavigationHistory,
    canonical_location,
    decode,
    encode,
    location_query,
)


class TestEncode:
    def test_term_only(self):
        assert encode("dogs") == "/search?q=dogs"

    def test_filters_in_fixed_order(self):
        filters = FilterSet(author="Twain", language="en", year=1884)
        assert encode("dogs", filters) == "/search?q=dogs&author=Twain&language=en&year=1884"

    def test_empty_filters_are_omitted(self):
        assert encode("dogs", FilterSet(year=1920)) == "/search?q=dogs&year=1920"
        assert encode("dogs", FilterSet(author="", language="fr")) == "/search?q=dogs&language=fr"

    def test_percent_encodes_like_encode_uri_component(self):
        assert encode("war & peace") == "/search?q=war%20%26%20peace"
        assert encode("c++ (intro)!") == "/search?q=c%2B%2B%20(intro)!"
        assert encode("café") == "/search?q=caf%C3%A9"


class TestDecode:
    def test_search_location(self):
        location = decode("/search?q=poe&language=french&year=1920")
        assert location.route == ROUTE_SEARCH
        assert location.term == "poe"
        assert location.filters == FilterSet(language="french", year=1920)

    def test_missing_q_means_no_query(self):
        location = decode("/search?author=Twain")
        assert location.term is None
        assert location_query(location) is None

    def test_blank_q_means_no_query(self):
        assert decode("/search?q=%20%20").term is None

    def test_home_routes(self):
        for raw in ("", "/", None, "http://localhost:5173/"):
            assert decode(raw).route == ROUTE_HOME

    def test_full_url_and_trailing_slash(self):
        location = decode("http://localhost:5173/search/?q=dogs")
        assert location.route == ROUTE_SEARCH
        assert location.term == "dogs"

    def test_malformed_year_defaults_to_any(self):
        assert decode("/search?q=dogs&year=soon").filters.year is None

    def test_out_of_range_year_is_kept(self):
        assert decode("/search?q=dogs&year=1500").filters.year == 1500

    def test_first_value_wins(self):
        assert decode("/search?q=dogs&q=cats").term == "dogs"

    def test_plus_and_escapes(self):
        assert decode("/search?q=war%20%26%20peace").term == "war & peace"
        assert decode("/search?q=c%2B%2B").term == "c++"

    def test_unknown_path_is_home(self):
        assert decode("/nowhere?q=dogs").route == ROUTE_HOME


class TestRoundTrip:
    @pytest.mark.parametrize("term,filters", [
        ("dogs", EMPTY_FILTERS),
        ("dogs", FilterSet(author="Twain")),
        ("war & peace", FilterSet(author="Leo Tolstoy", language="ru", year=1869)),
        ("café au lait", FilterSet(language="fr")),
        ("100% (pure)", FilterSet(year=2001)),
    ])
    def test_decode_encode(self, term, filters):
        location = decode(encode(term, filters))
        assert (location.term, location.filters) == (term, filters)

    @pytest.mark.parametrize("raw", [
        "/search?q=dogs",
        "/search?q=dogs&author=Twain",
        "/search?q=poe&language=french&year=1920",
        "/search?q=war%20%26%20peace&author=Leo%20Tolstoy&language=ru&year=1869",
    ])
    def test_encode_decode_is_identity(self, raw):
        location = decode(raw)
        assert encode(location.term, location.filters) == raw


class TestCanonicalLocation:
    def test_root_aliases(self):
        assert canonical_location("") == "/"
        assert canonical_location("/") == "/"
        assert canonical_location(None) == "/"

    def test_strips_origin(self):
        assert canonical_location("http://localhost:5173/search?q=dogs") == "/search?q=dogs"

    @pytest.mark.parametrize("raw", ["http://[bad", "http://[bad/search?q=dogs"])
    def test_unparseable_url_is_home(self, raw):
        assert canonical_location(raw) == "/"


class TestNavigationHistory:
    def test_push_and_back_forward(self):
        history = NavigationHistory("/")
        assert history.push("/search?q=dogs")
        assert history.push("/search?q=dogs&author=Twain")
        assert history.back() == "/search?q=dogs"
        assert history.back() == "/"
        assert history.back() is None
        assert history.forward() == "/search?q=dogs"

    def test_push_same_location_is_noop(self):
        history = NavigationHistory("/search?q=dogs")
        assert not history.push("/search?q=dogs")
        assert len(history) == 1

    def test_push_drops_forward_entries(self):
        history = NavigationHistory("/")
        history.push("/search?q=a")
        history.push("/search?q=b")
        history.back()
        history.push("/search?q=c")
        assert history.entries == ["/", "/search?q=a", "/search?q=c"]
        assert not history.can_go_forward

    def test_replace_keeps_length(self):
        history = NavigationHistory("")
        history.replace("/")
        assert history.entries == ["/"]
        assert not history.can_go_back
