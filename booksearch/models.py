"""Value types shared by the navigation, search and view layers."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

from .config import RESULT_LINK_BASE


class MalformedResponseError(ValueError):
    """Raised when a search response does not have the expected shape."""


@dataclass(frozen=True)
class SearchQuery:
    term: str

    def __post_init__(self):
        if not isinstance(self.term, str) or not self.term.strip():
            raise ValueError("Search term must be a non-empty string")


@dataclass(frozen=True)
class FilterSet:
    """Author / language / year filters. Empty values mean "no filter"."""

    author: str = ""
    language: str = ""
    year: Optional[int] = None

    def is_empty(self) -> bool:
        return not (self.author or self.language or self.year is not None)

    def params(self):
        """Non-empty filters as (name, value) pairs in URL order"""
        pairs = []
        if self.author:
            pairs.append(("author", self.author))
        if self.language:
            pairs.append(("language", self.language))
        if self.year is not None:
            pairs.append(("year", str(self.year)))
        return pairs

    def with_changes(self, **changes) -> "FilterSet":
        return replace(self, **changes)


EMPTY_FILTERS = FilterSet()


@dataclass(frozen=True)
class BookResult:
    id: Any
    title: str
    author: str
    language: str
    year: Optional[int]

    @property
    def url(self) -> str:
        return f"{RESULT_LINK_BASE}{self.id}"

    @classmethod
    def from_json(cls, data: Mapping) -> "BookResult":
        if not isinstance(data, Mapping):
            raise MalformedResponseError(f"Result entry is not an object: {data!r}")
        if data.get("book_id") is None:
            raise MalformedResponseError("Result entry has no book_id")

        year = data.get("year")
        if isinstance(year, bool) or not isinstance(year, (int, type(None))):
            try:
                year = int(str(year).strip())
            except ValueError:
                year = None

        return cls(
            id=data["book_id"],
            title=str(data.get("title") or ""),
            author=str(data.get("author") or ""),
            language=str(data.get("language") or ""),
            year=year,
        )


@dataclass(frozen=True)
class ResultPayload:
    query: str
    count: int
    items: Tuple[BookResult, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: Any) -> "ResultPayload":
        """Build a payload from the decoded search response body"""
        if not isinstance(data, Mapping):
            raise MalformedResponseError("Search response is not a JSON object")

        query = data.get("query")
        count = data.get("count")
        results = data.get("results")

        if not isinstance(query, str):
            raise MalformedResponseError("Search response has no query string")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise MalformedResponseError(f"Invalid result count: {count!r}")
        if not isinstance(results, list):
            raise MalformedResponseError("Search response has no results list")

        return cls(
            query=query,
            count=count,
            items=tuple(BookResult.from_json(item) for item in results),
        )


@dataclass(frozen=True)
class SearchFailure:
    message: str
    kind: str = "transport"  # "transport" or "malformed"
