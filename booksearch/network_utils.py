"""HTTP client for the remote book search endpoint."""

import logging
from typing import Optional, Union

import requests

from .config import REQUEST_TIMEOUT, SEARCH_BASE_URL
from .models import EMPTY_FILTERS, FilterSet, MalformedResponseError, ResultPayload, SearchFailure
from .navigation import SEARCH_PATH, encode_query_string

logger = logging.getLogger(__name__)


def build_search_url(base_url: str, term: str, filters: FilterSet = EMPTY_FILTERS) -> str:
    return f"{base_url.rstrip('/')}{SEARCH_PATH}?{encode_query_string(term, filters)}"


class SearchClient:
    """Runs one search request per call and never retries.

    Overlapping calls are not de-duplicated or cancelled. Callers decide which
    outcome is current. Without an explicit session every call goes through
    ``requests.get``, so calls from several worker threads share no state.
    """

    def __init__(self, base_url: str = SEARCH_BASE_URL, timeout: float = REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session

    def execute(self, term: str, filters: FilterSet = EMPTY_FILTERS) -> Union[ResultPayload, SearchFailure]:
        url = build_search_url(self.base_url, term, filters)
        logger.debug(f"Fetching: {url}")
        get = self.session.get if self.session is not None else requests.get

        try:
            resp = get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.Timeout:
            logger.debug(f"Search timed out after {self.timeout}s: {url}")
            return SearchFailure(f"The search service did not respond within {self.timeout:g} seconds")
        except requests.ConnectionError as e:
            logger.debug(f"Connection error for {url}: {e}")
            return SearchFailure(f"Could not reach the search service at {self.base_url}")
        except requests.RequestException as e:
            logger.debug(f"Search request failed for {url}: {e}")
            return SearchFailure(str(e) or e.__class__.__name__)

        try:
            payload = ResultPayload.from_json(resp.json())
        except MalformedResponseError as e:
            logger.debug(f"Malformed search response from {url}: {e}")
            return SearchFailure(f"Unexpected response from the search service: {e}", kind="malformed")
        except ValueError as e:
            logger.debug(f"Invalid JSON from {url}: {e}")
            return SearchFailure("The search service returned invalid JSON", kind="malformed")

        logger.debug(f"{payload.count} results for {payload.query!r}")
        return payload
