"""Search session state: location, draft and applied filters, result lifecycle.

The controller is the single owner of session state. Views read it, the
application loop feeds it user actions and finished executions. Every change
of active search goes through the location: actions push a new location, and
``_sync_location`` derives the applied filters and the execution from it.
"""

import logging
from typing import Callable, List, Optional

from .config import APP_TITLE
from .filters import FilterDraftStore
from .lifecycle import ResultLifecycle, ResultStatus
from .models import EMPTY_FILTERS, FilterSet, SearchFailure, SearchQuery
from .navigation import (
    HOME_PATH,
    ROUTE_HOME,
    ROUTE_SEARCH,
    NavigationHistory,
    canonical_location,
    decode,
    encode,
    location_query,
)
from .network_utils import SearchClient

logger = logging.getLogger(__name__)


class SearchController:
    """Session state shared by the landing and results views.

    ``runner(token, term, filters)`` starts an execution and must eventually
    hand the outcome to ``complete(token, outcome)``. The default runner calls
    the client synchronously.
    """

    def __init__(self, client: Optional[SearchClient] = None, location: str = HOME_PATH,
                 runner: Optional[Callable] = None, on_alert: Optional[Callable[[str], None]] = None):
        self.client = client or SearchClient()
        self.history = NavigationHistory(location)
        self.lifecycle = ResultLifecycle()
        self.runner = runner or self.run_now
        self.on_alert = on_alert

        self.route = ROUTE_HOME
        self.query: Optional[SearchQuery] = None
        self.text = ""
        self.home_draft = FilterDraftStore()
        self.results_draft = FilterDraftStore()
        self.applied: FilterSet = EMPTY_FILTERS
        self.filters_applied = False
        self.alerts: List[str] = []

    # State accessors

    @property
    def location(self) -> str:
        return self.history.current

    @property
    def draft(self) -> FilterDraftStore:
        """Draft store of the view currently shown"""
        return self.results_draft if self.route == ROUTE_SEARCH else self.home_draft

    @property
    def status(self) -> ResultStatus:
        return self.lifecycle.status

    @property
    def title(self) -> str:
        if self.query:
            return f"{self.query.term} - {APP_TITLE}"
        return APP_TITLE

    # User actions

    def start(self):
        """Load the initial location. A bare root is rewritten to "/" in place."""
        canonical = canonical_location(self.history.current)
        if canonical != self.history.current:
            self.history.replace(canonical)
        self._sync_location()

    def open(self, location: str) -> bool:
        """Navigate to a location typed by the user"""
        return self._navigate(canonical_location(location))

    def submit(self, text: Optional[str] = None) -> bool:
        """Search for text. Blank text is ignored without navigating."""
        if text is None:
            text = self.text
        if not text or not text.strip():
            logger.debug("Ignoring blank search submission")
            return False

        self.text = text
        # The landing page carries its filters; a new term on the results page starts unfiltered
        filters = self.home_draft.snapshot() if self.route == ROUTE_HOME else EMPTY_FILTERS
        self._navigate(encode(text, filters), force=True)
        return True

    def apply_filters(self) -> bool:
        if self.route != ROUTE_SEARCH or self.query is None:
            return False
        self.applied = self.results_draft.snapshot()
        self.filters_applied = True
        self._navigate(encode(self.query.term, self.applied))
        return True

    def clear_filters(self) -> bool:
        if self.route != ROUTE_SEARCH:
            self.home_draft.clear()
            return False
        self.results_draft.clear()
        self.applied = EMPTY_FILTERS
        self.filters_applied = False
        if self.query is None:
            return False
        self._navigate(encode(self.query.term, EMPTY_FILTERS))
        return True

    def go_home(self) -> bool:
        return self._navigate(HOME_PATH)

    def back(self) -> bool:
        if self.history.back() is None:
            return False
        self._sync_location()
        return True

    def forward(self) -> bool:
        if self.history.forward() is None:
            return False
        self._sync_location()
        return True

    # Execution

    def run_now(self, token: int, term: str, filters: FilterSet):
        self.complete(token, self.client.execute(term, filters))

    def complete(self, token: int, outcome) -> bool:
        """Apply a finished execution. Outcomes of superseded executions are dropped."""
        if not self.lifecycle.resolve(token, outcome):
            return False
        if isinstance(outcome, SearchFailure):
            message = f"Error during search: {outcome.message}"
            logger.warning(message)
            self.alerts.append(message)
            if self.on_alert:
                self.on_alert(message)
        return True

    # Location handling

    def _navigate(self, location: str, force: bool = False) -> bool:
        changed = self.history.push(location)
        if changed or force:
            self._sync_location(force=force)
        return changed

    def _enter_home(self):
        if self.route != ROUTE_HOME:
            self.text = ""
            self.home_draft.clear()
        self.route = ROUTE_HOME
        self.query = None
        self.applied = EMPTY_FILTERS
        self.filters_applied = False
        self.lifecycle.reset()

    def _sync_location(self, force: bool = False):
        location = decode(self.history.current)
        if location.route == ROUTE_HOME:
            self._enter_home()
            return

        self.route = ROUTE_SEARCH
        query = location_query(location)
        if query is None:
            self.query = None
            self.text = ""
            self.applied = EMPTY_FILTERS
            self.results_draft.clear()
            self.lifecycle.reset()
            return

        self.query = query
        self.text = query.term
        self.applied = location.filters
        self.results_draft.load(location.filters)

        key = (query.term, location.filters)
        if not force and self.lifecycle.active_key == key:
            logger.debug(f"Location {self.location} matches the active search, not re-running")
            return
        self._execute(query.term, location.filters)

    def _execute(self, term: str, filters: FilterSet):
        token = self.lifecycle.begin(term, filters)
        logger.debug(f"Execution {token}: {term!r} {filters}")
        self.runner(token, term, filters)
