"""Result lifecycle state machine.

    IDLE ──begin──▶ LOADING ──payload, count == 0──▶ EMPTY
                       │    ──payload, count > 0───▶ POPULATED
                       │    ──failure──────────────▶ FAILED
    any state ──begin──▶ LOADING      any state ──reset──▶ IDLE

Each ``begin`` issues a new token. ``resolve`` only accepts the most recently
issued token, so an older execution that finishes late is dropped.
"""

import enum
import logging
from typing import Optional, Union

from .models import FilterSet, ResultPayload, SearchFailure

logger = logging.getLogger(__name__)


class ResultStatus(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"
    FAILED = "failed"


class ResultLifecycle:
    def __init__(self):
        self.status = ResultStatus.IDLE
        self.payload: Optional[ResultPayload] = None
        self.failure: Optional[SearchFailure] = None
        self.active_key = None  # (term, filters) of the latest execution
        self._token = 0

    @property
    def latest_token(self) -> int:
        return self._token

    @property
    def is_loading(self) -> bool:
        return self.status is ResultStatus.LOADING

    def begin(self, term: str, filters: FilterSet) -> int:
        self._token += 1
        self.status = ResultStatus.LOADING
        self.payload = None
        self.failure = None
        self.active_key = (term, filters)
        return self._token

    def resolve(self, token: int, outcome: Union[ResultPayload, SearchFailure]) -> bool:
        """Record an execution outcome. Returns False if the token is stale."""
        if token != self._token or self.status is not ResultStatus.LOADING:
            logger.debug(f"Discarding stale outcome for execution {token} (latest {self._token})")
            return False

        if isinstance(outcome, SearchFailure):
            self.status = ResultStatus.FAILED
            self.failure = outcome
        else:
            self.payload = outcome
            self.status = ResultStatus.POPULATED if outcome.count > 0 else ResultStatus.EMPTY
        return True

    def reset(self):
        # Bumping the token also invalidates any execution still in flight
        self._token += 1
        self.status = ResultStatus.IDLE
        self.payload = None
        self.failure = None
        self.active_key = None
