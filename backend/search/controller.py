from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from pydantic import BaseModel

from ..llm.gemini_client import RestaurantInfoError, fetch_restaurant_info
from .models import LatLng, RestaurantInfo

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "Good Italian restaurants nearby"

EMPTY_QUERY_MESSAGE = "Please enter a search query."
NO_LOCATION_MESSAGE = (
    "Location not available. Please enable location services and refresh the page."
)
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

FetchFn = Callable[[str, LatLng], RestaurantInfo]


class QueryStatus(str, Enum):
    idle = "idle"
    loading = "loading"
    success = "success"
    failed = "failed"


class ErrorKind(str, Enum):
    # raised before any request is sent
    local = "local"
    upstream = "upstream"


class QueryState(BaseModel):
    query: str = DEFAULT_QUERY
    location: LatLng | None = None
    status: QueryStatus = QueryStatus.idle
    error: str | None = None
    error_kind: ErrorKind | None = None
    result: RestaurantInfo | None = None


def geolocation_error_message(reason: str) -> str:
    return f"Geolocation error: {reason}. Please enable location services."


class QueryController:
    """
    Owns one visitor's search lifecycle: idle -> loading -> success | failed.

    Each transition replaces ``state`` with a new QueryState, so a state
    handed out earlier is never mutated.
    """

    def __init__(
        self,
        state: QueryState | None = None,
        fetch: FetchFn = fetch_restaurant_info,
    ) -> None:
        self.state = state or QueryState()
        self._fetch = fetch

    def _update(self, **changes) -> QueryState:
        self.state = self.state.model_copy(update=changes)
        return self.state

    def _fail(self, message: str, kind: ErrorKind) -> QueryState:
        return self._update(status=QueryStatus.failed, error=message, error_kind=kind)

    @property
    def can_search(self) -> bool:
        return self.state.location is not None and self.state.status != QueryStatus.loading

    def location_acquired(self, location: LatLng) -> QueryState:
        return self._update(location=location, error=None, error_kind=None)

    def location_failed(self, reason: str) -> QueryState:
        # searching stays disabled until a new location arrives
        return self._update(
            location=None,
            error=geolocation_error_message(reason),
            error_kind=ErrorKind.local,
        )

    def search(self, query: str | None = None) -> QueryState:
        if query is not None:
            self._update(query=query)

        query = self.state.query
        if not query.strip():
            return self._fail(EMPTY_QUERY_MESSAGE, ErrorKind.local)
        location = self.state.location
        if location is None:
            return self._fail(NO_LOCATION_MESSAGE, ErrorKind.local)

        self._update(status=QueryStatus.loading, error=None, error_kind=None, result=None)

        try:
            result = self._fetch(query, location)
        except (RestaurantInfoError, ValueError) as exc:
            return self._fail(str(exc) or UNEXPECTED_ERROR_MESSAGE, ErrorKind.upstream)
        except Exception:
            logger.warning("Search for %r failed unexpectedly", query, exc_info=True)
            return self._fail(UNEXPECTED_ERROR_MESSAGE, ErrorKind.upstream)

        return self._update(status=QueryStatus.success, result=result)
