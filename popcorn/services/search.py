"""Search controller driving title lookups against OMDb."""

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel

from popcorn.models.movie import SearchResultSummary
from popcorn.services.cancellation import LatestOnly, Superseded
from popcorn.services.omdb import ERROR_MESSAGE, DirectoryError, OMDbClient

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    """Lifecycle of the current query."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


class SearchState(BaseModel):
    """Snapshot of the search controller."""

    query: str
    status: SearchStatus
    results: List[SearchResultSummary]
    error: str
    is_loading: bool


class SearchController:
    """Owns the query string and the results of its lookup.

    Only the lookup for the most recent query may update state; older
    lookups are cancelled when the query changes or on ``close()``.
    """

    def __init__(
        self,
        directory: OMDbClient,
        on_query_change: Optional[Callable[[], None]] = None,
    ):
        self.directory = directory
        self.on_query_change = on_query_change
        self.query = ""
        self.status = SearchStatus.IDLE
        self.results: List[SearchResultSummary] = []
        self.error = ""
        self.is_loading = False
        self._lookup = LatestOnly()

    def snapshot(self) -> SearchState:
        return SearchState(
            query=self.query,
            status=self.status,
            results=list(self.results),
            error=self.error,
            is_loading=self.is_loading,
        )

    async def set_query(self, text: str) -> SearchState:
        """Replace the query and run its lookup.

        Returns the state once this query settles. When a newer query
        supersedes this one, the returned state is whatever the newer
        query has produced so far.
        """
        self.query = text
        self._lookup.cancel()
        if self.on_query_change is not None:
            self.on_query_change()

        if not text:
            self.results = []
            self.error = ""
            self.is_loading = False
            self.status = SearchStatus.IDLE
            return self.snapshot()

        self.error = ""
        self.is_loading = True
        self.status = SearchStatus.LOADING
        try:
            results = await self._lookup.run(self.directory.search(text))
        except Superseded:
            logger.debug("Discarded superseded lookup for '%s'", text)
            return self.snapshot()
        except asyncio.CancelledError:
            self.is_loading = False
            self.status = SearchStatus.IDLE
            raise
        except DirectoryError as exc:
            logger.info("Lookup for '%s' failed: %s", text, exc)
            self._fail(SearchStatus.ERROR)
        else:
            if results:
                self.results = results
                self.error = ""
                self.status = SearchStatus.SUCCESS
            else:
                self._fail(SearchStatus.EMPTY)
        self.is_loading = False
        return self.snapshot()

    def _fail(self, status: SearchStatus) -> None:
        self.results = []
        self.error = ERROR_MESSAGE
        self.status = status

    def close(self) -> None:
        """Cancel any in-flight lookup without touching state."""
        self._lookup.cancel()
