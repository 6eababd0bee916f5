"""Detail viewer for the selected movie."""

import asyncio
import logging
from typing import Optional

from popcorn.models.movie import MovieDetail, WatchedEntry
from popcorn.services.cancellation import LatestOnly, Superseded
from popcorn.services.omdb import ERROR_MESSAGE, DirectoryError, OMDbClient
from popcorn.services.rating import RatingInput
from popcorn.services.title import DocumentTitle
from popcorn.services.watchlist import WatchlistManager

logger = logging.getLogger(__name__)


class DetailNotReadyError(Exception):
    """Raised when adding to the watchlist without a loaded, rated, unwatched movie."""


class DetailViewer:
    """Shows one selected movie and lets the user rate and keep it.

    Selecting the current movie again closes the view. Detail fetches
    follow the same latest-wins rule as searches, so a slow response for
    a previous selection never replaces the current one.
    """

    def __init__(
        self,
        directory: OMDbClient,
        watchlist: WatchlistManager,
        title: DocumentTitle,
        rating_input: RatingInput,
    ):
        self.directory = directory
        self.watchlist = watchlist
        self.title = title
        self.rating_input = rating_input
        self.selected_id: Optional[str] = None
        self.detail: Optional[MovieDetail] = None
        self.error = ""
        self.is_loading = False
        self._fetch = LatestOnly()

    async def select(self, imdb_id: str) -> None:
        if imdb_id == self.selected_id:
            self.close()
            return

        self._fetch.cancel()
        self.selected_id = imdb_id
        self.detail = None
        self.error = ""
        self.rating_input.reset()
        await self.load()

    async def load(self) -> None:
        """Fetch the detail record of the selected movie."""
        imdb_id = self.selected_id
        if imdb_id is None:
            return

        self.is_loading = True
        self.title.loading()
        try:
            detail = await self._fetch.run(self.directory.get_movie(imdb_id))
        except Superseded:
            logger.debug("Discarded superseded detail fetch for %s", imdb_id)
            return
        except asyncio.CancelledError:
            self.is_loading = False
            raise
        except DirectoryError as exc:
            logger.warning("Failed to load details for %s: %s", imdb_id, exc)
            self.detail = None
            self.error = ERROR_MESSAGE
        else:
            self.detail = detail
            self.title.movie(detail.title)
        self.is_loading = False

    @property
    def is_open(self) -> bool:
        return self.selected_id is not None

    @property
    def is_watched(self) -> bool:
        return self.selected_id in self.watchlist.ids()

    @property
    def watched_rating(self) -> Optional[int]:
        if self.selected_id is None:
            return None
        entry = self.watchlist.find(self.selected_id)
        return entry.user_rating if entry else None

    @property
    def rating(self) -> int:
        return self.rating_input.rating

    def rate(self, value: int) -> int:
        return self.rating_input.click(value)

    @property
    def can_add(self) -> bool:
        return self.detail is not None and not self.is_watched and self.rating > 0

    def add_to_watchlist(self) -> WatchedEntry:
        if not self.can_add:
            raise DetailNotReadyError("Select, load and rate an unwatched movie first")
        entry = WatchedEntry.from_detail(self.detail, self.rating)
        self.watchlist.add_watched(entry)
        self.close()
        return entry

    def close(self) -> None:
        self._fetch.cancel()
        self.selected_id = None
        self.detail = None
        self.error = ""
        self.is_loading = False
        self.rating_input.reset()
        self.title.reset()
