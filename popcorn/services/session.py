"""Process-wide application state shared by the web routes."""

import logging
from functools import lru_cache

from popcorn.core.config import Settings, get_settings
from popcorn.core.storage import KeyValueStore, SqlKeyValueStore
from popcorn.services.detail import DetailViewer
from popcorn.services.omdb import OMDbClient
from popcorn.services.presentation import PanelToggles, count_label
from popcorn.services.rating import RatingInput
from popcorn.services.search import SearchController
from popcorn.services.title import DocumentTitle
from popcorn.services.watchlist import WatchlistManager, WatchlistRepository

logger = logging.getLogger(__name__)

DETAIL_MAX_RATING = 10
DETAIL_ICON_SIZE = 24


class MovieSession:
    """Wires the search, detail and watchlist components together.

    Changing the query closes the detail view, which also restores the
    default document title.
    """

    def __init__(
        self,
        directory: OMDbClient,
        store: KeyValueStore,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.directory = directory
        self.title = DocumentTitle(settings.app_title)
        self.watchlist = WatchlistManager(
            WatchlistRepository(store, settings.watchlist_storage_key)
        )
        self.detail = DetailViewer(
            directory,
            self.watchlist,
            self.title,
            RatingInput(max_rating=DETAIL_MAX_RATING, icon_size=DETAIL_ICON_SIZE),
        )
        self.search = SearchController(directory, on_query_change=self.detail.close)
        self.panels = PanelToggles()

    @property
    def count_label(self) -> str:
        return count_label(self.search.results)

    async def aclose(self) -> None:
        self.search.close()
        self.detail.close()
        await self.directory.aclose()


@lru_cache
def get_movie_session() -> MovieSession:
    """Get the cached session backed by the configured database."""
    from popcorn.core.database import engine

    logger.info("Creating movie session")
    return MovieSession(OMDbClient(), SqlKeyValueStore(engine))
