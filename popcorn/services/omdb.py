"""OMDb service for searching and fetching movie details."""

import logging
from typing import Any, List

import niquests
from cachetools import TTLCache

from popcorn.core.config import Settings, get_settings
from popcorn.models.movie import MovieDetail, SearchResultSummary

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Movie not found or something went wrong !!"


class DirectoryError(Exception):
    """Domain exception for OMDb failures."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception


class MovieNotFoundError(DirectoryError):
    """OMDb answered with Response="False"."""


class OMDbClient:
    """Async client for the OMDb directory.

    Search and detail lookups share one HTTP session. Detail records
    are cached for ``detail_cache_ttl`` seconds.
    """

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self._settings = settings
        self.api_key = settings.omdb_api_key
        self.base_url = settings.omdb_base_url
        self.session = niquests.AsyncSession()
        if settings.proxy:
            self.session.proxies = {"http": settings.proxy, "https": settings.proxy}
        self.detail_cache: TTLCache = TTLCache(
            maxsize=100, ttl=settings.detail_cache_ttl
        )

    async def aclose(self) -> None:
        """Properly close the internal HTTP session."""
        if hasattr(self, "session") and self.session:
            await self.session.close()

    async def _get(self, params: dict[str, str]) -> dict[str, Any]:
        """Perform one GET against OMDb and return the decoded payload."""
        query = {"apikey": self.api_key, **params}
        kwargs: dict[str, Any] = {}
        if self._settings.request_timeout:
            kwargs["timeout"] = self._settings.request_timeout
        try:
            response = await self.session.get(self.base_url, params=query, **kwargs)
            response.raise_for_status()
            data = response.json()
        except niquests.exceptions.RequestException as exc:
            logger.error("OMDb request %s failed: %s", params, exc)
            raise DirectoryError(f"OMDb request failed: {exc}", exc) from exc
        except ValueError as exc:
            logger.error("OMDb returned invalid JSON for %s: %s", params, exc)
            raise DirectoryError("OMDb returned invalid JSON", exc) from exc

        if not isinstance(data, dict):
            raise DirectoryError(f"Unexpected OMDb payload type {type(data)}")
        if data.get("Response") == "False":
            raise MovieNotFoundError(data.get("Error") or "Movie not found")
        return data

    async def search(self, query: str) -> List[SearchResultSummary]:
        """Search OMDb for movies by title."""
        data = await self._get({"s": query})
        results = data.get("Search") or []
        if not isinstance(results, list):
            logger.warning(f"Expected list for Search, got {type(results)}")
            return []
        return [SearchResultSummary.model_validate(item) for item in results]

    async def get_movie(self, imdb_id: str) -> MovieDetail:
        """Fetch full movie details from OMDb (cached)."""
        if imdb_id in self.detail_cache:
            return self.detail_cache[imdb_id]

        data = await self._get({"i": imdb_id})
        try:
            detail = MovieDetail.model_validate(data)
        except ValueError as exc:
            logger.error("Malformed movie details for ID %s: %s", imdb_id, exc)
            raise DirectoryError(
                f"Malformed movie details for ID {imdb_id}", exc
            ) from exc

        self.detail_cache[imdb_id] = detail
        return detail
