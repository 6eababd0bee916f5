"""Watchlist persistence and statistics."""

import json
import logging
import math
import threading
from typing import Iterable, List, Optional, Set

from pydantic import ValidationError

from popcorn.core.storage import KeyValueStore
from popcorn.models.movie import WatchedEntry, WatchedSummary

logger = logging.getLogger(__name__)


def average(values: Iterable[float]) -> float:
    """Arithmetic mean; NaN for an empty input."""
    values = list(values)
    if not values:
        return math.nan
    return sum(values) / len(values)


def _or_none(value: float) -> Optional[float]:
    return None if math.isnan(value) else value


class WatchlistRepository:
    """Loads and saves the watchlist under a single store key."""

    def __init__(self, store: KeyValueStore, key: str = "WatchedLocSto"):
        self.store = store
        self.key = key

    @property
    def backup_key(self) -> str:
        return f"{self.key}.corrupt"

    def load(self) -> List[WatchedEntry]:
        """Return the stored entries that can be read.

        Unreadable records are skipped and the raw value is copied to
        ``backup_key`` before the next save can overwrite it.
        """
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except ValueError as exc:
            logger.warning(
                "Ignoring unreadable watchlist under '%s': %s", self.key, exc
            )
            self._backup(raw)
            return []
        if not isinstance(records, list):
            logger.warning(
                "Ignoring watchlist under '%s': expected a list, got %s",
                self.key,
                type(records).__name__,
            )
            self._backup(raw)
            return []

        entries: List[WatchedEntry] = []
        for index, record in enumerate(records):
            try:
                entries.append(WatchedEntry.model_validate(record))
            except ValidationError as exc:
                logger.warning(
                    "Skipping unreadable watchlist record %d under '%s': %s",
                    index,
                    self.key,
                    exc,
                )
        if len(entries) != len(records):
            self._backup(raw)
        return entries

    def _backup(self, raw: str) -> None:
        self.store.set(self.backup_key, raw)
        logger.warning("Copied the original watchlist to '%s'", self.backup_key)

    def save(self, entries: List[WatchedEntry]) -> None:
        payload = [entry.model_dump(mode="json", by_alias=True) for entry in entries]
        self.store.set(self.key, json.dumps(payload))


class WatchlistManager:
    """Owns the ordered list of watched movies.

    Every mutation rewrites the whole list through the repository.
    Mutations are serialized so they can run in worker threads.
    Inserts are not deduplicated.
    """

    def __init__(self, repository: WatchlistRepository):
        self.repository = repository
        self._lock = threading.Lock()
        self._entries: List[WatchedEntry] = repository.load()
        logger.debug("Loaded %d watched movies", len(self._entries))

    @property
    def entries(self) -> List[WatchedEntry]:
        return list(self._entries)

    def ids(self) -> Set[str]:
        return {entry.imdb_id for entry in self._entries}

    def find(self, imdb_id: str) -> Optional[WatchedEntry]:
        return next((e for e in self._entries if e.imdb_id == imdb_id), None)

    def add_watched(self, entry: WatchedEntry) -> None:
        with self._lock:
            self._entries = [*self._entries, entry]
            self.repository.save(self._entries)
        logger.info(f"Added '{entry.title}' ({entry.imdb_id}) to the watchlist")

    def remove_watched(self, imdb_id: str) -> None:
        with self._lock:
            self._entries = [e for e in self._entries if e.imdb_id != imdb_id]
            self.repository.save(self._entries)
        logger.info(f"Removed {imdb_id} from the watchlist")

    def summary(self) -> WatchedSummary:
        return WatchedSummary(
            count=len(self._entries),
            avg_imdb_rating=_or_none(
                average(e.external_rating for e in self._entries)
            ),
            avg_user_rating=_or_none(average(e.user_rating for e in self._entries)),
            avg_runtime=_or_none(average(e.runtime_minutes for e in self._entries)),
        )
