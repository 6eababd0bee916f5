import asyncio
from typing import Dict, List

import pytest

from popcorn.core.config import Settings
from popcorn.core.storage import InMemoryKeyValueStore
from popcorn.models.movie import MovieDetail, SearchResultSummary
from popcorn.services.omdb import MovieNotFoundError
from popcorn.services.session import MovieSession


BATMAN_BEGINS = {
    "Title": "Batman Begins",
    "Year": "2005",
    "Released": "15 Jun 2005",
    "Runtime": "140 min",
    "Genre": "Action, Crime, Drama",
    "Director": "Christopher Nolan",
    "Actors": "Christian Bale, Michael Caine, Ken Watanabe",
    "Plot": "After witnessing his parents' death, Bruce learns the art of fighting.",
    "Poster": "https://example.com/batman-begins.jpg",
    "imdbRating": "8.2",
    "imdbID": "tt0372784",
    "Response": "True",
}

DARK_KNIGHT = {
    "Title": "The Dark Knight",
    "Year": "2008",
    "Released": "18 Jul 2008",
    "Runtime": "152 min",
    "Genre": "Action, Crime, Drama",
    "Director": "Christopher Nolan",
    "Actors": "Christian Bale, Heath Ledger, Aaron Eckhart",
    "Plot": "Batman faces the Joker.",
    "Poster": "https://example.com/dark-knight.jpg",
    "imdbRating": "9.0",
    "imdbID": "tt0468569",
    "Response": "True",
}


class FakeDirectory:
    """In-process stand-in for the OMDb client.

    Queries listed in ``gates`` block until their event is set, which
    lets tests interleave lookups.
    """

    def __init__(self):
        self.searches: Dict[str, List[dict]] = {
            "batman": [
                {
                    "Title": "Batman Begins",
                    "Year": "2005",
                    "imdbID": "tt0372784",
                    "Type": "movie",
                    "Poster": "https://example.com/batman-begins.jpg",
                }
            ],
        }
        self.details: Dict[str, dict] = {
            BATMAN_BEGINS["imdbID"]: BATMAN_BEGINS,
            DARK_KNIGHT["imdbID"]: DARK_KNIGHT,
        }
        self.gates: Dict[str, asyncio.Event] = {}
        self.search_calls: List[str] = []
        self.detail_calls: List[str] = []
        self.closed = False

    async def search(self, query: str) -> List[SearchResultSummary]:
        self.search_calls.append(query)
        if query in self.gates:
            await self.gates[query].wait()
        if query not in self.searches:
            raise MovieNotFoundError("Movie not found!")
        return [SearchResultSummary.model_validate(r) for r in self.searches[query]]

    async def get_movie(self, imdb_id: str) -> MovieDetail:
        self.detail_calls.append(imdb_id)
        if imdb_id in self.gates:
            await self.gates[imdb_id].wait()
        if imdb_id not in self.details:
            raise MovieNotFoundError("Incorrect IMDb ID.")
        return MovieDetail.model_validate(self.details[imdb_id])

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def movie_session(directory, store, settings):
    return MovieSession(directory, store, settings)


@pytest.fixture
def batman_begins_payload():
    """OMDb detail response for Batman Begins."""
    return dict(BATMAN_BEGINS)
