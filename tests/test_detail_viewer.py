import asyncio

import pytest

from popcorn.services.detail import DetailNotReadyError
from popcorn.services.omdb import ERROR_MESSAGE


@pytest.mark.asyncio
async def test_select_loads_detail_and_sets_title(movie_session, directory):
    detail = movie_session.detail

    await detail.select("tt0372784")

    assert detail.selected_id == "tt0372784"
    assert detail.detail.title == "Batman Begins"
    assert detail.is_loading is False
    assert movie_session.title.value == "Movie | Batman Begins"
    assert directory.detail_calls == ["tt0372784"]


@pytest.mark.asyncio
async def test_select_same_id_toggles_off(movie_session):
    detail = movie_session.detail
    await detail.select("tt0372784")

    await detail.select("tt0372784")

    assert detail.selected_id is None
    assert detail.detail is None
    assert movie_session.title.value == "Popcorn Movies"


@pytest.mark.asyncio
async def test_title_shows_loading_while_fetching(movie_session, directory):
    directory.gates["tt0372784"] = asyncio.Event()
    detail = movie_session.detail

    pending = asyncio.create_task(detail.select("tt0372784"))
    await asyncio.sleep(0)
    assert movie_session.title.value == "Loading..."
    assert detail.is_loading is True

    directory.gates["tt0372784"].set()
    await pending
    assert movie_session.title.value == "Movie | Batman Begins"


@pytest.mark.asyncio
async def test_stale_detail_never_overwrites_newer_selection(movie_session, directory):
    """Reselecting quickly keeps the latest movie even if the older one resolves later."""
    directory.gates["tt0372784"] = asyncio.Event()
    detail = movie_session.detail

    first = asyncio.create_task(detail.select("tt0372784"))
    await asyncio.sleep(0)
    await detail.select("tt0468569")
    directory.gates["tt0372784"].set()
    await first

    assert detail.selected_id == "tt0468569"
    assert detail.detail.title == "The Dark Knight"
    assert movie_session.title.value == "Movie | The Dark Knight"


@pytest.mark.asyncio
async def test_failed_detail_shows_error(movie_session):
    detail = movie_session.detail

    await detail.select("tt9999999")

    assert detail.detail is None
    assert detail.error == ERROR_MESSAGE
    assert detail.is_loading is False
    assert movie_session.title.value == "Loading..."


@pytest.mark.asyncio
async def test_add_requires_rating(movie_session):
    detail = movie_session.detail
    await detail.select("tt0372784")

    assert detail.can_add is False
    with pytest.raises(DetailNotReadyError):
        detail.add_to_watchlist()


@pytest.mark.asyncio
async def test_add_to_watchlist_appends_and_closes(movie_session):
    detail = movie_session.detail
    await detail.select("tt0372784")
    detail.rate(7)

    entry = detail.add_to_watchlist()

    assert entry.user_rating == 7
    assert entry.imdb_id == "tt0372784"
    assert [e.imdb_id for e in movie_session.watchlist.entries] == ["tt0372784"]
    assert detail.selected_id is None
    assert movie_session.title.value == "Popcorn Movies"


@pytest.mark.asyncio
async def test_watched_movie_shows_stored_rating(movie_session):
    detail = movie_session.detail
    await detail.select("tt0372784")
    detail.rate(9)
    detail.add_to_watchlist()

    await detail.select("tt0372784")

    assert detail.is_watched is True
    assert detail.watched_rating == 9
    assert detail.rating == 0
    assert detail.can_add is False


@pytest.mark.asyncio
async def test_new_query_closes_detail(movie_session):
    await movie_session.detail.select("tt0372784")

    await movie_session.search.set_query("batman")

    assert movie_session.detail.selected_id is None
    assert movie_session.title.value == "Popcorn Movies"


@pytest.mark.asyncio
async def test_close_discards_in_flight_detail(movie_session, directory):
    directory.gates["tt0372784"] = asyncio.Event()
    detail = movie_session.detail

    pending = asyncio.create_task(detail.select("tt0372784"))
    await asyncio.sleep(0)
    detail.close()
    directory.gates["tt0372784"].set()
    await pending

    assert detail.detail is None
    assert detail.selected_id is None
    assert detail.is_loading is False
    assert movie_session.title.value == "Popcorn Movies"


@pytest.mark.asyncio
async def test_new_query_discards_in_flight_detail(movie_session, directory):
    directory.gates["tt0372784"] = asyncio.Event()
    detail = movie_session.detail

    pending = asyncio.create_task(detail.select("tt0372784"))
    await asyncio.sleep(0)
    await movie_session.search.set_query("batman")
    directory.gates["tt0372784"].set()
    await pending

    assert detail.detail is None
    assert detail.selected_id is None
    assert detail.is_loading is False
    assert movie_session.title.value == "Popcorn Movies"
    assert len(movie_session.search.results) == 1


@pytest.mark.asyncio
async def test_cancelled_caller_clears_detail_loading(movie_session, directory):
    directory.gates["tt0372784"] = asyncio.Event()
    detail = movie_session.detail

    pending = asyncio.create_task(detail.select("tt0372784"))
    await asyncio.sleep(0)
    pending.cancel()

    with pytest.raises(asyncio.CancelledError):
        await pending
    assert detail.is_loading is False
