"""API routes returning JSON for external tools."""

import asyncio
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field

from popcorn.models.movie import (
    MovieDetail,
    SearchResultSummary,
    WatchedEntry,
    WatchedSummary,
)
from popcorn.services.omdb import DirectoryError, MovieNotFoundError
from popcorn.services.session import MovieSession, get_movie_session

router = APIRouter()


def _directory_http_error(exc: DirectoryError) -> HTTPException:
    if isinstance(exc, MovieNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


@router.get("/search", response_model=List[SearchResultSummary])
async def api_search(
    q: str = Query(..., min_length=1, description="Search query"),
    session: MovieSession = Depends(get_movie_session),
):
    """Search OMDb by title.

    Stateless: this does not change the query shown in the UI.
    """
    try:
        return await session.directory.search(q)
    except DirectoryError as exc:
        raise _directory_http_error(exc)


@router.get("/movies/{imdb_id}", response_model=MovieDetail)
async def api_movie(
    imdb_id: str, session: MovieSession = Depends(get_movie_session)
):
    """Fetch one movie's details."""
    try:
        return await session.directory.get_movie(imdb_id)
    except DirectoryError as exc:
        raise _directory_http_error(exc)


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "popcorn"}


# --- Watchlist ---


class WatchedRequest(BaseModel):
    """Request body for adding a movie to the watchlist."""

    imdb_id: str
    user_rating: int = Field(ge=1, le=10)


@router.get("/watchlist", response_model=List[WatchedEntry])
async def list_watched(session: MovieSession = Depends(get_movie_session)):
    """List watched movies in insertion order."""
    return session.watchlist.entries


@router.get("/watchlist/summary", response_model=WatchedSummary)
async def watched_summary(session: MovieSession = Depends(get_movie_session)):
    """Aggregate statistics over the watchlist."""
    return session.watchlist.summary()


@router.post("/watchlist", response_model=WatchedEntry, status_code=201)
async def add_watched(
    request: WatchedRequest, session: MovieSession = Depends(get_movie_session)
):
    """Fetch a movie and append it to the watchlist with the given rating."""
    try:
        detail = await session.directory.get_movie(request.imdb_id)
    except DirectoryError as exc:
        raise _directory_http_error(exc)

    entry = WatchedEntry.from_detail(detail, request.user_rating)
    await asyncio.to_thread(session.watchlist.add_watched, entry)
    return entry


@router.delete("/watchlist/{imdb_id}", status_code=204)
async def remove_watched(
    imdb_id: str, session: MovieSession = Depends(get_movie_session)
):
    """Remove every entry with this id."""
    await asyncio.to_thread(session.watchlist.remove_watched, imdb_id)
    return Response(status_code=204)
