"""UI routes returning HTML via Jinja2 templates."""

import asyncio
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.templating import Jinja2Templates

from popcorn.services.detail import DetailNotReadyError
from popcorn.services.session import MovieSession, get_movie_session

router = APIRouter()
logger = logging.getLogger(__name__)

# Templates directory
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=BASE_DIR / "templates")


def _render_main(request: Request, session: MovieSession):
    """Render both panels, the result count and the document title."""
    return templates.TemplateResponse(
        request=request,
        name="partials/main.html",
        context={"session": session, "partial": True},
    )


@router.get("/")
async def dashboard(
    request: Request, session: MovieSession = Depends(get_movie_session)
):
    """Render the main page."""
    return templates.TemplateResponse(
        request=request,
        name="dashboard.html",
        context={"session": session},
    )


@router.post("/search")
async def search(
    request: Request,
    query: str = Form(""),
    session: MovieSession = Depends(get_movie_session),
):
    """Handle a query change and return the refreshed panels."""
    await session.search.set_query(query)
    return _render_main(request, session)


@router.post("/movies/close")
async def close_movie(
    request: Request, session: MovieSession = Depends(get_movie_session)
):
    """Close the detail view."""
    session.detail.close()
    return _render_main(request, session)


@router.get("/movies/{imdb_id}")
async def select_movie(
    request: Request,
    imdb_id: str,
    session: MovieSession = Depends(get_movie_session),
):
    """Select a movie, or deselect it when it is already selected."""
    await session.detail.select(imdb_id)
    return _render_main(request, session)


@router.post("/rating/hover/{value}")
async def hover_rating(
    request: Request,
    value: int,
    session: MovieSession = Depends(get_movie_session),
):
    """Preview a rating without committing it."""
    try:
        session.detail.rating_input.hover(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return templates.TemplateResponse(
        request=request,
        name="partials/star_rating.html",
        context={"session": session},
    )


@router.post("/rating/leave")
async def leave_rating(
    request: Request, session: MovieSession = Depends(get_movie_session)
):
    """Drop the rating preview."""
    session.detail.rating_input.leave()
    return templates.TemplateResponse(
        request=request,
        name="partials/star_rating.html",
        context={"session": session},
    )


@router.post("/rating/{value}")
async def commit_rating(
    request: Request,
    value: int,
    session: MovieSession = Depends(get_movie_session),
):
    """Commit the clicked rating."""
    try:
        session.detail.rate(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _render_main(request, session)


@router.post("/watched")
async def add_watched(
    request: Request, session: MovieSession = Depends(get_movie_session)
):
    """Add the selected, rated movie to the watchlist and close it."""
    try:
        await asyncio.to_thread(session.detail.add_to_watchlist)
    except DetailNotReadyError as exc:
        logger.warning(f"Rejected watchlist add: {exc}")
        raise HTTPException(status_code=409, detail=str(exc))
    return _render_main(request, session)


@router.post("/watched/{imdb_id}/delete")
async def remove_watched(
    request: Request,
    imdb_id: str,
    session: MovieSession = Depends(get_movie_session),
):
    """Remove a movie from the watchlist."""
    await asyncio.to_thread(session.watchlist.remove_watched, imdb_id)
    return _render_main(request, session)


@router.post("/panels/{name}/toggle")
async def toggle_panel(
    request: Request,
    name: str,
    session: MovieSession = Depends(get_movie_session),
):
    """Collapse or expand one panel."""
    try:
        session.panels.toggle(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown panel '{name}'")
    return _render_main(request, session)
