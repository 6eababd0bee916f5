"""Movie models mirroring the OMDb wire format."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def _parse_float(value: Optional[str]) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _parse_minutes(runtime: Optional[str]) -> int:
    """Parse the leading number of a runtime such as "140 min"."""
    if not runtime:
        return 0
    try:
        return int(runtime.split(" ")[0])
    except ValueError:
        return 0


class SearchResultSummary(BaseModel):
    """A search result from OMDb (lightweight for list display)."""

    model_config = ConfigDict(populate_by_name=True)

    imdb_id: str = Field(alias="imdbID")
    title: str = Field("Unknown", alias="Title")
    year: str = Field("", alias="Year")
    poster_url: Optional[str] = Field(None, alias="Poster")


class MovieDetail(BaseModel):
    """A movie with full OMDb data."""

    model_config = ConfigDict(populate_by_name=True)

    imdb_id: str = Field(alias="imdbID")
    title: str = Field(alias="Title")
    year: str = Field("", alias="Year")
    released: str = Field("", alias="Released")
    runtime: str = Field("", alias="Runtime")  # e.g. "140 min" or "N/A"
    genre: str = Field("", alias="Genre")
    imdb_rating: str = Field("", alias="imdbRating")
    poster_url: Optional[str] = Field(None, alias="Poster")
    plot: str = Field("", alias="Plot")
    actors: str = Field("", alias="Actors")
    director: str = Field("", alias="Director")

    @property
    def runtime_minutes(self) -> int:
        return _parse_minutes(self.runtime)

    @property
    def external_rating(self) -> float:
        return _parse_float(self.imdb_rating)


class WatchedEntry(MovieDetail):
    """A movie the user has watched, with the rating they gave it."""

    user_rating: int = Field(alias="passedRate", ge=0, le=10)

    @classmethod
    def from_detail(cls, detail: MovieDetail, user_rating: int) -> "WatchedEntry":
        return cls(**detail.model_dump(), user_rating=user_rating)


class WatchedSummary(BaseModel):
    """Aggregate statistics over the watchlist.

    Averages are None when the watchlist is empty.
    """

    count: int
    avg_imdb_rating: Optional[float] = None
    avg_user_rating: Optional[float] = None
    avg_runtime: Optional[float] = None

    @staticmethod
    def format_average(value: Optional[float]) -> str:
        if value is None:
            return "-"
        return f"{value:.1f}"

    @property
    def imdb_rating_display(self) -> str:
        return self.format_average(self.avg_imdb_rating)

    @property
    def user_rating_display(self) -> str:
        return self.format_average(self.avg_user_rating)

    @property
    def runtime_display(self) -> str:
        return self.format_average(self.avg_runtime)
