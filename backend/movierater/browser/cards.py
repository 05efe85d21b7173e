from datetime import datetime
from typing import List, Mapping, Optional
from pydantic import BaseModel

from movierater.schemas.movie import Movie

DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
OVERVIEW_MAX_LENGTH = 150
UNKNOWN_RELEASE_DATE = "Unknown Release Date"
NO_OVERVIEW = "No description available."


class MovieCard(BaseModel):
    """Presentation-ready fields of a movie card"""
    id: int
    title: str
    release_date_label: str
    genre_names: List[str]
    overview: str
    poster_url: Optional[str] = None
    vote_average: float
    user_rating: Optional[float] = None


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + "..."


def format_release_date(release_date: Optional[str]) -> str:
    """'2021-03-05' -> 'March 5, 2021'"""
    if not release_date:
        return UNKNOWN_RELEASE_DATE
    try:
        parsed = datetime.strptime(release_date, "%Y-%m-%d")
    except ValueError:
        return UNKNOWN_RELEASE_DATE
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def poster_url(poster_path: Optional[str], image_base_url: str = DEFAULT_IMAGE_BASE_URL) -> Optional[str]:
    if not poster_path:
        return None
    return f"{image_base_url.rstrip('/')}/{poster_path.lstrip('/')}"


def build_card(movie: Movie, genres: Mapping[int, str],
               image_base_url: str = DEFAULT_IMAGE_BASE_URL) -> MovieCard:
    return MovieCard(
        id=movie.id,
        title=movie.title,
        release_date_label=format_release_date(movie.release_date),
        genre_names=[genres.get(genre_id, "Unknown") for genre_id in movie.genre_ids],
        overview=truncate_text(movie.overview or NO_OVERVIEW, OVERVIEW_MAX_LENGTH),
        poster_url=poster_url(movie.poster_path, image_base_url),
        vote_average=movie.vote_average,
        user_rating=movie.user_rating,
    )
