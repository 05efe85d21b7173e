import math
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Tuple

# TMDB Response Schemas
class Movie(BaseModel):
    """TMDB Movie data structure, immutable once fetched"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    title: str = ""
    overview: str = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    genre_ids: Tuple[int, ...] = ()
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: float = 0.0
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    adult: bool = False
    video: bool = False
    user_rating: Optional[float] = None  # 0-5 stars, None when unrated

    @field_validator("release_date", mode="before")
    @classmethod
    def _blank_release_date(cls, value):
        # TMDB sends "" for unreleased titles
        return value or None

    @field_validator("overview", mode="before")
    @classmethod
    def _null_overview(cls, value):
        return value or ""

    def with_user_rating(self, rating: Optional[float]) -> "Movie":
        """Copy of this movie with a different user rating"""
        return self.model_copy(update={"user_rating": rating})

class RatedMovie(Movie):
    """Movie as returned by the rated list, carrying the upstream 0.5-10 rating"""
    rating: float

    def to_movie(self) -> Movie:
        """Normalize into a Movie rated on the 0-5 star scale"""
        data = self.model_dump(exclude={"rating"})
        data["user_rating"] = tmdb_value_to_stars(self.rating)
        return Movie(**data)

class MoviePage(BaseModel):
    """One page of search or popular results"""
    model_config = ConfigDict(frozen=True)

    results: Tuple[Movie, ...] = ()
    page: int = 1
    total_pages: int = 1

class RatedMoviePage(BaseModel):
    """One page of a guest session's rated movies"""
    results: List[RatedMovie] = []
    page: int = 1
    total_pages: int = 1

class Genre(BaseModel):
    id: int
    name: str

class GenreList(BaseModel):
    genres: List[Genre] = []

class GuestSession(BaseModel):
    """TMDB guest session creation response"""
    success: bool = False
    guest_session_id: Optional[str] = None
    expires_at: Optional[str] = None

# Proxy API Schemas
class MovieListResponse(BaseModel):
    """Search/popular proxy response"""
    movies: List[Movie]
    total_pages: int

class RatedMovieListResponse(BaseModel):
    """Rated list proxy response"""
    movies: List[RatedMovie]
    total_pages: int

class GenreMapResponse(BaseModel):
    genres: Dict[int, str]

class GuestSessionResponse(BaseModel):
    guest_session_id: str
    expires_at: Optional[str] = None

class RatingCreate(BaseModel):
    """Submit rating request"""
    guest_session_id: str = Field(..., min_length=1, description="TMDB guest session id")
    value: float = Field(..., ge=0.5, le=10, multiple_of=0.5, description="Rating from 0.5 to 10")

class RatingAck(BaseModel):
    success: bool
    status_message: Optional[str] = None

class ErrorResponse(BaseModel):
    error: str

# Rating scale conversion
def stars_to_tmdb_value(stars: float) -> float:
    """0-5 stars to TMDB's 0.5-10 scale"""
    return stars * 2

def tmdb_value_to_stars(value: float) -> float:
    """TMDB's 0.5-10 scale to the nearest half star"""
    return math.floor(value + 0.5) / 2
