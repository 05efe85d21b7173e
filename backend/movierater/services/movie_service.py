import logging
from typing import Dict, List, Optional
from movierater.core.config import Settings, get_settings
from movierater.core.exceptions import NotFoundError
from movierater.core.interfaces import (
    AuthenticationServiceInterface, MovieServiceInterface, TMDBError, TMDBResponse
)
from movierater.core.tmdb_service import TMDBServiceFactory
from movierater.schemas.movie import (
    GenreList, GuestSession, MoviePage, RatedMovie, RatedMoviePage, RatingAck
)

logger = logging.getLogger(__name__)

def _ensure_success(response: TMDBResponse, action: str) -> TMDBResponse:
    if response.success:
        return response
    if response.not_found:
        raise NotFoundError(f"Failed to {action}: not found")
    raise TMDBError(f"Failed to {action}: TMDB returned {response.status_code}", response.status_code)

class MovieService:
    """Service for movie operations with TMDB integration"""

    def __init__(self, tmdb_movie_service: Optional[MovieServiceInterface] = None,
                 authentication_service: Optional[AuthenticationServiceInterface] = None,
                 settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        if tmdb_movie_service is None or authentication_service is None:
            services = TMDBServiceFactory.create_all_services(self.settings)
            tmdb_movie_service = tmdb_movie_service or services["movie_service"]
            authentication_service = authentication_service or services["authentication_service"]

        self.tmdb_movie_service = tmdb_movie_service
        self.authentication_service = authentication_service

    def browse_movies(self, query: Optional[str], page: int = 1) -> MoviePage:
        """Search when a query is given, otherwise list popular movies"""
        if not query or not query.strip():
            logger.info("Empty query received. Fetching popular movies.")
            return self.get_popular_movies(page)
        return self.search_movies(query, page)

    def get_popular_movies(self, page: int = 1) -> MoviePage:
        """Get popular movies from TMDB"""
        response = _ensure_success(self.tmdb_movie_service.get_popular_movies(page), "fetch popular movies")
        return MoviePage(**response.data)

    def search_movies(self, query: str, page: int = 1) -> MoviePage:
        """Search movies on TMDB"""
        response = _ensure_success(self.tmdb_movie_service.search_movies(query, page), "search movies")
        return MoviePage(**response.data)

    def get_genres(self) -> Dict[int, str]:
        """Get the genre id -> name mapping"""
        response = _ensure_success(self.tmdb_movie_service.get_movie_genres(), "fetch genres")
        return {genre.id: genre.name for genre in GenreList(**response.data).genres}

    def create_guest_session(self) -> GuestSession:
        """Create a TMDB guest session"""
        response = _ensure_success(self.authentication_service.create_guest_session(), "create guest session")
        session = GuestSession(**response.data)
        if not (session.success and session.guest_session_id):
            raise TMDBError("Failed to create a valid guest session.")
        logger.info(f"New guest session created: {session.guest_session_id}")
        return session

    def get_rated_movies_page(self, guest_session_id: str, page: int = 1) -> RatedMoviePage:
        """One page of rated movies; an unknown or empty session yields an empty page"""
        response = self.tmdb_movie_service.get_rated_movies(guest_session_id, page)
        if response.not_found:
            logger.info(f"No rated movies for guest session {guest_session_id}")
            return RatedMoviePage(page=page, total_pages=1)
        _ensure_success(response, "fetch rated movies")
        return RatedMoviePage(**response.data)

    def get_rated_movies(self, guest_session_id: str) -> List[RatedMovie]:
        """All rated movies of a guest session across every page"""
        first = self.get_rated_movies_page(guest_session_id, 1)
        movies = list(first.results)
        for page in range(2, first.total_pages + 1):
            movies.extend(self.get_rated_movies_page(guest_session_id, page).results)
        return movies

    def rate_movie(self, movie_id: int, guest_session_id: str, value: float) -> RatingAck:
        """Submit a 0.5-10 rating"""
        response = _ensure_success(
            self.tmdb_movie_service.rate_movie(movie_id, guest_session_id, value), "submit rating"
        )
        return RatingAck(success=True, status_message=response.data.get("status_message"))

    def delete_rating(self, movie_id: int, guest_session_id: str) -> RatingAck:
        """Remove a rating"""
        response = _ensure_success(
            self.tmdb_movie_service.delete_rating(movie_id, guest_session_id), "delete rating"
        )
        return RatingAck(success=True, status_message=response.data.get("status_message"))
