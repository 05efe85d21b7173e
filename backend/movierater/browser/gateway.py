import asyncio
from typing import Dict, List, Optional

from movierater.core.config import Settings
from movierater.services.movie_service import MovieService
from movierater.schemas.movie import Movie, MoviePage, RatingAck, stars_to_tmdb_value


class MovieGateway:
    """Event-loop facade over the blocking movie service

    Each call runs the service in a worker thread so the loop never blocks;
    results come back as immutable schema objects.
    """

    def __init__(self, movie_service: MovieService):
        self.movie_service = movie_service

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MovieGateway":
        return cls(MovieService(settings=settings))

    async def browse_movies(self, query: str, page: int) -> MoviePage:
        return await asyncio.to_thread(self.movie_service.browse_movies, query, page)

    async def fetch_genres(self) -> Dict[int, str]:
        return await asyncio.to_thread(self.movie_service.get_genres)

    async def create_guest_session(self) -> str:
        session = await asyncio.to_thread(self.movie_service.create_guest_session)
        return session.guest_session_id

    async def fetch_rated_movies(self, guest_session_id: str) -> List[Movie]:
        """Rated movies normalized to star ratings; empty for a fresh session"""
        rated = await asyncio.to_thread(self.movie_service.get_rated_movies, guest_session_id)
        return [movie.to_movie() for movie in rated]

    async def submit_rating(self, movie_id: int, guest_session_id: str, stars: float) -> RatingAck:
        value = stars_to_tmdb_value(stars)
        return await asyncio.to_thread(self.movie_service.rate_movie, movie_id, guest_session_id, value)

    async def delete_rating(self, movie_id: int, guest_session_id: str) -> RatingAck:
        return await asyncio.to_thread(self.movie_service.delete_rating, movie_id, guest_session_id)
