from typing import Optional
from ..interfaces import MovieServiceInterface, TMDBResponse, TMDBClientInterface
from ..cache import CacheService

CACHE_TTL_24H = 24 * 60 * 60

class MovieService(MovieServiceInterface):
    """Service class for movie-related operations"""

    def __init__(self, client: TMDBClientInterface, cache: Optional[CacheService] = None,
                 cache_ttl: int = CACHE_TTL_24H):
        self.client = client
        self.cache = cache
        self.cache_ttl = cache_ttl

    def _cached_request(self, cache_key: str, endpoint: str, params: dict = None) -> TMDBResponse:
        if self.cache is not None:
            cached = self.cache.get_json(cache_key)
            if cached is not None:
                return TMDBResponse(cached, 200, True)
        resp = self.client.make_request(endpoint, params)
        if resp.success and self.cache is not None:
            self.cache.set_json(cache_key, resp.data, self.cache_ttl)
        return resp

    def get_popular_movies(self, page: int = 1) -> TMDBResponse:
        """Get popular movies"""
        return self._cached_request(f"tmdb:movie:popular:p{page}", "movie/popular", {"page": page})

    def search_movies(self, query: str, page: int = 1) -> TMDBResponse:
        """Search movies by query"""
        params = {"query": query, "page": page}
        return self.client.make_request("search/movie", params)

    def get_movie_genres(self) -> TMDBResponse:
        """Get movie genres list from TMDB"""
        return self._cached_request("tmdb:movie:genres", "genre/movie/list")

    def get_rated_movies(self, guest_session_id: str, page: int = 1) -> TMDBResponse:
        """Get movies rated in a guest session (404 while nothing is rated)"""
        params = {"page": page, "sort_by": "created_at.asc"}
        return self.client.make_request(f"guest_session/{guest_session_id}/rated/movies", params)

    def rate_movie(self, movie_id: int, guest_session_id: str, value: float) -> TMDBResponse:
        """Submit a 0.5-10 rating for a movie"""
        return self.client.make_request(
            f"movie/{movie_id}/rating",
            {"guest_session_id": guest_session_id},
            method="POST",
            json={"value": value},
        )

    def delete_rating(self, movie_id: int, guest_session_id: str) -> TMDBResponse:
        """Remove a movie rating"""
        return self.client.make_request(
            f"movie/{movie_id}/rating",
            {"guest_session_id": guest_session_id},
            method="DELETE",
        )
