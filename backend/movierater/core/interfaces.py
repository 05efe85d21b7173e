from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from dataclasses import dataclass
from .exceptions import BaseAppException

@dataclass
class TMDBConfig:
    """Configuration class for TMDB API"""
    api_key: Optional[str]
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"
    timeout: int = 30

class TMDBResponse:
    """Response wrapper for TMDB API calls"""
    def __init__(self, data: Dict, status_code: int, success: bool):
        self.data = data
        self.status_code = status_code
        self.success = success

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

class TMDBError(BaseAppException):
    """Custom exception for TMDB API errors"""
    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        # upstream status, the HTTP status we answer with stays 500
        self.upstream_status = status_code

class TMDBClientInterface(ABC):
    """Abstract interface for TMDB client"""

    @abstractmethod
    def make_request(self, endpoint: str, params: Dict = None, method: str = "GET",
                     json: Optional[Dict[str, Any]] = None) -> TMDBResponse:
        pass

class MovieServiceInterface(ABC):
    """Abstract interface for movie service"""

    @abstractmethod
    def get_popular_movies(self, page: int = 1) -> TMDBResponse:
        pass

    @abstractmethod
    def search_movies(self, query: str, page: int = 1) -> TMDBResponse:
        pass

    @abstractmethod
    def get_movie_genres(self) -> TMDBResponse:
        pass

    @abstractmethod
    def get_rated_movies(self, guest_session_id: str, page: int = 1) -> TMDBResponse:
        pass

    @abstractmethod
    def rate_movie(self, movie_id: int, guest_session_id: str, value: float) -> TMDBResponse:
        pass

    @abstractmethod
    def delete_rating(self, movie_id: int, guest_session_id: str) -> TMDBResponse:
        pass

class AuthenticationServiceInterface(ABC):
    """Abstract interface for guest session authentication"""

    @abstractmethod
    def create_guest_session(self) -> TMDBResponse:
        pass
