from .movie_service import MovieService
from .authentication_service import AuthenticationService

__all__ = [
    "MovieService",
    "AuthenticationService"
]
