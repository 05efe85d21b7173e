from .state import BrowserState, BrowserStore, RatedState, SearchState
from .reconciler import RatingReconciler, reconcile_rating, validate_rating
from .fetchers import RatedMoviesFetcher, SearchFetcher
from .session_manager import SessionManager
from .genre_lookup import GenreLookup
from .gateway import MovieGateway
from .cards import MovieCard, build_card
from .controller import MovieBrowser

__all__ = [
    "BrowserState",
    "BrowserStore",
    "RatedState",
    "SearchState",
    "RatingReconciler",
    "reconcile_rating",
    "validate_rating",
    "RatedMoviesFetcher",
    "SearchFetcher",
    "SessionManager",
    "GenreLookup",
    "MovieGateway",
    "MovieCard",
    "build_card",
    "MovieBrowser"
]
