"""
Immutable state snapshots for the browser.

Every change produces a new snapshot; nothing here is mutated in place, so
the search results and the rated list never share a record that one of them
could change under the other.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import AbstractSet, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from movierater.core.enums import ActiveTab
from movierater.schemas.movie import Movie

logger = logging.getLogger(__name__)

RATED_PAGE_SIZE = 20  # TMDB list page size


def _index_of(movies: Tuple[Movie, ...], movie_id: int) -> int:
    for index, movie in enumerate(movies):
        if movie.id == movie_id:
            return index
    return -1


@dataclass(frozen=True)
class SearchState:
    """Current query, page and the result list in server order"""
    query: str = ""
    page: int = 1
    total_pages: int = 1
    movies: Tuple[Movie, ...] = ()

    def find(self, movie_id: int) -> Optional[Movie]:
        index = _index_of(self.movies, movie_id)
        return self.movies[index] if index >= 0 else None

    def replace_movie(self, movie: Movie) -> "SearchState":
        """Swap the entry with the same id; unchanged when absent"""
        index = _index_of(self.movies, movie.id)
        if index < 0:
            return self
        movies = self.movies[:index] + (movie,) + self.movies[index + 1:]
        return replace(self, movies=movies)

    def with_ratings_from(self, rated: "RatedState") -> "SearchState":
        """Carry the user ratings of the rated list onto matching results"""
        movies = []
        for movie in self.movies:
            rated_movie = rated.get(movie.id)
            if rated_movie is not None and rated_movie.user_rating != movie.user_rating:
                movie = movie.with_user_rating(rated_movie.user_rating)
            movies.append(movie)
        return replace(self, movies=tuple(movies))


@dataclass(frozen=True)
class RatedState:
    """Rated movies, unique by id, in insertion order"""
    movies: Tuple[Movie, ...] = ()

    @classmethod
    def from_movies(cls, movies: Iterable[Movie]) -> "RatedState":
        state = cls()
        for movie in movies:
            state = state.upsert(movie)
        return state

    def __contains__(self, movie_id: int) -> bool:
        return _index_of(self.movies, movie_id) >= 0

    def __len__(self) -> int:
        return len(self.movies)

    def get(self, movie_id: int) -> Optional[Movie]:
        index = _index_of(self.movies, movie_id)
        return self.movies[index] if index >= 0 else None

    def upsert(self, movie: Movie) -> "RatedState":
        """Replace the entry with the same id in place, or append"""
        index = _index_of(self.movies, movie.id)
        if index < 0:
            return RatedState(self.movies + (movie,))
        return RatedState(self.movies[:index] + (movie,) + self.movies[index + 1:])

    def remove(self, movie_id: int) -> "RatedState":
        return RatedState(tuple(movie for movie in self.movies if movie.id != movie_id))

    def merge(self, fetched: Iterable[Movie], skip: AbstractSet[int] = frozenset()) -> "RatedState":
        """Overwrite entries present upstream, keep local-only ones

        Ids in `skip` were changed locally while the fetch was in flight; the
        local entry (or its absence) wins for those.
        """
        state = self
        for movie in fetched:
            if movie.id in skip:
                continue
            state = state.upsert(movie)
        return state

    def total_pages(self, page_size: int = RATED_PAGE_SIZE) -> int:
        return max(1, -(-len(self.movies) // page_size))

    def page(self, page: int, page_size: int = RATED_PAGE_SIZE) -> Tuple[Movie, ...]:
        start = (page - 1) * page_size
        return self.movies[start:start + page_size]


@dataclass(frozen=True)
class BrowserState:
    """Everything the two tabs render from"""
    active_tab: ActiveTab = ActiveTab.SEARCH
    search: SearchState = field(default_factory=SearchState)
    rated: RatedState = field(default_factory=RatedState)
    rated_page: int = 1
    search_loading: bool = False
    rated_loading: bool = False
    alerts: Mapping[ActiveTab, str] = field(default_factory=lambda: MappingProxyType({}))

    def with_alert(self, tab: ActiveTab, message: Optional[str]) -> "BrowserState":
        alerts: Dict[ActiveTab, str] = dict(self.alerts)
        if message:
            alerts[tab] = message
        else:
            alerts.pop(tab, None)
        return replace(self, alerts=MappingProxyType(alerts))


Listener = Callable[[BrowserState], None]


class BrowserStore:
    """Owner of the current BrowserState; the only place it is swapped"""

    def __init__(self, state: Optional[BrowserState] = None):
        self._state = state or BrowserState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> BrowserState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after each change; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_state(self, state: BrowserState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Browser state listener failed")

    def update(self, **changes) -> BrowserState:
        self.set_state(replace(self._state, **changes))
        return self._state
