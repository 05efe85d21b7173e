import asyncio
import logging
from dataclasses import replace
from typing import List, Optional, Set, Tuple, Union

from movierater.core.config import Settings, get_settings
from movierater.core.enums import ActiveTab
from movierater.core.exceptions import ConfigurationError
from movierater.core.storage import FileStorage, StorageInterface
from movierater.browser.cards import DEFAULT_IMAGE_BASE_URL, MovieCard, build_card
from movierater.browser.fetchers import DEFAULT_DEBOUNCE_SECONDS, RatedMoviesFetcher, SearchFetcher
from movierater.browser.gateway import MovieGateway
from movierater.browser.genre_lookup import GenreLookup
from movierater.browser.reconciler import RatingReconciler
from movierater.browser.session_manager import SessionManager
from movierater.browser.state import RATED_PAGE_SIZE, BrowserState, BrowserStore, RatedState
from movierater.schemas.movie import Movie

logger = logging.getLogger(__name__)


class MovieBrowser:
    """Search and Rated tabs: pagination, fetch triggers and rating

    All methods run on one event loop. Synchronous methods are the UI
    callbacks; they update state immediately and schedule any network work.
    """

    def __init__(self, gateway, storage: StorageInterface,
                 debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
                 image_base_url: str = DEFAULT_IMAGE_BASE_URL,
                 rated_page_size: int = RATED_PAGE_SIZE):
        self.gateway = gateway
        self.store = BrowserStore()
        self.session = SessionManager(gateway, storage)
        self.genres = GenreLookup(gateway)
        self.search_fetcher = SearchFetcher(gateway, self.store, debounce_seconds)
        self.reconciler = RatingReconciler(gateway, self.store, self.session)
        self.rated_fetcher = RatedMoviesFetcher(gateway, self.store, self.session, self.reconciler)
        self.image_base_url = image_base_url
        self.rated_page_size = rated_page_size
        self._tasks: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MovieBrowser":
        settings = settings or get_settings()
        return cls(
            MovieGateway.from_settings(settings),
            FileStorage(settings.SESSION_STORE_PATH),
            debounce_seconds=settings.SEARCH_DEBOUNCE_MS / 1000,
            image_base_url=settings.TMDB_IMAGE_BASE_URL,
        )

    @property
    def state(self) -> BrowserState:
        return self.store.state

    async def start(self) -> None:
        """Initialise session and genres, then load the first page"""
        await asyncio.gather(self.session.initialize(), self.genres.load())
        if isinstance(self.session.last_error, ConfigurationError):
            self.store.set_state(self.state.with_alert(ActiveTab.RATED, self.session.last_error.message))
        search = self.state.search
        self.search_fetcher.fetch_now(search.query, search.page)
        # a query or page change may supersede this first fetch
        await self.search_fetcher.wait()

    def set_query(self, query: str) -> None:
        search = replace(self.state.search, query=query, page=1)
        self.store.update(search=search)
        self.search_fetcher.schedule(query, 1)

    def set_page(self, page: int) -> None:
        if page < 1:
            raise ValueError(f"Page must be >= 1, got {page}")
        if self.state.active_tab is ActiveTab.RATED:
            page = min(page, self.state.rated.total_pages(self.rated_page_size))
            self.store.update(rated_page=page)
            return
        search = replace(self.state.search, page=page)
        self.store.update(search=search)
        self.search_fetcher.fetch_now(search.query, page)

    def reset_session(self) -> None:
        """Drop the guest session along with the ratings made under it"""
        self.session.reset()
        self.rated_fetcher.generation += 1
        search = self.state.search
        search = replace(search, movies=tuple(movie.with_user_rating(None) for movie in search.movies))
        self.store.update(rated=RatedState(), rated_page=1, search=search, rated_loading=False)

    def switch_tab(self, tab: Union[ActiveTab, str]) -> None:
        tab = ActiveTab(tab)
        self.store.update(active_tab=tab)
        if tab is ActiveTab.RATED:
            self._spawn(self.rated_fetcher.refresh())

    def rate(self, movie_id: int, rating) -> bool:
        return self.reconciler.rate(movie_id, rating)

    def visible_movies(self) -> Tuple[Movie, ...]:
        state = self.state
        if state.active_tab is ActiveTab.RATED:
            page = min(state.rated_page, state.rated.total_pages(self.rated_page_size))
            return state.rated.page(page, self.rated_page_size)
        return state.search.movies

    def current_page(self) -> int:
        state = self.state
        if state.active_tab is ActiveTab.RATED:
            return min(state.rated_page, state.rated.total_pages(self.rated_page_size))
        return state.search.page

    def total_pages(self) -> int:
        state = self.state
        if state.active_tab is ActiveTab.RATED:
            return state.rated.total_pages(self.rated_page_size)
        return state.search.total_pages

    def alert(self) -> Optional[str]:
        return self.state.alerts.get(self.state.active_tab)

    def cards(self) -> List[MovieCard]:
        genres = self.genres.genres
        return [build_card(movie, genres, self.image_base_url) for movie in self.visible_movies()]

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def idle(self) -> None:
        """Wait until no fetch or rating request is in flight"""
        await self.search_fetcher.wait()
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self.reconciler.drain()

    async def close(self) -> None:
        self.search_fetcher.cancel()
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self.reconciler.drain()
