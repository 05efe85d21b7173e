import asyncio
import logging
from dataclasses import replace
from typing import Optional

from movierater.core.enums import ActiveTab
from movierater.browser.state import BrowserStore, SearchState

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


class SearchFetcher:
    """Debounced search/popular fetch for the Search tab

    Every request bumps a generation counter and cancels the previous pending
    request. A response is applied only if its generation is still the
    current one when it arrives, so a slow older response cannot overwrite a
    newer one.
    """

    def __init__(self, gateway, store: BrowserStore, debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS):
        self.gateway = gateway
        self.store = store
        self.debounce_seconds = debounce_seconds
        self.generation = 0
        self._task: Optional[asyncio.Task] = None

    def schedule(self, query: str, page: int = 1) -> asyncio.Task:
        """Fetch after the debounce window, unless superseded first"""
        return self._start(query, page, self.debounce_seconds)

    def fetch_now(self, query: str, page: int = 1) -> asyncio.Task:
        return self._start(query, page, 0)

    def _start(self, query: str, page: int, delay: float) -> asyncio.Task:
        self.cancel()
        self.generation += 1
        self._task = asyncio.get_running_loop().create_task(
            self._run(self.generation, query, page, delay)
        )
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait for the current request, if any, to settle"""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    def _is_current(self, generation: int) -> bool:
        return generation == self.generation

    async def _run(self, generation: int, query: str, page: int, delay: float) -> None:
        if delay:
            await asyncio.sleep(delay)

        self.store.update(search_loading=True)
        try:
            result = await self.gateway.browse_movies(query, page)
        except asyncio.CancelledError:
            if self._is_current(generation):
                self.store.update(search_loading=False)
            raise
        except Exception as e:
            if not self._is_current(generation):
                return
            message = getattr(e, "message", None) or str(e)
            logger.error(f"Error fetching movies for query={query!r} page={page}: {message}")
            state = self.store.state.with_alert(ActiveTab.SEARCH, message)
            self.store.set_state(replace(state, search_loading=False))
            return

        if not self._is_current(generation):
            logger.debug(f"Discarding stale results for query={query!r} page={page}")
            return

        state = self.store.state
        search = SearchState(
            query=query,
            page=page,
            total_pages=max(1, result.total_pages),
            movies=tuple(result.results),
        ).with_ratings_from(state.rated)
        state = state.with_alert(ActiveTab.SEARCH, None)
        self.store.set_state(replace(state, search=search, search_loading=False))


class RatedMoviesFetcher:
    """Loads the session's rated movies and merges them into local state

    Upstream entries overwrite local ones with the same id; local-only
    entries (ratings still in flight) are kept, and so is any local change
    made after the request went out.
    """

    def __init__(self, gateway, store: BrowserStore, session_manager, reconciler=None):
        self.gateway = gateway
        self.store = store
        self.session_manager = session_manager
        self.reconciler = reconciler
        self.generation = 0

    async def refresh(self) -> bool:
        """Fetch and merge; returns False when nothing was applied"""
        if not self.session_manager.ready:
            logger.info("No guest session, skipping rated movies refresh")
            return False

        self.generation += 1
        generation = self.generation
        session_id = self.session_manager.token
        revision = self.reconciler.revision if self.reconciler is not None else 0

        self.store.update(rated_loading=True)
        try:
            fetched = await self.gateway.fetch_rated_movies(session_id)
        except asyncio.CancelledError:
            if generation == self.generation:
                self.store.update(rated_loading=False)
            raise
        except Exception as e:
            if generation != self.generation:
                return False
            message = getattr(e, "message", None) or str(e)
            logger.error(f"Error fetching rated movies: {message}")
            state = self.store.state.with_alert(ActiveTab.RATED, message)
            self.store.set_state(replace(state, rated_loading=False))
            return False

        if generation != self.generation:
            logger.debug("Discarding stale rated movies response")
            return False

        state = self.store.state
        skip = self.reconciler.changed_since(revision) if self.reconciler is not None else frozenset()
        rated = state.rated.merge(fetched, skip)
        search = state.search.with_ratings_from(rated)
        state = state.with_alert(ActiveTab.RATED, None)
        self.store.set_state(replace(state, rated=rated, search=search, rated_loading=False))
        logger.info(f"Merged {len(fetched)} rated movies, {len(rated)} total")
        return True
