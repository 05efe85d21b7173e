"""
Rating reconciliation between the search results and the rated list.

A rating is applied to local state first and persisted afterwards. The
persist call is fire-and-forget: a failure is logged and local state stays
as it is. There is no rollback and no retry.
"""

import asyncio
import logging
from dataclasses import replace
from numbers import Real
from typing import Dict, NamedTuple, Optional, Set

from movierater.core.exceptions import BaseAppException, InvalidRatingError
from movierater.browser.state import BrowserState, BrowserStore, RatedState, SearchState
from movierater.schemas.movie import Movie

logger = logging.getLogger(__name__)

MAX_RATING = 5


class RatingOutcome(NamedTuple):
    search: SearchState
    rated: RatedState
    movie: Movie


def validate_rating(rating) -> float:
    """Return the rating as a float, rejecting anything off the 0-5 half-step grid"""
    if isinstance(rating, bool) or not isinstance(rating, Real):
        raise InvalidRatingError(rating)
    value = float(rating)
    if not 0 <= value <= MAX_RATING or not (value * 2).is_integer():
        raise InvalidRatingError(rating)
    return value


def reconcile_rating(search: SearchState, rated: RatedState, movie_id: int,
                     rating: float) -> Optional[RatingOutcome]:
    """Apply a rating to both views; None when neither holds the movie

    A rating of 0 clears the search copy's rating and drops the movie from
    the rated list.
    """
    source = rated.get(movie_id)
    if source is None:
        source = search.find(movie_id)
    if source is None:
        return None

    if rating == 0:
        updated = source.with_user_rating(None)
        return RatingOutcome(search.replace_movie(updated), rated.remove(movie_id), updated)

    updated = source.with_user_rating(rating)
    return RatingOutcome(search.replace_movie(updated), rated.upsert(updated), updated)


class RatingReconciler:
    """Optimistic rating: update both views now, persist in the background"""

    def __init__(self, gateway, store: BrowserStore, session_manager):
        self.gateway = gateway
        self.store = store
        self.session_manager = session_manager
        self._tasks: Set[asyncio.Task] = set()
        self.revision = 0
        self._changed_at: Dict[int, int] = {}

    def rate(self, movie_id: int, rating) -> bool:
        """Rate a movie (0 removes the rating); returns False when nothing changed

        Must be called from the event loop; the persist request is scheduled
        on it and not awaited.
        """
        value = validate_rating(rating)

        session_id = self.session_manager.token if self.session_manager.ready else None
        if session_id is None:
            logger.info(f"No guest session, ignoring rating for movie {movie_id}")
            return False

        state: BrowserState = self.store.state
        outcome = reconcile_rating(state.search, state.rated, movie_id, value)
        if outcome is None:
            logger.debug(f"Movie {movie_id} is not loaded, ignoring rating")
            return False

        self.revision += 1
        self._changed_at[movie_id] = self.revision
        self.store.set_state(replace(state, search=outcome.search, rated=outcome.rated))

        task = asyncio.get_running_loop().create_task(self._persist(movie_id, session_id, value))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _persist(self, movie_id: int, session_id: str, rating: float) -> None:
        try:
            if rating == 0:
                await self.gateway.delete_rating(movie_id, session_id)
            else:
                await self.gateway.submit_rating(movie_id, session_id, rating)
        except BaseAppException as e:
            # local state stays authoritative
            logger.warning(f"Failed to persist rating {rating} for movie {movie_id}: {e.message}")
        except Exception:
            logger.exception(f"Unexpected error persisting rating for movie {movie_id}")
        else:
            logger.info(f"Persisted rating {rating} for movie {movie_id}")

    def changed_since(self, revision: int) -> Set[int]:
        """Ids rated or unrated locally after the given revision"""
        return {movie_id for movie_id, changed in self._changed_at.items() if changed > revision}

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight persist request"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
