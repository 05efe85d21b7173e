import asyncio
import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from movierater.core.enums import GenreHelper

logger = logging.getLogger(__name__)


class GenreLookup:
    """Genre id -> name mapping, fetched once and read-only afterwards"""

    def __init__(self, gateway):
        self.gateway = gateway
        self.loaded = False
        self._genres: Mapping[int, str] = MappingProxyType({})
        self._pending: Optional[asyncio.Task] = None

    @property
    def genres(self) -> Mapping[int, str]:
        return self._genres

    async def load(self) -> Mapping[int, str]:
        if self.loaded:
            return self._genres
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._fetch())
        pending = self._pending
        try:
            return await asyncio.shield(pending)
        finally:
            if pending.done() and self._pending is pending:
                self._pending = None

    async def _fetch(self) -> Mapping[int, str]:
        try:
            genres = await self.gateway.fetch_genres()
        except Exception as e:
            # static table until a later load() succeeds
            message = getattr(e, "message", None) or str(e)
            logger.warning(f"Genre list unavailable, using static table: {message}")
            self._genres = MappingProxyType(GenreHelper.get_all_movie_genres())
            return self._genres

        self._genres = MappingProxyType(dict(genres))
        self.loaded = True
        logger.info(f"Loaded {len(self._genres)} genres")
        return self._genres

    def name_for(self, genre_id: int) -> str:
        return self._genres.get(genre_id, "Unknown")

    def names_for(self, genre_ids: Iterable[int]) -> List[str]:
        return [self.name_for(genre_id) for genre_id in genre_ids]
