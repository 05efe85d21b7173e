import json
import zlib
import logging
from typing import Optional, Any
import redis

logger = logging.getLogger(__name__)


class CacheService:
    """Redis cache for TMDB payloads (JSON + optional zlib), fail-open"""

    def __init__(self, url: str, compress: bool = True, client: Optional[redis.Redis] = None):
        self.redis = client or redis.Redis.from_url(url, decode_responses=False)
        self.compress = compress

    def get_json(self, key: str) -> Optional[Any]:
        try:
            data = self.redis.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if data is None:
            return None
        if self.compress:
            try:
                data = zlib.decompress(data)
            except zlib.error:
                pass
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            return json.loads(data)
        except (UnicodeDecodeError, ValueError):
            logger.warning(f"Discarding unreadable cache entry {key}")
            return None

    def set_json(self, key: str, value: Any, ttl_seconds: int) -> bool:
        raw = json.dumps(value, ensure_ascii=False).encode("utf-8")
        payload = zlib.compress(raw) if self.compress else raw
        try:
            self.redis.setex(key, ttl_seconds, payload)
        except redis.RedisError as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            return False
        return True

    def delete(self, key: str) -> int:
        try:
            return int(self.redis.delete(key))
        except redis.RedisError:
            return 0
