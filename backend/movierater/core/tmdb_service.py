import logging
from typing import Optional
from .config import Settings, get_settings
from .interfaces import TMDBConfig
from .tmdb_client import TMDBClient
from .cache import CacheService
from .services import MovieService, AuthenticationService

logger = logging.getLogger(__name__)

class TMDBServiceFactory:
    """Factory class for creating TMDB services"""

    @staticmethod
    def create_client(settings: Optional[Settings] = None) -> TMDBClient:
        """Create a TMDB client from settings"""
        settings = settings or get_settings()
        config = TMDBConfig(
            api_key=settings.TMDB_API_KEY,
            base_url=settings.TMDB_BASE_URL,
            language=settings.TMDB_LANGUAGE,
            timeout=settings.TMDB_TIMEOUT,
        )
        return TMDBClient(config)

    @staticmethod
    def create_cache(settings: Optional[Settings] = None) -> Optional[CacheService]:
        """Create the response cache, or None when REDIS_URL is unset"""
        settings = settings or get_settings()
        if not settings.REDIS_URL:
            return None
        logger.info("TMDB response cache enabled")
        return CacheService(settings.REDIS_URL)

    @staticmethod
    def create_all_services(settings: Optional[Settings] = None) -> dict:
        """Create all service instances sharing one client"""
        settings = settings or get_settings()
        client = TMDBServiceFactory.create_client(settings)
        cache = TMDBServiceFactory.create_cache(settings)

        return {
            'movie_service': MovieService(client, cache=cache, cache_ttl=settings.CACHE_TTL_SECONDS),
            'authentication_service': AuthenticationService(client),
        }
