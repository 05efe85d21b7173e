import logging
from functools import lru_cache
from movierater.core.exceptions import BaseAppException
from movierater.services.movie_service import MovieService

logger = logging.getLogger(__name__)

@lru_cache(maxsize=1)
def get_movie_service() -> MovieService:
    """Dependency providing the shared movie service"""
    return MovieService()

def handle_exception(e: Exception, message: str) -> BaseAppException:
    """Log and convert any error into an application exception"""
    if isinstance(e, BaseAppException):
        logger.error(f"{message}: {e.message}")
        return e
    logger.exception(f"{message}: {str(e)}")
    return BaseAppException(message)
