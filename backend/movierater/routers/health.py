from fastapi import APIRouter

from movierater.core.config import get_settings

router = APIRouter(tags=["health"])

@router.get("/health")
def health():
    settings = get_settings()
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "tmdb_configured": bool(settings.TMDB_API_KEY),
    }
