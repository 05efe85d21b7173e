import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from movierater.routers import health, movies, genres, guest_session
from movierater.core.config import get_settings, configure_logging
from movierater.core.exceptions import BaseAppException

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="MovieRater API",
    description="TMDB proxy for movie search, genres and guest session ratings",
    version="1.0.0"
)

# CORS middleware configuration
settings = get_settings()
origins_env = settings.CORS_ALLOW_ORIGINS or ""
origins = [o.strip() for o in origins_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(movies.router)
app.include_router(genres.router)
app.include_router(guest_session.router)


@app.exception_handler(BaseAppException)
async def app_exception_handler(request: Request, exc: BaseAppException):
    # upstream failures all surface as a generic 500
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=exc.to_dict(),
    )


@app.on_event("startup")
async def check_configuration():
    if not settings.TMDB_API_KEY:
        logger.error("Error: Missing TMDb API key in environment variables")
