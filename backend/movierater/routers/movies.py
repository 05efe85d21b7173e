import logging
from fastapi import APIRouter, Depends, Query

from movierater.dependencies import get_movie_service, handle_exception
from movierater.services.movie_service import MovieService
from movierater.schemas.movie import ErrorResponse, MovieListResponse, RatingAck, RatingCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["movies"], responses={500: {"model": ErrorResponse}})

@router.get("", response_model=MovieListResponse)
def browse_movies(
    query: str = Query("", description="Search query, popular movies when empty"),
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service)
):
    logger.info(f"API request received: query={query!r} page={page}")
    try:
        result = movie_service.browse_movies(query, page)
    except Exception as e:
        raise handle_exception(e, "Failed to fetch movies from TMDb.")
    return MovieListResponse(movies=list(result.results), total_pages=result.total_pages)

@router.get("/popular", response_model=MovieListResponse)
def get_popular_movies(
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service)
):
    try:
        result = movie_service.get_popular_movies(page)
    except Exception as e:
        raise handle_exception(e, "Failed to fetch popular movies.")
    return MovieListResponse(movies=list(result.results), total_pages=result.total_pages)

# Rating Operations
@router.post("/{movie_id}/rating", response_model=RatingAck)
def rate_movie(
    movie_id: int,
    rating_data: RatingCreate,
    movie_service: MovieService = Depends(get_movie_service)
):
    try:
        return movie_service.rate_movie(movie_id, rating_data.guest_session_id, rating_data.value)
    except Exception as e:
        raise handle_exception(e, "Failed to submit rating.")

@router.delete("/{movie_id}/rating", response_model=RatingAck)
def delete_rating(
    movie_id: int,
    guest_session_id: str = Query(..., min_length=1, description="TMDB guest session id"),
    movie_service: MovieService = Depends(get_movie_service)
):
    try:
        return movie_service.delete_rating(movie_id, guest_session_id)
    except Exception as e:
        raise handle_exception(e, "Failed to delete rating.")
