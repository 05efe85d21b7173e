from fastapi import APIRouter, Depends, Query, status

from movierater.dependencies import get_movie_service, handle_exception
from movierater.services.movie_service import MovieService
from movierater.schemas.movie import ErrorResponse, GuestSessionResponse, RatedMovieListResponse

router = APIRouter(prefix="/api/guest-session", tags=["guest-session"], responses={500: {"model": ErrorResponse}})

@router.post("", response_model=GuestSessionResponse, status_code=status.HTTP_201_CREATED)
def create_guest_session(movie_service: MovieService = Depends(get_movie_service)):
    try:
        session = movie_service.create_guest_session()
    except Exception as e:
        raise handle_exception(e, "Failed to create guest session.")
    return GuestSessionResponse(guest_session_id=session.guest_session_id, expires_at=session.expires_at)

@router.get("/{guest_session_id}/rated", response_model=RatedMovieListResponse)
def get_rated_movies(
    guest_session_id: str,
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service)
):
    try:
        result = movie_service.get_rated_movies_page(guest_session_id, page)
    except Exception as e:
        raise handle_exception(e, "Failed to fetch rated movies.")
    return RatedMovieListResponse(movies=result.results, total_pages=result.total_pages)
