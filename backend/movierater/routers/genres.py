from fastapi import APIRouter, Depends

from movierater.dependencies import get_movie_service, handle_exception
from movierater.services.movie_service import MovieService
from movierater.schemas.movie import ErrorResponse, GenreMapResponse

router = APIRouter(prefix="/api/genres", tags=["genres"], responses={500: {"model": ErrorResponse}})

@router.get("", response_model=GenreMapResponse)
def get_genres(movie_service: MovieService = Depends(get_movie_service)):
    try:
        return GenreMapResponse(genres=movie_service.get_genres())
    except Exception as e:
        raise handle_exception(e, "Failed to fetch genres.")
