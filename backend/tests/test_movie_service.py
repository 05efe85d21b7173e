"""Tests for the movie service over mocked TMDB services."""

from unittest.mock import Mock

import pytest

from movierater.core.exceptions import NotFoundError
from movierater.core.interfaces import TMDBError, TMDBResponse
from movierater.core.services.movie_service import MovieService as TMDBMovieService
from movierater.services.movie_service import MovieService


def _page(results, total_pages=1, page=1):
    return TMDBResponse({"page": page, "results": results, "total_pages": total_pages, "total_results": 0}, 200, True)


@pytest.fixture
def tmdb_movies():
    return Mock()


@pytest.fixture
def tmdb_auth():
    return Mock()


@pytest.fixture
def service(tmdb_movies, tmdb_auth):
    return MovieService(tmdb_movies, tmdb_auth)


class TestBrowseRouting:

    def test_empty_query_routes_to_popular(self, service, tmdb_movies):
        tmdb_movies.get_popular_movies.return_value = _page([{"id": 1, "title": "A"}], total_pages=500)

        page = service.browse_movies("", 1)

        tmdb_movies.get_popular_movies.assert_called_once_with(1)
        tmdb_movies.search_movies.assert_not_called()
        assert page.total_pages == 500
        assert page.results[0].title == "A"

    def test_whitespace_query_routes_to_popular(self, service, tmdb_movies):
        tmdb_movies.get_popular_movies.return_value = _page([])

        service.browse_movies("   ", 2)

        tmdb_movies.get_popular_movies.assert_called_once_with(2)
        tmdb_movies.search_movies.assert_not_called()

    def test_query_routes_to_search(self, service, tmdb_movies):
        tmdb_movies.search_movies.return_value = _page([{"id": 7, "title": "Return", "release_date": ""}])

        page = service.browse_movies("return", 3)

        tmdb_movies.search_movies.assert_called_once_with("return", 3)
        assert page.results[0].release_date is None

    def test_upstream_failure_raises(self, service, tmdb_movies):
        tmdb_movies.search_movies.return_value = TMDBResponse({}, 503, False)

        with pytest.raises(TMDBError) as exc_info:
            service.browse_movies("x", 1)
        assert exc_info.value.upstream_status == 503


class TestRatedMovies:

    def test_not_found_is_empty(self, service, tmdb_movies):
        tmdb_movies.get_rated_movies.return_value = TMDBResponse({}, 404, False)

        assert service.get_rated_movies("guest-1") == []

    def test_reads_every_page(self, service, tmdb_movies):
        tmdb_movies.get_rated_movies.side_effect = [
            _page([{"id": 1, "rating": 8.0}], total_pages=2),
            _page([{"id": 2, "rating": 5.0}], total_pages=2, page=2),
        ]

        rated = service.get_rated_movies("guest-1")

        assert [m.id for m in rated] == [1, 2]
        assert [m.to_movie().user_rating for m in rated] == [4.0, 2.5]

    def test_other_errors_raise(self, service, tmdb_movies):
        tmdb_movies.get_rated_movies.return_value = TMDBResponse({}, 500, False)

        with pytest.raises(TMDBError):
            service.get_rated_movies("guest-1")


class TestRatingAndSession:

    def test_rate_movie(self, service, tmdb_movies):
        tmdb_movies.rate_movie.return_value = TMDBResponse({"status_code": 1, "status_message": "Success."}, 201, True)

        ack = service.rate_movie(550, "guest-1", 8.0)

        tmdb_movies.rate_movie.assert_called_once_with(550, "guest-1", 8.0)
        assert ack.success
        assert ack.status_message == "Success."

    def test_delete_unknown_movie(self, service, tmdb_movies):
        tmdb_movies.delete_rating.return_value = TMDBResponse({}, 404, False)

        with pytest.raises(NotFoundError):
            service.delete_rating(550, "guest-1")

    def test_create_guest_session(self, service, tmdb_auth):
        tmdb_auth.create_guest_session.return_value = TMDBResponse(
            {"success": True, "guest_session_id": "abc", "expires_at": "2026-10-20 10:00:00 UTC"}, 200, True
        )

        assert service.create_guest_session().guest_session_id == "abc"

    def test_create_guest_session_without_id(self, service, tmdb_auth):
        tmdb_auth.create_guest_session.return_value = TMDBResponse({"success": False}, 200, True)

        with pytest.raises(TMDBError):
            service.create_guest_session()

    def test_genres(self, service, tmdb_movies):
        tmdb_movies.get_movie_genres.return_value = TMDBResponse(
            {"genres": [{"id": 28, "name": "Action"}, {"id": 18, "name": "Drama"}]}, 200, True
        )

        assert service.get_genres() == {28: "Action", 18: "Drama"}


class TestTMDBMovieService:

    def test_rating_requests(self):
        client = Mock()
        tmdb = TMDBMovieService(client)

        tmdb.rate_movie(550, "guest-1", 7.5)
        tmdb.delete_rating(550, "guest-1")

        client.make_request.assert_any_call(
            "movie/550/rating", {"guest_session_id": "guest-1"}, method="POST", json={"value": 7.5}
        )
        client.make_request.assert_any_call(
            "movie/550/rating", {"guest_session_id": "guest-1"}, method="DELETE"
        )

    def test_popular_served_from_cache(self):
        client = Mock()
        cache = Mock()
        cache.get_json.return_value = {"results": [], "total_pages": 1}
        tmdb = TMDBMovieService(client, cache=cache)

        response = tmdb.get_popular_movies(4)

        cache.get_json.assert_called_once_with("tmdb:movie:popular:p4")
        client.make_request.assert_not_called()
        assert response.success

    def test_cache_filled_on_miss(self):
        client = Mock()
        client.make_request.return_value = TMDBResponse({"genres": []}, 200, True)
        cache = Mock()
        cache.get_json.return_value = None
        tmdb = TMDBMovieService(client, cache=cache, cache_ttl=60)

        tmdb.get_movie_genres()

        cache.set_json.assert_called_once_with("tmdb:movie:genres", {"genres": []}, 60)

    def test_search_is_never_cached(self):
        client = Mock()
        cache = Mock()
        tmdb = TMDBMovieService(client, cache=cache)

        tmdb.search_movies("alien", 1)

        cache.get_json.assert_not_called()
        client.make_request.assert_called_once_with("search/movie", {"query": "alien", "page": 1})
