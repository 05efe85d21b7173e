"""Tests for movie card view models."""

from movierater.browser.cards import build_card, format_release_date, truncate_text
from tests.fakes import make_movie


def test_format_release_date():
    assert format_release_date("2021-03-05") == "March 5, 2021"
    assert format_release_date(None) == "Unknown Release Date"
    assert format_release_date("not-a-date") == "Unknown Release Date"


def test_truncate_text():
    assert truncate_text("short", 150) == "short"
    assert truncate_text("a" * 200, 150) == "a" * 150 + "..."


def test_build_card():
    movie = make_movie(
        603, "The Matrix",
        overview="x" * 300,
        poster_path="/poster.jpg",
        release_date="1999-03-31",
        genre_ids=[28, 878],
        vote_average=8.2,
        user_rating=4.5,
    )

    card = build_card(movie, {28: "Action"})

    assert card.release_date_label == "March 31, 1999"
    assert card.genre_names == ["Action", "Unknown"]
    assert card.overview.endswith("...")
    assert len(card.overview) == 153
    assert card.poster_url == "https://image.tmdb.org/t/p/w500/poster.jpg"
    assert card.user_rating == 4.5


def test_build_card_without_optional_fields():
    card = build_card(make_movie(1, release_date=""), {})

    assert card.poster_url is None
    assert card.overview == "No description available."
    assert card.release_date_label == "Unknown Release Date"
