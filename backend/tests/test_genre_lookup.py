"""Tests for the genre lookup."""

import pytest
from pydantic import ValidationError

from movierater.browser.genre_lookup import GenreLookup
from movierater.core.interfaces import TMDBError
from movierater.schemas.movie import GenreList


class TestGenreLookup:

    @pytest.mark.asyncio
    async def test_loads_once(self, gateway):
        lookup = GenreLookup(gateway)

        first = await lookup.load()
        second = await lookup.load()

        assert first == {28: "Action", 35: "Comedy"}
        assert second is first
        assert gateway.count("fetch_genres") == 1

    @pytest.mark.asyncio
    async def test_mapping_is_read_only(self, gateway):
        lookup = GenreLookup(gateway)
        genres = await lookup.load()

        with pytest.raises(TypeError):
            genres[99] = "Documentary"

    @pytest.mark.asyncio
    async def test_falls_back_to_static_table_and_retries(self, gateway):
        gateway.errors["fetch_genres"] = TMDBError("Request failed: timeout")
        lookup = GenreLookup(gateway)

        genres = await lookup.load()
        assert genres[878] == "Science Fiction"
        assert lookup.loaded is False

        gateway.errors.clear()
        assert await lookup.load() == {28: "Action", 35: "Comedy"}
        assert lookup.loaded is True
        assert gateway.count("fetch_genres") == 2

    @pytest.mark.asyncio
    async def test_malformed_genre_payload_falls_back(self, gateway):
        with pytest.raises(ValidationError) as exc_info:
            GenreList(genres=[{"id": 28, "name": None}])
        gateway.errors["fetch_genres"] = exc_info.value
        lookup = GenreLookup(gateway)

        genres = await lookup.load()

        assert genres[28] == "Action"
        assert lookup.loaded is False

    @pytest.mark.asyncio
    async def test_names(self, gateway):
        lookup = GenreLookup(gateway)
        await lookup.load()

        assert lookup.names_for([35, 28, 1]) == ["Comedy", "Action", "Unknown"]

    def test_empty_before_load(self, gateway):
        assert GenreLookup(gateway).name_for(28) == "Unknown"
