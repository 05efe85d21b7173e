"""Tests for the immutable browser state snapshots."""

from movierater.browser.state import BrowserState, BrowserStore, RatedState, SearchState
from movierater.core.enums import ActiveTab
from tests.fakes import make_movie


class TestRatedState:

    def test_upsert_replaces_in_place(self):
        rated = RatedState.from_movies([make_movie(1), make_movie(2), make_movie(3)])
        rated = rated.upsert(make_movie(2, "Renamed", user_rating=3))

        assert [m.id for m in rated.movies] == [1, 2, 3]
        assert rated.get(2).title == "Renamed"

    def test_from_movies_keeps_last_duplicate(self):
        rated = RatedState.from_movies([make_movie(1, user_rating=1), make_movie(1, user_rating=4)])

        assert len(rated) == 1
        assert rated.get(1).user_rating == 4

    def test_merge_keeps_local_only_entries(self):
        local = RatedState.from_movies([make_movie(1, user_rating=2), make_movie(5, user_rating=4)])
        merged = local.merge([make_movie(1, "Fresh", user_rating=3), make_movie(9, user_rating=1)])

        assert [m.id for m in merged.movies] == [1, 5, 9]
        assert merged.get(1).title == "Fresh"
        assert merged.get(1).user_rating == 3
        assert merged.get(5).user_rating == 4

    def test_merge_skips_locally_changed_ids(self):
        local = RatedState.from_movies([make_movie(1, user_rating=2)])
        merged = local.merge([make_movie(1, user_rating=4), make_movie(3, user_rating=1)], skip={1, 3})

        assert [m.id for m in merged.movies] == [1]
        assert merged.get(1).user_rating == 2

    def test_remove_missing_is_harmless(self):
        rated = RatedState.from_movies([make_movie(1)])
        assert rated.remove(2) == rated

    def test_pagination(self):
        rated = RatedState.from_movies(make_movie(i) for i in range(1, 46))

        assert rated.total_pages(20) == 3
        assert [m.id for m in rated.page(3, 20)] == list(range(41, 46))
        assert RatedState().total_pages(20) == 1


class TestSearchState:

    def test_replace_movie_absent_returns_same(self):
        search = SearchState(movies=(make_movie(1),))
        assert search.replace_movie(make_movie(2)) is search

    def test_with_ratings_from_marks_rated_results(self):
        search = SearchState(movies=(make_movie(1), make_movie(2)))
        rated = RatedState.from_movies([make_movie(2, user_rating=4.5)])

        marked = search.with_ratings_from(rated)

        assert marked.find(1).user_rating is None
        assert marked.find(2).user_rating == 4.5


class TestBrowserStore:

    def test_listeners_notified_on_change_only(self):
        store = BrowserStore()
        seen = []
        unsubscribe = store.subscribe(seen.append)

        store.update(active_tab=ActiveTab.RATED)
        store.update(active_tab=ActiveTab.RATED)
        unsubscribe()
        store.update(active_tab=ActiveTab.SEARCH)

        assert [s.active_tab for s in seen] == [ActiveTab.RATED]

    def test_failing_listener_does_not_block_update(self):
        store = BrowserStore()
        seen = []

        def broken(state):
            raise RuntimeError("render failed")

        store.subscribe(broken)
        store.subscribe(seen.append)
        store.update(rated_page=2)

        assert store.state.rated_page == 2
        assert len(seen) == 1

    def test_alerts_are_per_tab(self):
        state = BrowserState().with_alert(ActiveTab.SEARCH, "boom")

        assert state.alerts == {ActiveTab.SEARCH: "boom"}
        assert state.with_alert(ActiveTab.SEARCH, None).alerts == {}
