"""Tests for the session token storage."""

from movierater.core.storage import GUEST_SESSION_KEY, FileStorage


def test_file_storage_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    FileStorage(path).set_item(GUEST_SESSION_KEY, "abc123")

    assert FileStorage(path).get_item(GUEST_SESSION_KEY) == "abc123"


def test_missing_file_is_empty(tmp_path):
    assert FileStorage(tmp_path / "none.json").get_item(GUEST_SESSION_KEY) is None


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    storage = FileStorage(path)

    assert storage.get_item(GUEST_SESSION_KEY) is None
    storage.set_item(GUEST_SESSION_KEY, "fresh")
    assert storage.get_item(GUEST_SESSION_KEY) == "fresh"


def test_remove_item(tmp_path):
    storage = FileStorage(tmp_path / "storage.json")
    storage.set_item(GUEST_SESSION_KEY, "abc123")
    storage.set_item("other", "kept")

    storage.remove_item(GUEST_SESSION_KEY)

    assert storage.get_item(GUEST_SESSION_KEY) is None
    assert storage.get_item("other") == "kept"
