"""Unit tests for the key-value storage backends."""

import os

import pytest

from infrastructure.persistence.key_value import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
)


class TestFileKeyValueStorage:
    def test_get_missing_key_returns_none(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path / "replica")

        assert storage.get_item("euvou_events") is None

    def test_set_then_get_preserves_unicode(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path / "replica")

        storage.set_item("euvou_events", '[{"city": "São Paulo"}]')

        assert storage.get_item("euvou_events") == '[{"city": "São Paulo"}]'

    def test_set_replaces_prior_content(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "first")

        storage.set_item("k", "second")

        assert storage.get_item("k") == "second"

    def test_set_leaves_no_temporary_files(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)

        storage.set_item("k", "value")

        assert sorted(os.listdir(tmp_path)) == ["k.json"]

    def test_failed_write_keeps_prior_content(self, tmp_path, monkeypatch):
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "intact")

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError):
            storage.set_item("k", "partial")

        assert storage.get_item("k") == "intact"
        assert sorted(os.listdir(tmp_path)) == ["k.json"]

    def test_keys_are_sanitized(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)

        storage.set_item("../outside/key", "value")

        assert storage.get_item("../outside/key") == "value"
        assert all(
            path.parent == tmp_path for path in tmp_path.iterdir()
        )

    def test_empty_key_is_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            FileKeyValueStorage(tmp_path).get_item("")

    def test_remove_item(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "value")

        storage.remove_item("k")
        storage.remove_item("k")

        assert storage.get_item("k") is None


class TestInMemoryKeyValueStorage:
    def test_round_trip_and_remove(self):
        storage = InMemoryKeyValueStorage({"a": "1"})

        storage.set_item("b", "2")
        storage.remove_item("a")

        assert storage.get_item("a") is None
        assert storage.get_item("b") == "2"
