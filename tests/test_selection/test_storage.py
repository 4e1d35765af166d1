"""Tests for the byte stores."""

import pytest

from core.selection.storage import FileByteStore, MemoryByteStore


class TestMemoryByteStore:
    def test_missing_key(self):
        assert MemoryByteStore().load("key") is None

    def test_save_and_load(self):
        store = MemoryByteStore()
        store.save("key", b"one")
        store.save("key", b"two")
        assert store.load("key") == b"two"

    def test_initial_data(self):
        assert MemoryByteStore({"key": b"data"}).load("key") == b"data"


class TestFileByteStore:
    def test_missing_key(self, tmp_path):
        assert FileByteStore(tmp_path).load("key") is None

    def test_save_and_load(self, tmp_path):
        store = FileByteStore(tmp_path / "state")
        store.save("selectedCandidates", b'{"a": {}}')
        assert store.load("selectedCandidates") == b'{"a": {}}'
        assert FileByteStore(tmp_path / "state").load("selectedCandidates") == b'{"a": {}}'

    def test_no_temporary_file_left(self, tmp_path):
        store = FileByteStore(tmp_path)
        store.save("key", b"data")
        assert [p.name for p in tmp_path.iterdir()] == ["key"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b"])
    def test_invalid_key(self, tmp_path, key):
        with pytest.raises(ValueError):
            FileByteStore(tmp_path).save(key, b"data")
