"""Shared fixtures for selection store tests."""

import pytest

from core.selection.storage import MemoryByteStore
from core.selection.store import SelectionStore


@pytest.fixture
def byte_store():
    return MemoryByteStore()


@pytest.fixture
def store(byte_store, candidates):
    """A hydrated store over candidates a, b, c with only "a" selected."""
    store = SelectionStore(byte_store, candidates)
    store.hydrate()
    yield store
    store.close()
