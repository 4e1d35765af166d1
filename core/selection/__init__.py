"""Selection state: which candidates are being scored, and their scores."""

from .codec import MalformedSelectionError, decode_selection, encode_selection
from .storage import ByteStore, FileByteStore, MemoryByteStore
from .store import SelectionStore

__all__ = [
    "ByteStore",
    "FileByteStore",
    "MalformedSelectionError",
    "MemoryByteStore",
    "SelectionStore",
    "decode_selection",
    "encode_selection",
]
