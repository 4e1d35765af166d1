"""Key-value byte stores used to persist the selection between sessions."""

import re
from abc import ABC, abstractmethod
from pathlib import Path

_VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class ByteStore(ABC):
    """Abstract base class for persistent key-value byte storage.

    Implementations are best-effort: callers treat a failed save as
    non-fatal and a failed load the same as a missing key.
    """

    @abstractmethod
    def load(self, key: str) -> bytes | None:
        """Return the bytes stored under key, or None if there are none."""
        pass

    @abstractmethod
    def save(self, key: str, data: bytes) -> None:
        """Store data under key, replacing anything stored before."""
        pass


class MemoryByteStore(ByteStore):
    """In-process store, mostly useful for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def load(self, key: str) -> bytes | None:
        return self._data.get(key)

    def save(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)


class FileByteStore(ByteStore):
    """Stores each key as a file in a directory.

    Writes go to a temporary file first and are then renamed over the
    target, so a crash mid-write leaves the previous value intact.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _VALID_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / key

    def load(self, key: str) -> bytes | None:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def save(self, key: str, data: bytes) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(data)
        tmp_path.replace(path)
