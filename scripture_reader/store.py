"""Durable key/value storage backing preferences, reading position and favorites."""

import json
import logging
import os
import re
from pathlib import Path
from typing import Optional

from .errors import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


class DurableStore:
    """Whole-value key/value store.

    Values are strings; every ``set`` overwrites the previous value for
    the key. Implementations raise ``PersistenceReadError`` and
    ``PersistenceWriteError`` instead of their own I/O errors.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def keys(self) -> list[str]:
        raise NotImplementedError

    def get_json(self, key: str):
        """Read and decode a JSON value. Returns None if the key is absent."""
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceReadError(f"Malformed record for {key!r}: {e}") from e

    def set_json(self, key: str, value) -> None:
        self.set(key, json.dumps(value, ensure_ascii=False))


class MemoryStore(DurableStore):
    """Store held in a dict. Used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise PersistenceWriteError(f"Value for {key!r} must be a string")
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        return sorted(self._data)


class FileStore(DurableStore):
    """Store with one file per key under a directory.

    Writes go to a temporary file that is then moved over the target,
    so a reader never sees a half-written value.
    """

    SUFFIX = ".value"

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.root / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadError(f"Failed to read {key!r}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except (OSError, TypeError) as e:
            raise PersistenceWriteError(f"Failed to write {key!r}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceWriteError(f"Failed to remove {key!r}: {e}") from e

    def clear(self) -> None:
        if not self.root.exists():
            return
        try:
            for path in self.root.iterdir():
                if path.name.endswith(self.SUFFIX) or path.name.endswith(self.SUFFIX + ".tmp"):
                    path.unlink()
        except OSError as e:
            raise PersistenceWriteError(f"Failed to clear store at {self.root}: {e}") from e
        logger.info("Cleared durable store at %s", self.root)

    def keys(self) -> list[str]:
        if not self.root.exists():
            return []
        return sorted(
            path.name[:-len(self.SUFFIX)]
            for path in self.root.iterdir()
            if path.name.endswith(self.SUFFIX)
        )
