from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from json_store import atomic_write_json, read_json

from .errors import DecodeError, StorageIOError
from .interfaces import KeyValueDocumentStore
from .locks import GLOBAL_PATH_LOCKS

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Returns an empty dict for a missing or blank file.
    - Raises DecodeError for invalid JSON or a non-object document.
    - Raises StorageIOError for filesystem failures.
    - Writes atomically.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        try:
            self._path.stat()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageIOError(f"cannot check {self._path}: {e}") from e
        return True

    def load(self) -> dict[str, Any]:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            try:
                raw = read_json(self._path)
            except OSError as e:
                raise StorageIOError(f"cannot read {self._path}: {e}") from e
            except ValueError as e:
                raise DecodeError(f"{self._path} is not valid JSON: {e}") from e
        if raw is None:
            if self._path.exists():
                logger.warning("PEOPLE LOAD: %s is blank, treating as empty", self._path)
            return {}
        if not isinstance(raw, dict):
            raise DecodeError(f"{self._path} must hold a JSON object, got {type(raw).__name__}")
        return raw

    def save(self, doc: dict[str, Any]) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            try:
                atomic_write_json(self._path, doc)
            except OSError as e:
                raise StorageIOError(f"cannot write {self._path}: {e}") from e
