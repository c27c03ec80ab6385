"""JSON file cache shared between processes."""

import json
import os
import threading
from pathlib import Path
from typing import Dict, Optional, Union

from ...exceptions import CacheUnavailable
from ...utils.helpers import atomic_write
from .base import KeyValueCache


class FileCache(KeyValueCache):
    """Stores all keys in one JSON document.

    Every write replaces the document atomically, so a reader in another
    process sees either the old or the new state.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CacheUnavailable(f"Cannot read cache {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise CacheUnavailable(f"Cache {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            atomic_write(self.path, json.dumps(data, indent=2, sort_keys=True))
        except OSError as e:
            raise CacheUnavailable(f"Cannot write cache {self.path}: {e}") from e
