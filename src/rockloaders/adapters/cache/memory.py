"""Process-local cache."""

import threading
from typing import Dict, Optional

from .base import KeyValueCache


class MemoryCache(KeyValueCache):
    """Dict-backed cache, lost when the process exits."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
