"""Base adapter interface for key-value caches."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueCache(ABC):
    """Base adapter for string key-value stores.

    Implementations raise ``CacheUnavailable`` when the store cannot be
    reached.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a value; missing keys are ignored."""
        pass
