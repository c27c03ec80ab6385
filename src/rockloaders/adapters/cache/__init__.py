"""Key-value stores for the build fingerprint."""

from .base import KeyValueCache
from .file_cache import FileCache
from .memory import MemoryCache

__all__ = ['KeyValueCache', 'FileCache', 'MemoryCache']
