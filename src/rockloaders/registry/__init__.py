"""Loader registration: path resolution, discovery and the registry."""

from .discovery import available_loaders, find_style_fragments
from .loader_registry import LoaderRegistry
from .models import Loader
from .paths import PathResolver, normalize_separators

__all__ = [
    'LoaderRegistry',
    'Loader',
    'PathResolver',
    'normalize_separators',
    'available_loaders',
    'find_style_fragments',
]
