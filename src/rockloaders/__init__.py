"""Named CSS loading animations compiled into one stylesheet."""

from .compilation import (
    BuildResult,
    FingerprintChangeDetector,
    LoaderPipeline,
    MarkupBuilder,
    StyleBuilder,
    TimestampChangeDetector,
    inject_assets,
    stylesheet_url,
)
from .config import LoadersConfig
from .exceptions import (
    ArtifactWriteError,
    CacheUnavailable,
    CompileError,
    FragmentReadError,
    ConfigError,
    InvalidPath,
    RockLoadersError,
)
from .factory import create_pipeline
from .registry import LoaderRegistry, PathResolver, available_loaders
from .version import __version__

__all__ = [
    'LoaderRegistry',
    'PathResolver',
    'available_loaders',
    'LoaderPipeline',
    'BuildResult',
    'StyleBuilder',
    'MarkupBuilder',
    'TimestampChangeDetector',
    'FingerprintChangeDetector',
    'LoadersConfig',
    'create_pipeline',
    'inject_assets',
    'stylesheet_url',
    'RockLoadersError',
    'InvalidPath',
    'CompileError',
    'FragmentReadError',
    'CacheUnavailable',
    'ArtifactWriteError',
    'ConfigError',
    '__version__',
]
