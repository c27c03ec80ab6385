"""Factory classes for creating adapters and the build pipeline."""

from pathlib import Path
from typing import Optional, Union

from .adapters.cache import FileCache, MemoryCache
from .adapters.compiler import LesscCompiler, LesscpyCompiler
from .compilation.change_detector import FingerprintChangeDetector, TimestampChangeDetector
from .compilation.markup_builder import MarkupBuilder
from .compilation.pipeline import LoaderPipeline
from .compilation.style_builder import StyleBuilder
from .config import LoadersConfig
from .registry.loader_registry import LoaderRegistry


class CompilerFactory:
    """Factory for creating style compiler adapters."""

    @staticmethod
    def create_compiler(compiler_type="lesscpy"):
        """Create a compiler adapter based on the specified type.

        Args:
            compiler_type (str, optional): "lesscpy" or "lessc".

        Returns:
            StyleCompiler: An instance of the specified compiler adapter.

        Raises:
            ValueError: If the compiler type is not supported.
        """
        compilers = {
            "lesscpy": LesscpyCompiler,
            "lessc": LesscCompiler,
        }

        if compiler_type.lower() not in compilers:
            raise ValueError(f"Unsupported compiler type: {compiler_type}")

        return compilers[compiler_type.lower()]()


class CacheFactory:
    """Factory for creating fingerprint cache adapters."""

    @staticmethod
    def create_cache(cache_type="file", path: Optional[Union[str, Path]] = None):
        """Create a cache adapter based on the specified type.

        Args:
            cache_type (str, optional): "file" or "memory".
            path (optional): JSON file for the "file" cache.

        Raises:
            ValueError: If the cache type is not supported or a file cache
                has no path.
        """
        cache_type = cache_type.lower()
        if cache_type == "memory":
            return MemoryCache()
        if cache_type == "file":
            if path is None:
                raise ValueError("A file cache needs a path")
            return FileCache(path)
        raise ValueError(f"Unsupported cache type: {cache_type}")


def create_pipeline(config: LoadersConfig, registry: Optional[LoaderRegistry] = None,
                    compiler=None, cache=None) -> LoaderPipeline:
    """Wire a pipeline from configuration.

    ``registry``, ``compiler`` and ``cache`` replace the configured ones
    when given.
    """
    if registry is None:
        registry = config.create_registry()
    if compiler is None:
        compiler = CompilerFactory.create_compiler(config.compiler)

    if config.debug:
        detector = TimestampChangeDetector(config.artifact_path, force_recompile=config.force_recompile)
    else:
        if cache is None:
            cache = CacheFactory.create_cache(config.cache, config.cache_file)
        detector = FingerprintChangeDetector(config.artifact_path, cache, force_recompile=config.force_recompile)

    style_builder = StyleBuilder(compiler, config.artifact_path, compress=config.compress)
    return LoaderPipeline(registry, detector, style_builder, MarkupBuilder())
