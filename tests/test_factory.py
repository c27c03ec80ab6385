from __future__ import annotations

from pathlib import Path

import pytest

from rockloaders.adapters.cache import FileCache, MemoryCache
from rockloaders.adapters.compiler import LesscCompiler, LesscpyCompiler
from rockloaders.compilation import FingerprintChangeDetector, TimestampChangeDetector
from rockloaders.config import LoadersConfig
from rockloaders.factory import CacheFactory, CompilerFactory, create_pipeline
from tests.conftest import FakeCompiler


def test_compiler_factory() -> None:
    assert isinstance(CompilerFactory.create_compiler("lesscpy"), LesscpyCompiler)
    assert isinstance(CompilerFactory.create_compiler("LESSC"), LesscCompiler)
    with pytest.raises(ValueError):
        CompilerFactory.create_compiler("sass")


def test_cache_factory(tmp_path: Path) -> None:
    assert isinstance(CacheFactory.create_cache("memory"), MemoryCache)
    assert isinstance(CacheFactory.create_cache("file", tmp_path / "c.json"), FileCache)
    with pytest.raises(ValueError):
        CacheFactory.create_cache("file")
    with pytest.raises(ValueError):
        CacheFactory.create_cache("redis")


def test_create_pipeline_strategies(project: Path) -> None:
    production = create_pipeline(LoadersConfig(root_dir=str(project)), compiler=FakeCompiler())
    assert isinstance(production.detector, FingerprintChangeDetector)
    assert isinstance(production.detector.cache, FileCache)
    assert production.detector.cache.path == project.resolve() / ".rockloaders-cache.json"

    debug = create_pipeline(LoadersConfig(root_dir=str(project), debug=True), compiler=FakeCompiler())
    assert isinstance(debug.detector, TimestampChangeDetector)


def test_create_pipeline_builds(project: Path) -> None:
    config = LoadersConfig(root_dir=str(project), cache="memory", loader_dirs=["loaders"])
    pipeline = create_pipeline(config, compiler=FakeCompiler())

    result = pipeline.ensure_fresh()

    assert result.rebuilt
    assert config.artifact_path.is_file()
