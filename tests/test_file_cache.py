from __future__ import annotations

from pathlib import Path

import pytest

from rockloaders.adapters.cache import FileCache
from rockloaders.exceptions import CacheUnavailable


def test_values_survive_new_instances(tmp_path: Path) -> None:
    path = tmp_path / "state" / "cache.json"
    FileCache(path).set("rockloaders", "a,b")

    cache = FileCache(path)
    assert cache.get("rockloaders") == "a,b"
    cache.delete("rockloaders")
    cache.delete("never-set")
    assert FileCache(path).get("rockloaders") is None


def test_missing_file_reads_empty(tmp_path: Path) -> None:
    assert FileCache(tmp_path / "none.json").get("rockloaders") is None


def test_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CacheUnavailable):
        FileCache(path).get("rockloaders")
