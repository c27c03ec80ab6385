from __future__ import annotations

import os
import time
from pathlib import Path

from rockloaders.adapters.cache import MemoryCache
from rockloaders.compilation import FingerprintChangeDetector, TimestampChangeDetector
from rockloaders.registry import LoaderRegistry
from tests.conftest import BrokenCache, write


def _touch(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


def _timestamp_setup(project: Path):
    registry = LoaderRegistry(project)
    registry.attach("rocket", "site/assets/loaders")
    registry.attach("ghost", "site/assets/loaders")  # no fragments at all
    base_rules = write(project / "stubs" / "prefix.less", "div {}").parent
    artifact = write(project / "out.css", "old")

    now = time.time()
    _touch(artifact, now)
    _touch(project / "site" / "assets" / "loaders" / "rocket.less", now - 100)
    _touch(base_rules / "prefix.less", now - 100)
    detector = TimestampChangeDetector(artifact, base_rules_dir=base_rules)
    return registry, detector, artifact, now


def test_timestamp_missing_artifact(project: Path) -> None:
    registry = LoaderRegistry(project)
    detector = TimestampChangeDetector(project / "missing.css", base_rules_dir=project)
    assert detector.rebuild_needed(registry)


def test_timestamp_untouched_fragments(project: Path) -> None:
    registry, detector, _, _ = _timestamp_setup(project)
    assert not detector.rebuild_needed(registry)


def test_timestamp_newer_fragment(project: Path) -> None:
    registry, detector, _, now = _timestamp_setup(project)
    _touch(project / "site" / "assets" / "loaders" / "rocket.less", now + 100)
    assert detector.rebuild_needed(registry)


def test_timestamp_newer_markup_fragment(project: Path) -> None:
    registry, detector, _, now = _timestamp_setup(project)
    markup = write(project / "site" / "assets" / "loaders" / "rocket.html", "<b></b>")
    _touch(markup, now + 5)
    assert detector.rebuild_needed(registry)


def test_timestamp_newer_base_rule(project: Path) -> None:
    registry, detector, _, now = _timestamp_setup(project)
    _touch(project / "stubs" / "prefix.less", now + 100)
    assert detector.rebuild_needed(registry)


def test_force_flag_cleared_by_successful_build(project: Path) -> None:
    registry, detector, _, _ = _timestamp_setup(project)
    detector.request_rebuild()
    assert detector.rebuild_needed(registry)

    detector.record_build(registry)
    assert not detector.rebuild_needed(registry)


def test_force_recompile_setting(project: Path) -> None:
    registry, _, artifact, _ = _timestamp_setup(project)
    detector = TimestampChangeDetector(artifact, base_rules_dir=project / "stubs", force_recompile=True)
    assert detector.rebuild_needed(registry)


def test_fingerprint_tracks_loader_set(project: Path) -> None:
    artifact = write(project / "out.css", "old")
    cache = MemoryCache()
    detector = FingerprintChangeDetector(artifact, cache)
    registry = LoaderRegistry(project)
    registry.attach("rocket", "site/assets/loaders")

    assert detector.rebuild_needed(registry)
    detector.record_build(registry)
    assert cache.get("rockloaders") == "rocket"
    assert not detector.rebuild_needed(registry)

    registry.add_all("loaders")
    assert detector.rebuild_needed(registry)


def test_fingerprint_same_keys_again(project: Path) -> None:
    artifact = write(project / "out.css", "old")
    detector = FingerprintChangeDetector(artifact, MemoryCache())
    first = LoaderRegistry(project)
    first.add({"rocket": "site/assets/loaders", "spin": "loaders"})
    detector.record_build(first)

    again = LoaderRegistry(project)
    again.attach("spin", "loaders")
    again.attach("rocket", "site/assets/loaders")
    assert not detector.rebuild_needed(again)


def test_fingerprint_fails_open_when_cache_is_down(project: Path) -> None:
    artifact = write(project / "out.css", "old")
    detector = FingerprintChangeDetector(artifact, BrokenCache())

    assert detector.rebuild_needed(LoaderRegistry(project))
    assert detector.last_error == "cache down"


def test_fingerprint_missing_artifact(project: Path) -> None:
    cache = MemoryCache()
    cache.set("rockloaders", "")
    detector = FingerprintChangeDetector(project / "gone.css", cache)
    assert detector.rebuild_needed(LoaderRegistry(project))
