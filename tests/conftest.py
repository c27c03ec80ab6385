from __future__ import annotations

import re
import time
from pathlib import Path

import pytest

from rockloaders.adapters.cache import KeyValueCache
from rockloaders.adapters.compiler import StyleCompiler
from rockloaders.exceptions import CacheUnavailable, CompileError


class FakeCompiler(StyleCompiler):
    """Collapses whitespace instead of compiling; records every call."""

    name = "fake"

    def __init__(self, fail_times: int = 0, delay: float = 0.0) -> None:
        self.calls: list[str] = []
        self.fail_times = fail_times
        self.delay = delay

    def compile(self, source: str, compress: bool = True) -> str:
        self.calls.append(source)
        if self.delay:
            time.sleep(self.delay)
        if self.fail_times:
            self.fail_times -= 1
            raise CompileError("unexpected token")
        if compress:
            return re.sub(r"\s+", " ", source).strip()
        return source


class BrokenCache(KeyValueCache):
    def get(self, key):
        raise CacheUnavailable("cache down")

    def set(self, key, value):
        raise CacheUnavailable("cache down")

    def delete(self, key):
        raise CacheUnavailable("cache down")


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with a rocket loader (style only) and a spin loader (style + markup)."""
    loaders = tmp_path / "site" / "assets" / "loaders"
    write(loaders / "rocket.less", "opacity: 0;")
    write(tmp_path / "loaders" / "spin.less", ".spin { color: red; }")
    write(tmp_path / "loaders" / "spin.html", "<i class='spin'></i>")
    return tmp_path
