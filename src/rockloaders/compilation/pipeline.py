"""Explicit build stages for hosts serving loader assets.

Hosts call ``ensure_fresh()`` before serving a response, ``render_markup()``
to get the markup for that response, and ``invalidate()`` when loader
definitions changed elsewhere.
"""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..exceptions import ArtifactWriteError, CacheUnavailable, CompileError, FragmentReadError
from ..registry.loader_registry import LoaderRegistry
from .change_detector import ChangeDetector
from .markup_builder import MarkupBuilder
from .style_builder import CompiledArtifact, StyleBuilder

# One lock per stylesheet path, shared by every pipeline in the process
_BUILD_LOCKS: Dict[str, threading.Lock] = {}
_BUILD_LOCKS_GUARD = threading.Lock()


def _build_lock(artifact_path: Path) -> threading.Lock:
    key = str(artifact_path.resolve())
    with _BUILD_LOCKS_GUARD:
        lock = _BUILD_LOCKS.get(key)
        if lock is None:
            lock = _BUILD_LOCKS[key] = threading.Lock()
        return lock


@dataclass
class BuildResult:
    """Result of a freshness check and, if needed, a rebuild."""
    success: bool
    rebuilt: bool
    artifact_path: str
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)


class LoaderPipeline:
    """Keeps the loader stylesheet in sync with a registry."""

    def __init__(self, registry: LoaderRegistry, detector: ChangeDetector,
                 style_builder: StyleBuilder, markup_builder: Optional[MarkupBuilder] = None):
        self.registry = registry
        self.detector = detector
        self.style_builder = style_builder
        self.markup_builder = markup_builder or MarkupBuilder()

    @property
    def artifact_path(self) -> Path:
        return self.style_builder.artifact_path

    def rebuild_needed(self) -> bool:
        return self.detector.rebuild_needed(self.registry)

    def ensure_fresh(self, force: bool = False, raise_errors: bool = False) -> BuildResult:
        """Rebuild the stylesheet if it is stale.

        Concurrent callers are serialised; whoever gets the lock second sees
        the fresh stylesheet and skips the build.

        Args:
            force (bool): Rebuild even if nothing changed.
            raise_errors (bool): Re-raise build failures instead of
                reporting them on the result.

        Returns:
            BuildResult: ``success`` is False if the build failed; the
            previous stylesheet is then still in place.
        """
        warnings: List[str] = []

        with _build_lock(self.artifact_path):
            if force:
                self.detector.last_error = None
                needed = True
            else:
                needed = self.detector.rebuild_needed(self.registry)
            if self.detector.last_error:
                warnings.append(f"Fingerprint store unavailable, rebuilding: {self.detector.last_error}")
            if not needed:
                return self._result(True, False, warnings, [], None)

            try:
                artifact = self.style_builder.build(self.registry)
            except (CompileError, ArtifactWriteError, FragmentReadError) as e:
                if raise_errors:
                    raise
                return self._result(False, False, warnings, [str(e)], None)

            try:
                self.detector.record_build(self.registry)
            except CacheUnavailable as e:
                warnings.append(f"Fingerprint not stored: {e}")

        return self._result(True, True, warnings, [], artifact)

    def request_rebuild(self) -> None:
        """Rebuild on the next ``ensure_fresh`` regardless of changes."""
        self.detector.request_rebuild()

    def invalidate(self) -> bool:
        """Drop the stored fingerprint and request a rebuild.

        Returns:
            bool: False if the fingerprint store could not be reached (a
            rebuild is still requested).
        """
        try:
            self.detector.invalidate()
        except CacheUnavailable:
            self.detector.request_rebuild()
            return False
        return True

    def render_markup(self) -> str:
        return self.markup_builder.render(self.registry)

    def _result(self, success: bool, rebuilt: bool, warnings: List[str], errors: List[str],
                artifact: Optional[CompiledArtifact]) -> BuildResult:
        stats: Dict[str, Any] = {
            'strategy': self.detector.name,
            'loaders': len(self.registry),
            'fingerprint': self.registry.fingerprint(),
        }
        if artifact is not None:
            stats['styled'] = len(artifact.styled)
            stats['bytes'] = len(artifact.css.encode("utf-8"))
        return BuildResult(
            success=success,
            rebuilt=rebuilt,
            artifact_path=str(self.artifact_path),
            warnings=warnings,
            errors=errors,
            stats=stats,
        )
