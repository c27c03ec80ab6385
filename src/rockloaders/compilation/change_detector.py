"""Staleness checks for the compiled loader stylesheet.

Two strategies decide whether the stylesheet must be rebuilt:

* ``TimestampChangeDetector`` (development): compares modification times of
  every fragment and of the base rules against the stylesheet.
* ``FingerprintChangeDetector`` (production): compares the registry
  fingerprint with the one stored after the last successful build.

Both honour a process-local force flag and the ``force_recompile`` setting.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..adapters.cache.base import KeyValueCache
from ..constants import FINGERPRINT_CACHE_KEY, STUBS_DIR
from ..exceptions import CacheUnavailable
from ..registry.loader_registry import LoaderRegistry


class ChangeDetector(ABC):
    """Decides whether the stylesheet is stale."""

    name = "base"

    def __init__(self, artifact_path: Union[str, Path], force_recompile: bool = False):
        self.artifact_path = Path(artifact_path)
        self.force_recompile = force_recompile
        self.force_rebuild = False
        self.last_error: Optional[str] = None

    def rebuild_needed(self, registry: LoaderRegistry) -> bool:
        self.last_error = None
        if self.force_recompile or self.force_rebuild:
            return True
        if not self.artifact_path.is_file():
            return True
        return self._changed(registry)

    def request_rebuild(self) -> None:
        """Force the next check to report a rebuild."""
        self.force_rebuild = True

    def record_build(self, registry: LoaderRegistry) -> None:
        """Called after the stylesheet was written successfully."""
        self.force_rebuild = False

    def invalidate(self) -> None:
        """Forget what the last build was based on."""
        self.request_rebuild()

    def current_fingerprint(self, registry: LoaderRegistry) -> str:
        return registry.fingerprint()

    @abstractmethod
    def _changed(self, registry: LoaderRegistry) -> bool:
        """Strategy check, run only when the stylesheet exists and no flag is set."""
        pass


class TimestampChangeDetector(ChangeDetector):
    """Rebuild when any fragment or base rule is newer than the stylesheet."""

    name = "timestamp"

    def __init__(self, artifact_path: Union[str, Path], base_rules_dir: Union[str, Path] = STUBS_DIR,
                 force_recompile: bool = False):
        super().__init__(artifact_path, force_recompile)
        self.base_rules_dir = Path(base_rules_dir)

    def _changed(self, registry: LoaderRegistry) -> bool:
        built_at = self.artifact_path.stat().st_mtime

        for loader in registry:
            for fragment in loader.fragment_files():
                if fragment.is_file() and fragment.stat().st_mtime > built_at:
                    return True

        if self.base_rules_dir.is_dir():
            for path in self.base_rules_dir.iterdir():
                if path.is_file() and path.stat().st_mtime > built_at:
                    return True

        return False


class FingerprintChangeDetector(ChangeDetector):
    """Rebuild when the set of attached loader names changed.

    The fingerprint is stored only by ``record_build``, after a successful
    build, so a failed compile is retried on the next check. An unreachable
    cache counts as changed.
    """

    name = "fingerprint"

    def __init__(self, artifact_path: Union[str, Path], cache: KeyValueCache,
                 cache_key: str = FINGERPRINT_CACHE_KEY, force_recompile: bool = False):
        super().__init__(artifact_path, force_recompile)
        self.cache = cache
        self.cache_key = cache_key

    def stored_fingerprint(self) -> Optional[str]:
        """Raises CacheUnavailable."""
        return self.cache.get(self.cache_key)

    def _changed(self, registry: LoaderRegistry) -> bool:
        try:
            stored = self.stored_fingerprint()
        except CacheUnavailable as e:
            self.last_error = str(e)
            return True
        return stored != self.current_fingerprint(registry)

    def record_build(self, registry: LoaderRegistry) -> None:
        super().record_build(registry)
        self.cache.set(self.cache_key, self.current_fingerprint(registry))

    def invalidate(self) -> None:
        super().invalidate()
        self.cache.delete(self.cache_key)
