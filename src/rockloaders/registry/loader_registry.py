"""Registry of attached loaders."""

from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..constants import BUNDLED_LOADERS_DIR, DEFAULT_ROOT_MARKER
from .discovery import find_style_fragments, loader_name
from .models import Loader
from .paths import PathResolver

PathLike = Union[str, Path]


class LoaderRegistry:
    """Ordered collection of attached loaders, keyed by name.

    Attaching an existing name overwrites it. Iteration is always by name,
    ascending, so everything derived from a registry is deterministic.
    """

    def __init__(self, project_root: PathLike = ".",
                 root_marker: Optional[str] = DEFAULT_ROOT_MARKER,
                 bundled_dir: PathLike = BUNDLED_LOADERS_DIR):
        self.project_root = Path(project_root).resolve()
        self.resolver = PathResolver(self.project_root, root_marker)
        self.bundled_dir = Path(bundled_dir).resolve()
        self._bundled_resolver = PathResolver(self.bundled_dir.parent, root_marker=None)
        self._loaders: Dict[str, Loader] = {}

    def attach(self, key: str, path: PathLike) -> Loader:
        """Attach the loader ``key`` whose fragments live in directory ``path``.

        Raises:
            InvalidPath: If the path cannot be resolved.
        """
        self.add({key: path})
        return self._loaders[key]

    def attach_by_name(self, key: str) -> Loader:
        """Attach one of the loaders bundled with this package.

        Raises:
            InvalidPath: If the name is not a valid loader name.
        """
        loader = self._bundled(key)
        self._loaders[key] = loader
        self._sort()
        return loader

    def add(self, entries: Mapping[str, PathLike]) -> None:
        """Attach several loaders at once.

        All entries are resolved before any is stored: if one fails, the
        registry is left unchanged.

        Raises:
            InvalidPath: For the first entry that cannot be resolved.
        """
        resolved = []
        for key, raw_path in entries.items():
            resolved.append(self._resolve(key, raw_path))

        for loader in resolved:
            self._loaders[loader.key] = loader
        self._sort()

    def add_all(self, directory: PathLike) -> List[str]:
        """Attach every loader that has a style fragment in ``directory``.

        Relative directories are taken from the project root. The scan is
        one batch: if any file name is not a valid loader name, InvalidPath
        is raised naming it and nothing from the directory is attached.

        Returns:
            List[str]: Names that were attached.
        """
        directory = Path(directory)
        if not directory.is_absolute():
            directory = self.project_root / directory

        entries = {}
        for fragment in find_style_fragments(directory):
            entries[loader_name(fragment)] = fragment.parent
        self.add(entries)
        return sorted(entries)

    def snapshot(self) -> List[Tuple[str, str]]:
        """Read-only ``(key, base_path)`` pairs, ascending by key."""
        return [(loader.key, loader.base_path) for loader in self._loaders.values()]

    def fingerprint(self) -> str:
        """Sorted, comma-joined loader names."""
        return ",".join(self._loaders)

    def get(self, key: str) -> Optional[Loader]:
        return self._loaders.get(key)

    def describe(self) -> List[Tuple[str, str, str]]:
        """Rows of ``(key, base_path, setup snippet)`` for listings."""
        rows = []
        for loader in self._loaders.values():
            if loader.bundled:
                setup = f"registry.attach_by_name('{loader.key}')"
            else:
                setup = f"registry.attach('{loader.key}', '{loader.directory}')"
            rows.append((loader.key, loader.base_path, setup))
        return rows

    def __contains__(self, key: object) -> bool:
        return key in self._loaders

    def __len__(self) -> int:
        return len(self._loaders)

    def __iter__(self) -> Iterator[Loader]:
        return iter(list(self._loaders.values()))

    def __repr__(self) -> str:
        return f"LoaderRegistry({self.project_root}, loaders={list(self._loaders)})"

    def _resolve(self, key: str, raw_path: PathLike) -> Loader:
        candidate = Path(raw_path)
        if (candidate.is_absolute() and _is_within(candidate, self.bundled_dir)
                and not _is_within(candidate, self.project_root)):
            return self._bundled(key, candidate.resolve())
        base_path = self.resolver.resolve(raw_path, key)
        return Loader(key=key, base_path=base_path, root=self.project_root)

    def _bundled(self, key: str, directory: Optional[Path] = None) -> Loader:
        base_path = self._bundled_resolver.resolve(directory or self.bundled_dir, key)
        return Loader(key=key, base_path=base_path, root=self.bundled_dir.parent, bundled=True)

    def _sort(self) -> None:
        self._loaders = dict(sorted(self._loaders.items()))


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.resolve().relative_to(directory)
        return True
    except ValueError:
        return False
