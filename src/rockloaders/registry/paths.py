"""Canonical base paths for loader fragments."""

import re
from pathlib import Path
from typing import List, Optional, Union

from ..constants import DEFAULT_ROOT_MARKER
from ..exceptions import InvalidPath

# Loader names end up in CSS attribute selectors and file names
LOADER_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:/")


def normalize_separators(path: str) -> str:
    """Use forward slashes only and collapse repeated separators."""
    return re.sub(r"/{2,}", "/", path.replace("\\", "/"))


def _segments(path: str) -> List[str]:
    return [part for part in path.split("/") if part]


def _is_absolute(normalized: str) -> bool:
    return normalized.startswith("/") or bool(_DRIVE_PATTERN.match(normalized))


class PathResolver:
    """Turns a loader location into a root-relative base path.

    A location is resolved, in order:

    1. absolute and inside ``project_root``: relative to the root;
    2. containing the ``root_marker`` segment: everything before the first
       marker is dropped, the marker itself is kept;
    3. relative and a ``project_root`` is known: taken as root-relative.

    Anything else raises :class:`InvalidPath`.
    """

    def __init__(self, project_root: Optional[Union[str, Path]] = None,
                 root_marker: Optional[str] = DEFAULT_ROOT_MARKER):
        self.project_root = Path(project_root).resolve() if project_root is not None else None
        self.root_marker = root_marker

    def resolve(self, raw_path: Union[str, Path], key: str) -> str:
        """Resolve ``raw_path`` (the directory holding the fragments) for ``key``.

        Returns:
            str: Forward-slashed base path without extension, e.g.
            ``site/assets/loaders/rocket``.

        Raises:
            InvalidPath: If the key is unusable or the path cannot be made
            root-relative.
        """
        raw = str(raw_path)
        if not isinstance(key, str) or not LOADER_KEY_PATTERN.match(key):
            raise InvalidPath(str(key), raw, "loader name must be a non-empty word (letters, digits, '_', '-', '.')")

        normalized = normalize_separators(raw)
        absolute = _is_absolute(normalized)
        parts = _segments(f"/{normalized.strip('/')}/{key}")

        if absolute and self.project_root is not None:
            root_parts = _segments(normalize_separators(self.project_root.as_posix()))
            if parts[:len(root_parts)] == root_parts:
                return self._join(parts[len(root_parts):], key, raw)

        if self.root_marker and self.root_marker in parts:
            return self._join(parts[parts.index(self.root_marker):], key, raw)

        if not absolute and self.project_root is not None:
            return self._join(parts, key, raw)

        if self.root_marker:
            reason = f"no '{self.root_marker}' segment and not inside the project root"
        else:
            reason = "not inside the project root"
        raise InvalidPath(key, raw, reason)

    def _join(self, parts: List[str], key: str, raw: str) -> str:
        parts = [part for part in parts if part != "."]
        if ".." in parts:
            raise InvalidPath(key, raw, "path must not contain '..' segments")
        return "/".join(parts)
