"""Data models for attached loaders."""

from dataclasses import dataclass
from pathlib import Path

from ..constants import MARKUP_EXTENSION, STYLE_EXTENSION


@dataclass(frozen=True)
class Loader:
    """A named pair of optional fragments (style and markup).

    ``base_path`` is root-relative, forward-slashed and has no extension.
    ``root`` is the directory it is relative to: the project root for
    host loaders, the package directory for bundled ones.
    """
    key: str
    base_path: str
    root: Path
    bundled: bool = False

    @property
    def style_file(self) -> Path:
        return self.root / f"{self.base_path}.{STYLE_EXTENSION}"

    @property
    def markup_file(self) -> Path:
        return self.root / f"{self.base_path}.{MARKUP_EXTENSION}"

    @property
    def directory(self) -> str:
        """Root-relative directory holding the fragments."""
        head, _, _ = self.base_path.rpartition("/")
        return head

    def fragment_files(self):
        """Both fragment paths, present or not."""
        return [self.markup_file, self.style_file]
