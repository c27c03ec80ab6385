"""Markup blob for all attached loaders."""

from pathlib import Path
from typing import Union

from ..constants import DEFAULT_MARKUP_STUB, LOADER_ATTRIBUTE
from ..registry.loader_registry import LoaderRegistry
from ..utils.helpers import read_text


class MarkupBuilder:
    """Renders one container per loader; not cached."""

    def __init__(self, default_fragment: Union[str, Path] = DEFAULT_MARKUP_STUB):
        self.default_fragment = Path(default_fragment)

    def render(self, registry: LoaderRegistry) -> str:
        """Raises FragmentReadError if a markup fragment cannot be read."""
        blocks = []
        for loader in registry:
            source = loader.markup_file if loader.markup_file.is_file() else self.default_fragment
            blocks.append(f"<div {LOADER_ATTRIBUTE}='{loader.key}'>{read_text(source)}</div>")
        return "".join(blocks)
