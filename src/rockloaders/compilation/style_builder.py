"""Assembly and compilation of the loader stylesheet."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from ..adapters.compiler.base import StyleCompiler
from ..constants import LOADER_ATTRIBUTE, PREFIX_STUB
from ..exceptions import ArtifactWriteError
from ..registry.loader_registry import LoaderRegistry
from ..registry.models import Loader
from ..utils.helpers import atomic_write, read_text

_KEYFRAMES_AT_RULE = re.compile(r"@(?:-[a-z]+-)?keyframes\s")


@dataclass
class CompiledArtifact:
    """A stylesheet written to disk."""
    path: Path
    css: str
    fingerprint: str
    styled: List[str] = field(default_factory=list)  # loaders that contributed rules


def _code_positions(text: str) -> Iterator[int]:
    """Indexes of characters outside comments and quoted strings."""
    i, n = 0, len(text)
    while i < n:
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        elif text.startswith("//", i) and (i == 0 or text[i - 1].isspace()):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text[i] in "\"'":
            quote, end = text[i], i + 1
            while end < n and text[end] != quote:
                end += 2 if text[end] == "\\" else 1
            i = end + 1
        else:
            yield i
            i += 1


def split_keyframes(fragment: str) -> Tuple[str, List[str]]:
    """Separate top-level ``@keyframes`` blocks from the rest of a fragment.

    Keyframes must stay at the top level of the stylesheet; nested inside the
    loader's container rule they would compile to an invalid selector.

    Returns:
        Tuple[str, List[str]]: The remaining rules and the keyframes blocks,
        in source order.
    """
    rules: List[str] = []
    keyframes: List[str] = []
    depth = 0
    cursor = 0
    block_start = None
    for i in _code_positions(fragment):
        char = fragment[i]
        if char == "@" and depth == 0 and block_start is None and _KEYFRAMES_AT_RULE.match(fragment, i):
            block_start = i
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0 and block_start is not None:
                rules.append(fragment[cursor:block_start])
                keyframes.append(fragment[block_start:i + 1])
                cursor = i + 1
                block_start = None
    rules.append(fragment[cursor:])
    return "".join(rules), keyframes


def loader_rules(key: str, fragment: str) -> str:
    """Visibility toggle plus the fragment scoped to the loader's container."""
    attr = f"[{LOADER_ATTRIBUTE}='{key}']"
    rules, keyframes = split_keyframes(fragment)
    parts = [f"body{attr} div{attr} {{ opacity: 1; pointer-events: all; }}\n"]
    if rules.strip():
        parts.append(f"div{attr} {{\n{rules.strip()}\n}}\n")
    parts.extend(f"{block}\n" for block in keyframes)
    return "".join(parts)


class StyleBuilder:
    """Builds one stylesheet from the style fragments of all attached loaders."""

    def __init__(self, compiler: StyleCompiler, artifact_path: Union[str, Path],
                 compress: bool = True, prefix_path: Union[str, Path] = PREFIX_STUB):
        self.compiler = compiler
        self.artifact_path = Path(artifact_path)
        self.compress = compress
        self.prefix_path = Path(prefix_path)

    def assemble(self, registry: LoaderRegistry) -> Tuple[str, List[str]]:
        """Build the LESS source document.

        Returns:
            Tuple[str, List[str]]: Source text and the names of loaders that
            had a style fragment.
        """
        parts = [read_text(self.prefix_path).rstrip() + "\n"]
        styled = []
        for loader in registry:
            fragment = self._read_fragment(loader)
            if fragment is None:
                continue
            parts.append(loader_rules(loader.key, fragment))
            styled.append(loader.key)
        return "\n".join(parts), styled

    def build(self, registry: LoaderRegistry) -> CompiledArtifact:
        """Compile and publish the stylesheet.

        The previous stylesheet stays in place unless the new one was
        compiled and written completely.

        Raises:
            CompileError: If the compiler rejects the document.
            ArtifactWriteError: If the stylesheet cannot be written.
            FragmentReadError: If the prefix or a style fragment cannot be read.
        """
        source, styled = self.assemble(registry)
        css = self.compiler.compile(source, compress=self.compress)

        try:
            os.makedirs(self.artifact_path.parent, exist_ok=True)
            atomic_write(self.artifact_path, css)
        except OSError as e:
            raise ArtifactWriteError(f"Failed to write {self.artifact_path}: {e}") from e

        return CompiledArtifact(
            path=self.artifact_path,
            css=css,
            fingerprint=registry.fingerprint(),
            styled=styled,
        )

    def _read_fragment(self, loader: Loader):
        if not loader.style_file.is_file():
            return None
        return read_text(loader.style_file)
