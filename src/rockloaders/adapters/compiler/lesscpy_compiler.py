"""In-process LESS compilation with lesscpy."""

from io import StringIO

import lesscpy

from ...exceptions import CompileError
from .base import StyleCompiler


class LesscpyCompiler(StyleCompiler):
    """Compiles with the pure-Python lesscpy library."""

    name = "lesscpy"

    def compile(self, source: str, compress: bool = True) -> str:
        try:
            return lesscpy.compile(StringIO(source), minify=compress)
        except Exception as e:
            raise CompileError(f"lesscpy failed: {e}") from e
