"""Base adapter interface for style compilers."""

from abc import ABC, abstractmethod


class StyleCompiler(ABC):
    """Base adapter for LESS-to-CSS compilers."""

    name = "base"

    @abstractmethod
    def compile(self, source: str, compress: bool = True) -> str:
        """Compile a LESS document to CSS.

        Args:
            source (str): Complete LESS source document.
            compress (bool): Minify the output.

        Returns:
            str: Compiled CSS.

        Raises:
            CompileError: If the source is rejected.
        """
        pass
