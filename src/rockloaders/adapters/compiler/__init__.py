"""Style compiler adapters."""

from .base import StyleCompiler
from .lessc import LesscCompiler
from .lesscpy_compiler import LesscpyCompiler

__all__ = ['StyleCompiler', 'LesscCompiler', 'LesscpyCompiler']
