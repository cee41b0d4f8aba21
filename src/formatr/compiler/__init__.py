"""formatr compiler: AST to renderer.

Filters are resolved and includes expanded once, at compile time; the
resulting renderers only walk a flat tuple of parts.
"""

from formatr.compiler.core import Compiler, is_async_filter
from formatr.compiler.parts import MISSING, PlaceholderPart, ResolvedFilter, TextPart, resolve_path
from formatr.compiler.renderer import AsyncRenderer, Renderer

__all__ = [
    "MISSING",
    "AsyncRenderer",
    "Compiler",
    "PlaceholderPart",
    "Renderer",
    "ResolvedFilter",
    "TextPart",
    "is_async_filter",
    "resolve_path",
]
