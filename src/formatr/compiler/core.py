"""formatr Compiler — AST to renderer.

The Compiler walks a TemplateAST once and produces a flat tuple of parts:

1. **Text** nodes become literal parts; adjacent literals are merged.
2. **Placeholder** nodes become parts holding the dotted key (joined once)
   and the filter chain resolved to function references. Filter names are
   never looked up at render time.
3. **Include** nodes are replaced by the parts of the registered template,
   parsed and flattened with the same options. An active-include stack
   detects cycles.

The parts are then wrapped in a Renderer (sync) or AsyncRenderer.

Example:
    >>> from formatr.environment import FilterRegistry, TemplateRegistry, CompileOptions
    >>> from formatr.parser import parse
    >>> compiler = Compiler(FilterRegistry(), TemplateRegistry(), CompileOptions())
    >>> compiler.compile(parse("Hello {name|upper}"))({"name": "lara"})
    'Hello LARA'

"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable

from formatr.compiler.parts import Part, PlaceholderPart, ResolvedFilter, TextPart, merge_text
from formatr.compiler.renderer import AsyncRenderer, Renderer
from formatr.environment.exceptions import (
    CircularIncludeError,
    UnknownFilterError,
    UnknownTemplateError,
)
from formatr.environment.options import CompileOptions
from formatr.environment.registry import FilterRegistry, TemplateRegistry
from formatr.nodes import FilterCall, Include, Placeholder, TemplateAST, Text
from formatr.parser import parse
from formatr.utils.suggestions import suggest_names

logger = logging.getLogger(__name__)


def is_async_filter(func: Callable[..., object]) -> bool:
    """True for coroutine functions (including partials and bound methods of them)."""
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
        getattr(func, "__call__", None)
    )


class Compiler:
    """Compile a TemplateAST into a renderer.

    The filter and template registries are read, never mutated. A Compiler
    may be reused for many templates; it keeps no per-compile state apart
    from the include stack, which is always empty between calls.

    Attributes:
        _filters: Merged filter registry snapshot
        _templates: Registry consulted for ``{> name}`` includes
        _options: Options baked into every renderer this compiler builds
        _include_stack: Names of includes currently being expanded
    """

    __slots__ = ("_filters", "_include_stack", "_options", "_templates")

    def __init__(
        self,
        filters: FilterRegistry,
        templates: TemplateRegistry,
        options: CompileOptions,
    ):
        self._filters = filters
        self._templates = templates
        self._options = options
        self._include_stack: list[str] = []

    def compile(self, ast: TemplateAST) -> Renderer:
        """Compile to a synchronous renderer.

        Raises:
            UnknownFilterError: A filter name is not registered.
            UnknownTemplateError: An include names an unregistered template.
            CircularIncludeError: Includes form a cycle.
            ParseError: An included template fails to parse.
        """
        parts = self.build_parts(ast)
        return Renderer(parts, **self._renderer_kwargs(ast))

    def compile_async(self, ast: TemplateAST) -> AsyncRenderer:
        """Compile to an asynchronous renderer. Raises as ``compile``."""
        parts = self.build_parts(ast)
        return AsyncRenderer(parts, **self._renderer_kwargs(ast))

    def _renderer_kwargs(self, ast: TemplateAST) -> dict[str, object]:
        return {
            "on_missing": self._options.on_missing,
            "strict_keys": self._options.strict_keys,
            "source": ast.source,
        }

    def build_parts(self, ast: TemplateAST) -> tuple[Part, ...]:
        """Flatten ``ast`` (with includes expanded) into merged parts."""
        raw: list[Part] = []
        self._flatten(ast, raw)
        parts = merge_text(raw)
        logger.debug(
            "Compiled template: %d nodes -> %d parts", len(ast.nodes), len(parts)
        )
        return parts

    def _flatten(self, ast: TemplateAST, out: list[Part]) -> None:
        for node in ast.nodes:
            if isinstance(node, Text):
                out.append(TextPart(node.value))
            elif isinstance(node, Placeholder):
                out.append(self._compile_placeholder(node))
            elif isinstance(node, Include):
                self._expand_include(node, out)

    def _compile_placeholder(self, node: Placeholder) -> PlaceholderPart:
        filters = tuple(self._resolve_filter(call) for call in node.filters)
        return PlaceholderPart(
            path=node.path,
            key=node.key,
            filters=filters,
            has_async=any(f.is_async for f in filters),
        )

    def _resolve_filter(self, call: FilterCall) -> ResolvedFilter:
        func = self._filters.get(call.name)
        if func is None:
            raise UnknownFilterError(
                call.name, tuple(suggest_names(call.name, self._filters.names()))
            )
        return ResolvedFilter(
            name=call.name,
            func=func,
            args=call.args,
            is_async=is_async_filter(func),
        )

    def _expand_include(self, node: Include, out: list[Part]) -> None:
        name = node.name
        if name in self._include_stack:
            raise CircularIncludeError((*self._include_stack, name))
        source = self._templates.get(name)
        if source is None:
            raise UnknownTemplateError(name)

        self._include_stack.append(name)
        try:
            logger.debug("Expanding include %r (depth %d)", name, len(self._include_stack))
            self._flatten(parse(source, name=name), out)
        finally:
            self._include_stack.pop()
