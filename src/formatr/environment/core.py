"""Environment - central configuration and compiled-template cache.

An Environment owns:

- default CompileOptions (locale, missing-key policy, custom filters, ...)
- a TemplateRegistry for ``{> name}`` includes
- an LRU cache of compiled renderers, cleared whenever the registry changes

Example:
    >>> from formatr.environment import Environment
    >>> env = Environment(locale="en-US", templates={"sig": "-- {author}"})
    >>> env.template("Thanks!\\n{> sig}")({"author": "Ada"})
    'Thanks!\\n-- Ada'

"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from formatr.analysis import AnalysisReport, Analyzer
from formatr.compiler import AsyncRenderer, Compiler, Renderer
from formatr.environment.exceptions import TemplateConfigError
from formatr.environment.options import CompileOptions
from formatr.environment.registry import FilterRegistry, TemplateRegistry
from formatr.parser import parse
from formatr.utils.lru_cache import LRUCache

logger = logging.getLogger(__name__)

_OPTION_NAMES = frozenset(f.name for f in dataclasses.fields(CompileOptions))


class Environment:
    """Compile, cache and analyze templates with shared defaults.

    Keyword arguments become the default CompileOptions; every per-call
    override is merged on top of them. The cache is shared by all option
    combinations, keyed by ``CompileOptions.cache_key``.

    Thread-safe: the cache and the template registry each guard their own
    state, and compiled renderers are immutable.

    Attributes:
        defaults: Default CompileOptions
        templates: TemplateRegistry used for includes

    Example:
            >>> env = Environment(on_missing="error")
            >>> env.template("{x|upper}")({"x": "hi"})
            'HI'
            >>> env.cache_info()["size"]
            1

    """

    def __init__(
        self,
        templates: TemplateRegistry | Mapping[str, str] | None = None,
        **defaults: Any,
    ):
        self.defaults = _build_options(CompileOptions(), defaults)
        if isinstance(templates, TemplateRegistry):
            self.templates = templates
        else:
            self.templates = TemplateRegistry(templates)
        self._cache: LRUCache[tuple[Any, ...], Renderer | AsyncRenderer] = LRUCache(
            self.defaults.cache_size
        )
        self.templates.subscribe(self._on_templates_changed)

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def template(self, source: str, **overrides: Any) -> Renderer:
        """Compile ``source`` (or fetch it from the cache) into a renderer.

        Args:
            source: Template source
            **overrides: Per-call CompileOptions fields

        Raises:
            ParseError: Malformed template syntax.
            UnknownFilterError: A filter is not registered.
            UnknownTemplateError: An include is not registered.
            CircularIncludeError: Includes form a cycle.
            TemplateConfigError: Invalid options.
        """
        return self._get_or_compile(source, overrides, "sync")  # type: ignore[return-value]

    def template_async(self, source: str, **overrides: Any) -> AsyncRenderer:
        """Like ``template`` but returns an awaitable renderer that supports async filters."""
        return self._get_or_compile(source, overrides, "async")  # type: ignore[return-value]

    def _get_or_compile(
        self, source: str, overrides: Mapping[str, Any], mode: str
    ) -> Renderer | AsyncRenderer:
        options = _build_options(self.defaults, overrides)
        self._resize(options.cache_size)

        def compile_source() -> Renderer | AsyncRenderer:
            logger.debug("Template cache miss (%s, %d chars)", mode, len(source))
            compiler = Compiler(
                FilterRegistry(options.locale, options.filters), self.templates, options
            )
            ast = parse(source)
            return compiler.compile_async(ast) if mode == "async" else compiler.compile(ast)

        return self._cache.get_or_set(options.cache_key(source, mode), compile_source)

    def _resize(self, cache_size: int) -> None:
        if cache_size != self._cache.maxsize:
            logger.debug("Resizing template cache: %d -> %d", self._cache.maxsize, cache_size)
            self._cache.maxsize = cache_size

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze(self, source: str, *, context: Any = None, **overrides: Any) -> AnalysisReport:
        """Report diagnostics for ``source`` without compiling it.

        ``context`` enables missing-key checks when the effective options
        raise on missing keys (``on_missing="error"`` or ``strict_keys``).
        """
        options = _build_options(self.defaults, overrides)
        analyzer = Analyzer(FilterRegistry(options.locale, options.filters), self.templates, options)
        if context is None:
            return analyzer.analyze(source)
        return analyzer.analyze(source, context)

    # ------------------------------------------------------------------
    # Template registry
    # ------------------------------------------------------------------

    def register_template(self, name: str, source: str) -> None:
        """Register ``source`` under ``name`` for ``{> name}`` includes."""
        self.templates.register(name, source)

    def unregister_template(self, name: str) -> bool:
        return self.templates.unregister(name)

    def clear_templates(self) -> None:
        self.templates.clear()

    def _on_templates_changed(self) -> None:
        logger.debug("Template registry changed; clearing compiled-template cache")
        self._cache.clear()

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_info(self) -> dict[str, int]:
        """Cache statistics: ``hits``, ``misses``, ``size`` and ``maxsize``."""
        return self._cache.stats()

    def __repr__(self) -> str:
        return (
            f"<Environment locale={self.defaults.locale!r} "
            f"templates={len(self.templates)} cached={len(self._cache)}>"
        )


def _build_options(base: CompileOptions, overrides: Mapping[str, Any]) -> CompileOptions:
    unknown = set(overrides) - _OPTION_NAMES
    if unknown:
        raise TemplateConfigError(f"Unknown option(s): {', '.join(sorted(unknown))}")
    return base.replace(**overrides).validate()
