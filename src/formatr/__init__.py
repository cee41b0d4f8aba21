"""formatr — small, fast string templates with filters, includes and diagnostics.

Quickstart:
    >>> from formatr import template
    >>> greet = template("Hello {user.name|upper}, you have {count|plural:message,messages}")
    >>> greet({"user": {"name": "lara"}, "count": 2})
    'Hello LARA, you have messages'

Isolated configuration:
    >>> from formatr import Environment
    >>> env = Environment(locale="de-DE", on_missing="error")
    >>> env.template("{total|currency:EUR}")({"total": 1234.5})
    '1.234,50\\xa0€'

Architecture:
Template Source → Parser → formatr AST → Compiler → parts → Renderer

Pipeline stages:
1. **Parser**: One left-to-right scan builds immutable, positioned nodes
2. **Compiler**: Resolves filters and expands ``{> name}`` includes once
3. **Renderer**: Walks a flat tuple of parts; async renderers gather
   placeholders concurrently
4. **Analyzer**: Reuses the parser and a line index to report diagnostics
   instead of raising

Thread-Safety:
- Compiled renderers are immutable and shared between threads
- The compiled-template cache and the template registry are lock-guarded
- Filter registries are snapshots taken at compile time

Missing keys:
``on_missing="keep"`` (default) re-emits ``{path}``; ``"error"`` or
``strict_keys=True`` raises MissingKeyError; a callable receives the
dotted path and returns the replacement text.

"""

from formatr.analysis import AnalysisReport, Analyzer, Diagnostic, DiagnosticCode, Severity
from formatr.api import (
    analyze,
    clear_cache,
    clear_templates,
    get_default_environment,
    register_template,
    template,
    template_async,
    unregister_template,
)
from formatr.compiler import AsyncRenderer, Compiler, Renderer
from formatr.environment import (
    AsyncFilterError,
    CircularIncludeError,
    CompileOptions,
    ErrorCode,
    FilterExecutionError,
    FilterRegistry,
    MissingKeyError,
    TemplateConfigError,
    TemplateError,
    TemplateRegistry,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UnknownFilterError,
    UnknownTemplateError,
)
from formatr.environment.core import Environment
from formatr.environment.exceptions import SourceSnippet, build_source_snippet
from formatr.filters import Filter, make_locale_filters
from formatr.nodes import FilterCall, Include, Placeholder, Span, TemplateAST, Text
from formatr.parser import ParseError, parse
from formatr.position import LineIndex, Position, Range

__version__ = "0.3.0"

__all__ = [
    "AnalysisReport",
    "Analyzer",
    "AsyncFilterError",
    "AsyncRenderer",
    "CircularIncludeError",
    "CompileOptions",
    "Compiler",
    "Diagnostic",
    "DiagnosticCode",
    "Environment",
    "ErrorCode",
    "Filter",
    "FilterCall",
    "FilterExecutionError",
    "FilterRegistry",
    "Include",
    "LineIndex",
    "MissingKeyError",
    "ParseError",
    "Placeholder",
    "Position",
    "Range",
    "Renderer",
    "Severity",
    "SourceSnippet",
    "Span",
    "TemplateAST",
    "TemplateConfigError",
    "TemplateError",
    "TemplateRegistry",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "Text",
    "UnknownFilterError",
    "UnknownTemplateError",
    "__version__",
    "analyze",
    "build_source_snippet",
    "clear_cache",
    "clear_templates",
    "get_default_environment",
    "make_locale_filters",
    "parse",
    "register_template",
    "template",
    "template_async",
    "unregister_template",
]


# Free-threading declaration (PEP 703)
def __getattr__(name: str) -> object:
    if name == "_Py_mod_gil":
        # 0 = Py_MOD_GIL_NOT_USED
        return 0
    raise AttributeError(f"module 'formatr' has no attribute {name!r}")
