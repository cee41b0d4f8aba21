"""Exceptions for the formatr template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateSyntaxError       # Parse-time syntax error (carries an offset)
│   └── ParseError            # raised by the parser (formatr.parser.errors)
├── TemplateConfigError       # Invalid compile options
├── TemplateRuntimeError      # Render-time error
│   ├── MissingKeyError       # Placeholder path did not resolve ("error" policy)
│   ├── FilterExecutionError  # A filter body raised (async renderer)
│   └── AsyncFilterError      # Async filter used from the sync renderer
├── UnknownFilterError        # Filter name absent from the registry
├── UnknownTemplateError      # Include of an unregistered template
└── CircularIncludeError      # Include cycle detected during compilation

Parse- and compile-time errors propagate to the caller of ``template()``;
render-time errors propagate to the caller of the renderer (or out of the
awaited coroutine for the async renderer).

Example:
    ```
    F-PAR-001: Expected '}' to close placeholder for "user.name"
      --> <template>:1:14
         |
    >  1 | Hi {user.name
         |              ^
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from formatr.environment import terminal
from formatr.utils.suggestions import did_you_mean

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for formatr errors.

    Format: F-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), CMP (compiler), RUN (runtime), CFG (configuration)
    """

    # Parser errors (F-PAR-xxx)
    SYNTAX_ERROR = "F-PAR-001"

    # Compiler errors (F-CMP-xxx)
    UNKNOWN_FILTER = "F-CMP-001"
    UNKNOWN_TEMPLATE = "F-CMP-002"
    CIRCULAR_INCLUDE = "F-CMP-003"

    # Runtime errors (F-RUN-xxx)
    MISSING_KEY = "F-RUN-001"
    FILTER_ERROR = "F-RUN-002"
    ASYNC_FILTER = "F-RUN-003"
    RUNTIME_ERROR = "F-RUN-004"

    # Configuration errors (F-CFG-xxx)
    INVALID_OPTION = "F-CFG-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parser', 'compiler', 'runtime')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "CMP": "compiler",
            "RUN": "runtime",
            "CFG": "configuration",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional 1-based column for the caret pointer.
        width: Number of characters to underline.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None
    width: int = 1

    def format(self, *, warning: bool = False) -> str:
        """Format the snippet in a Rust-inspired diagnostic style."""
        parts: list[str] = [terminal.dim_text("     |")]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
            if is_error and self.column is not None:
                parts.append(terminal.format_underline(self.column, self.width, warning=warning))
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 1,
    column: int | None = None,
    width: int = 1,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional 1-based column for the caret pointer.
        width: Characters to underline starting at ``column``.
    """
    all_lines = source.split("\n")
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column, width=width)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateError(Exception):
    """Base exception for all formatr template errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short, human-readable summary.

        Prefixes the message with the error code when it is not already
        part of it.
        """
        header = str(self)
        if self.code and self.code.value not in header:
            header = terminal.format_error_header(self.code.value, header)
        return header


class TemplateSyntaxError(TemplateError):
    """Parse-time syntax error in template source.

    ``pos`` is the 0-based character offset where scanning failed. When the
    source is available the message carries a snippet with a caret under
    the offending character.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        pos: int | None = None,
        source: str | None = None,
        name: str | None = None,
    ):
        self.message = message
        self.pos = pos
        self.source = source
        self.name = name
        self.lineno, self.col_offset = self._locate()
        super().__init__(self._format_message())

    def _locate(self) -> tuple[int | None, int | None]:
        if self.pos is None or self.source is None:
            return None, None
        from formatr.position import LineIndex

        position = LineIndex(self.source).position(self.pos)
        return position.line, position.column - 1

    def _format_message(self) -> str:
        location = self.name or "<template>"
        if self.lineno is not None:
            location += f":{self.lineno}:{self.col_offset + 1}"
        msg = f"{self.message}\n  --> {terminal.location(location)}"
        if self.source is not None and self.lineno is not None:
            snippet = build_source_snippet(
                self.source, self.lineno, context_lines=0, column=self.col_offset + 1
            )
            msg += "\n" + snippet.format()
        return msg


class TemplateConfigError(TemplateError, ValueError):
    """Invalid compile or analysis option."""

    code: ErrorCode | None = ErrorCode.INVALID_OPTION


class TemplateRuntimeError(TemplateError):
    """Render-time error.

    Attributes:
        message: Error description
        key: Dotted path of the placeholder being rendered, if any
        suggestion: Actionable fix suggestion
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.key = key
        self.suggestion = suggestion
        super().__init__(message)

    def format_compact(self) -> str:
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        if self.key is not None:
            parts.append(f"  Placeholder: {{{self.key}}}")
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)


class MissingKeyError(TemplateRuntimeError):
    """A placeholder path resolved to nothing under the "error" policy.

    Raised when ``on_missing="error"`` or ``strict_keys=True`` and a path
    segment is absent or ``None``.

    Example:
        >>> template("{user.name}", on_missing="error")({})
        MissingKeyError: Missing key "user.name"

    """

    code: ErrorCode | None = ErrorCode.MISSING_KEY

    def __init__(self, key: str, path: tuple[str, ...] | None = None):
        self.path = path if path is not None else tuple(key.split("."))
        super().__init__(
            f'Missing key "{key}"',
            key=key,
            suggestion='Provide the value, or use on_missing="keep" or a callback',
        )


class FilterExecutionError(TemplateRuntimeError):
    """A filter body raised while rendering.

    Preserves the failing filter's name, the value it received, its string
    arguments and the original exception (also chained as ``__cause__``).
    """

    code: ErrorCode | None = ErrorCode.FILTER_ERROR

    def __init__(
        self,
        filter_name: str,
        input_value: Any,
        filter_args: tuple[str, ...],
        original_error: BaseException,
        *,
        key: str | None = None,
    ):
        self.filter_name = filter_name
        self.input_value = input_value
        self.filter_args = filter_args
        self.original_error = original_error
        where = f' in placeholder "{{{key}}}"' if key is not None else ""
        super().__init__(
            f"Error in filter '{filter_name}'{where}: {original_error}",
            key=key,
        )


class AsyncFilterError(TemplateRuntimeError):
    """Async filter reached from the synchronous renderer."""

    code: ErrorCode | None = ErrorCode.ASYNC_FILTER

    def __init__(self, key: str):
        super().__init__(
            "Async filters detected in template. Use template_async() instead of "
            f'template(). Placeholder "{{{key}}}" contains async filters.',
            key=key,
            suggestion="Compile with template_async() and await the renderer",
        )


class UnknownFilterError(TemplateError):
    """A placeholder names a filter absent from the merged registry."""

    code: ErrorCode | None = ErrorCode.UNKNOWN_FILTER

    def __init__(self, name: str, suggestions: tuple[str, ...] = ()):
        self.name = name
        self.suggestions = suggestions
        super().__init__(f'Unknown filter "{name}"{did_you_mean(suggestions)}')


class UnknownTemplateError(TemplateError):
    """An include names a template that is not registered."""

    code: ErrorCode | None = ErrorCode.UNKNOWN_TEMPLATE

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Unknown template "{name}"')


class CircularIncludeError(TemplateError):
    """An include chain refers back to a template already being compiled."""

    code: ErrorCode | None = ErrorCode.CIRCULAR_INCLUDE

    def __init__(self, chain: tuple[str, ...]):
        self.chain = chain
        super().__init__(f"Circular include detected: {' → '.join(chain)}")
