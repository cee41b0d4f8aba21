"""Template scanner/parser.

Grammar::

    template    := ( text | escape | include | placeholder )*
    escape      := "{{" | "}}"
    include     := "{>" ws* path ws* "}"
    placeholder := "{" path filter* "}"
    path        := IDENT ( "." IDENT )*
    filter      := "|" IDENT ( ":" arg ( "," arg )* )?
    arg         := quoted | unquoted
    quoted      := ws* ( '"' ... '"' | "'" ... "'" ) ws*
    unquoted    := any run of characters up to "," "|" or "}" (trimmed)

Quoted arguments accept the escapes ``\\<quote>``, ``\\\\``, ``\\,`` and
``\\:``. Every node records the ``[start, end)`` span it was read from.
"""

from __future__ import annotations

import string

from formatr.nodes import FilterCall, Include, Node, Placeholder, Span, TemplateAST, Text
from formatr.parser.errors import ParseError

_ID_START = frozenset(string.ascii_letters + "_")
_ID_CONTINUE = _ID_START | frozenset(string.digits)

_QUOTES = frozenset("\"'")
_ARG_TERMINATORS = frozenset(",|}")
# Characters that may follow a backslash in addition to the active quote.
_ESCAPABLE = frozenset("\\,:")


class Parser:
    """Single-pass parser over one template source.

    A Parser is used once: ``Parser(source).parse()``. It keeps an explicit
    cursor (``_pos``) and the start of the pending text run.

    Example:
        >>> Parser("{count|plural:item,items}").parse().nodes[0].filters[0].args
        ('item', 'items')

    """

    __slots__ = ("_length", "_name", "_nodes", "_pos", "_source", "_text_start")

    def __init__(self, source: str, name: str | None = None):
        self._source = source
        self._length = len(source)
        self._name = name
        self._pos = 0
        self._text_start = 0
        self._nodes: list[Node] = []

    # ─────────────────────────────────────────────────────────────────────
    # Cursor helpers
    # ─────────────────────────────────────────────────────────────────────

    @property
    def _current(self) -> str:
        """Character under the cursor, or ``""`` at end of input."""
        if self._pos < self._length:
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        i = self._pos + offset
        if i < self._length:
            return self._source[i]
        return ""

    def _skip_whitespace(self) -> None:
        while self._pos < self._length and self._source[self._pos].isspace():
            self._pos += 1

    def _error(self, message: str, pos: int | None = None) -> ParseError:
        return ParseError(
            message,
            self._pos if pos is None else pos,
            source=self._source,
            name=self._name,
        )

    # ─────────────────────────────────────────────────────────────────────
    # Top level
    # ─────────────────────────────────────────────────────────────────────

    def parse(self) -> TemplateAST:
        """Parse the whole source.

        Raises:
            ParseError: On malformed placeholder, include or argument syntax.
        """
        source = self._source
        while self._pos < self._length:
            ch = source[self._pos]

            if ch == "{":
                self._flush_text()
                if self._peek() == "{":
                    self._emit_escape("{")
                elif self._peek() == ">":
                    self._nodes.append(self._parse_include())
                else:
                    self._nodes.append(self._parse_placeholder())
                self._text_start = self._pos
                continue

            if ch == "}" and self._peek() == "}":
                self._flush_text()
                self._emit_escape("}")
                self._text_start = self._pos
                continue

            self._pos += 1

        self._flush_text()
        return TemplateAST(nodes=tuple(self._nodes), source=source)

    def _flush_text(self) -> None:
        if self._pos > self._text_start:
            self._nodes.append(
                Text(
                    span=Span(self._text_start, self._pos),
                    value=self._source[self._text_start : self._pos],
                )
            )
        self._text_start = self._pos

    def _emit_escape(self, char: str) -> None:
        start = self._pos
        self._pos += 2
        self._nodes.append(Text(span=Span(start, self._pos), value=char))

    # ─────────────────────────────────────────────────────────────────────
    # Tags
    # ─────────────────────────────────────────────────────────────────────

    def _parse_include(self) -> Include:
        start = self._pos
        self._pos += 2  # "{>"
        self._skip_whitespace()
        if self._current == "}":
            raise self._error("Include requires a template name")
        name = ".".join(self._read_path())
        self._skip_whitespace()
        if self._current != "}":
            raise self._error(f"Expected '}}' to close include for \"{name}\"")
        self._pos += 1
        return Include(span=Span(start, self._pos), name=name)

    def _parse_placeholder(self) -> Placeholder:
        start = self._pos
        self._pos += 1  # "{"
        path = self._read_path()
        filters = self._read_filters()
        if self._current != "}":
            raise self._error(
                f"Expected '}}' to close placeholder for \"{'.'.join(path)}\""
            )
        self._pos += 1
        return Placeholder(span=Span(start, self._pos), path=path, filters=filters)

    def _read_identifier(self) -> str:
        if self._current not in _ID_START:
            raise self._error("Expected identifier")
        start = self._pos
        self._pos += 1
        source = self._source
        while self._pos < self._length and source[self._pos] in _ID_CONTINUE:
            self._pos += 1
        return source[start : self._pos]

    def _read_path(self) -> tuple[str, ...]:
        segments = [self._read_identifier()]
        while self._current == ".":
            self._pos += 1
            segments.append(self._read_identifier())
        return tuple(segments)

    # ─────────────────────────────────────────────────────────────────────
    # Filters and arguments
    # ─────────────────────────────────────────────────────────────────────

    def _read_filters(self) -> tuple[FilterCall, ...]:
        filters: list[FilterCall] = []
        while self._current == "|":
            start = self._pos
            self._pos += 1
            name = self._read_identifier()
            args: tuple[str, ...] = ()
            if self._current == ":":
                self._pos += 1
                args = self._read_args()
            filters.append(FilterCall(span=Span(start, self._pos), name=name, args=args))
        return tuple(filters)

    def _read_args(self) -> tuple[str, ...]:
        args = [self._read_arg()]
        while self._current == ",":
            self._pos += 1
            args.append(self._read_arg())
        return tuple(args)

    def _read_arg(self) -> str:
        start = self._pos
        self._skip_whitespace()
        if self._current in _QUOTES:
            value = self._read_quoted()
            self._skip_whitespace()
            if self._current and self._current not in _ARG_TERMINATORS:
                raise self._error("Expected ',', '|' or '}' after quoted argument")
            return value

        self._pos = start
        source = self._source
        while self._pos < self._length and source[self._pos] not in _ARG_TERMINATORS:
            self._pos += 1
        return source[start : self._pos].strip()

    def _read_quoted(self) -> str:
        source = self._source
        quote = source[self._pos]
        opening = self._pos
        self._pos += 1
        chars: list[str] = []
        while self._pos < self._length:
            ch = source[self._pos]
            if ch == "\\":
                if self._pos + 1 >= self._length:
                    raise self._error("Unexpected end of input in escape sequence")
                escaped = source[self._pos + 1]
                if escaped != quote and escaped not in _ESCAPABLE:
                    raise self._error(f"Invalid escape sequence: \\{escaped}")
                chars.append(escaped)
                self._pos += 2
                continue
            if ch == quote:
                self._pos += 1
                return "".join(chars)
            chars.append(ch)
            self._pos += 1
        raise self._error("Unterminated string", opening)
