"""Offset → (line, column) mapping for diagnostics.

Only the analyzer and error formatting need line/column information, so
the parser works in raw character offsets and this module converts them
lazily.

Example:
    >>> index = LineIndex("Hello\\n{name|nope}")
    >>> index.position(7)
    Position(line=2, column=2)

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from formatr.nodes import Span


@dataclass(frozen=True, slots=True)
class Position:
    """A 1-based line/column pair."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Range:
    """A half-open span of positions (``end`` is exclusive)."""

    start: Position
    end: Position


def build_line_starts(source: str) -> list[int]:
    """Return the offset of the first character of every line.

    Always starts with ``0``; every ``\\n`` contributes the offset that
    follows it.
    """
    starts = [0]
    find = source.find
    i = find("\n")
    while i != -1:
        starts.append(i + 1)
        i = find("\n", i + 1)
    return starts


def offset_to_position(offset: int, line_starts: list[int]) -> Position:
    """Convert a character offset to a 1-based Position via binary search."""
    if not line_starts:
        return Position(1, 1)
    line = bisect_right(line_starts, offset) - 1
    if line < 0:
        line = 0
    return Position(line + 1, offset - line_starts[line] + 1)


class LineIndex:
    """Line-start index over one source string.

    Built once per analysis; every lookup afterwards is O(log lines).
    """

    __slots__ = ("_line_starts", "_length")

    def __init__(self, source: str):
        self._line_starts = build_line_starts(source)
        self._length = len(source)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position(self, offset: int) -> Position:
        offset = min(max(offset, 0), self._length)
        return offset_to_position(offset, self._line_starts)

    def range(self, span: Span) -> Range:
        return Range(self.position(span.start), self.position(span.end))
