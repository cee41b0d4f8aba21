"""Base node class for the formatr AST."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` character range in the template source."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, source: str) -> str:
        """Return the source text this span covers."""
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track the source span they were parsed from so diagnostics
    can underline the exact characters. Nodes are immutable.

    """

    span: Span
