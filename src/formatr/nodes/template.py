"""Template content nodes: literal text, placeholders and includes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from formatr.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text between placeholders.

    An escape (``{{`` or ``}}``) yields a one-character Text whose span
    covers both source characters.
    """

    value: str


@dataclass(frozen=True, slots=True)
class FilterCall(Node):
    """One ``|name:arg,arg`` link of a filter chain.

    The span runs from the ``|`` to the end of the last argument.
    """

    name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Placeholder(Node):
    """Substitution site: {path.to.value|filter:args|...}"""

    path: tuple[str, ...]
    filters: tuple[FilterCall, ...] = ()

    @property
    def key(self) -> str:
        """Dotted display form of the path, e.g. ``user.name``."""
        return ".".join(self.path)


@dataclass(frozen=True, slots=True)
class Include(Node):
    """Reference to a registered template: {> layout.header}"""

    name: str


@dataclass(frozen=True, slots=True)
class TemplateAST:
    """Parsed template: nodes in source order plus the source they cover."""

    nodes: tuple[Node, ...]
    source: str = ""

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def placeholders(self) -> Iterator[Placeholder]:
        for node in self.nodes:
            if isinstance(node, Placeholder):
                yield node

    def includes(self) -> Iterator[Include]:
        for node in self.nodes:
            if isinstance(node, Include):
                yield node
