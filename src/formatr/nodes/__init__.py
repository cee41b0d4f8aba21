"""formatr AST nodes.

Immutable, slotted dataclasses. Every node carries a ``span`` with the
``[start, end)`` character offsets it was parsed from.

Node Types:
    Text         literal text (including unescaped ``{{``/``}}``)
    Placeholder  ``{path|filter:args}``
    Include      ``{> name}``
    FilterCall   one link of a placeholder's filter chain
"""

from formatr.nodes.base import Node, Span
from formatr.nodes.template import FilterCall, Include, Placeholder, TemplateAST, Text

__all__ = [
    "FilterCall",
    "Include",
    "Node",
    "Placeholder",
    "Span",
    "TemplateAST",
    "Text",
]
