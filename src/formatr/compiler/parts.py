"""Compiled template parts and context path resolution.

A compiled template is a flat tuple of parts: literal text, or a
placeholder whose filter chain was resolved to function references at
compile time. Parts are immutable and shared between renders.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final

# Sentinel for "path did not resolve"; distinct from a stored None.
MISSING: Final = object()

# Leaf values that cannot be navigated into.
_PRIMITIVES = (str, bytes, int, float, bool)


@dataclass(frozen=True, slots=True)
class ResolvedFilter:
    """One filter of a chain, bound to its function and parsed arguments."""

    name: str
    func: Callable[..., Any]
    args: tuple[str, ...]
    is_async: bool


@dataclass(frozen=True, slots=True)
class TextPart:
    value: str


@dataclass(frozen=True, slots=True)
class PlaceholderPart:
    """A substitution site.

    ``key`` is the dotted path joined once at compile time; it is reused by
    the missing-key policy and error messages on every render.
    """

    path: tuple[str, ...]
    key: str
    filters: tuple[ResolvedFilter, ...] = ()
    has_async: bool = False


Part = TextPart | PlaceholderPart


def resolve_path(context: Any, path: tuple[str, ...]) -> Any:
    """Walk ``path`` through nested mappings/objects.

    Mappings are indexed, other objects use attribute access; attribute
    names starting with ``_`` are never read, so private and dunder
    members stay out of reach. Returns
    ``MISSING`` when a segment is absent, when a primitive or ``None`` is
    reached before the last segment, or when the final value is ``None``.

    Example:
        >>> resolve_path({"user": {"name": "Ada"}}, ("user", "name"))
        'Ada'
        >>> resolve_path({"user": None}, ("user", "name")) is MISSING
        True
    """
    current = context
    for segment in path:
        if current is None or isinstance(current, _PRIMITIVES):
            return MISSING
        if isinstance(current, Mapping):
            current = current.get(segment, MISSING)
        elif segment.startswith("_"):
            return MISSING
        else:
            current = getattr(current, segment, MISSING)
        if current is MISSING:
            return MISSING
    return MISSING if current is None else current


def merge_text(parts: list[Part]) -> tuple[Part, ...]:
    """Merge runs of adjacent TextParts and drop empty ones."""
    merged: list[Part] = []
    pending: list[str] = []
    for part in parts:
        if isinstance(part, TextPart):
            pending.append(part.value)
            continue
        if pending:
            text = "".join(pending)
            if text:
                merged.append(TextPart(text))
            pending.clear()
        merged.append(part)
    if pending:
        text = "".join(pending)
        if text:
            merged.append(TextPart(text))
    return tuple(merged)
