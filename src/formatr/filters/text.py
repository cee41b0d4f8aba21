"""Built-in text filters.

Every filter receives the current value followed by its string arguments
exactly as written in the template (``{v|pad:10,left,0}`` calls
``pad(v, "10", "left", "0")``). Values are coerced with
``to_display_string`` before string operations, so ``upper(42)`` is
``"42"`` and ``upper([1, 2])`` is ``"1,2"``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from formatr.filters.coerce import parse_int, to_display_string, to_number


def upper(value: Any) -> str:
    return to_display_string(value).upper()


def lower(value: Any) -> str:
    return to_display_string(value).lower()


def trim(value: Any) -> str:
    return to_display_string(value).strip()


def plural(value: Any, singular: str | None = None, plural: str | None = None) -> str:
    """Choose the singular form when the count is exactly 1.

    Non-numeric input is returned as its display string.

    Example:
        >>> plural(1, "item", "items")
        'item'
        >>> plural(0, "item", "items")
        'items'

    Raises:
        ValueError: If either form is missing.
    """
    n = to_number(value)
    if n is None:
        return to_display_string(value)
    if singular is None or plural is None:
        raise ValueError("plural filter requires two args: singular, plural")
    return singular if n == 1 else plural


def slice_(value: Any, start: str | None = None, end: str | None = None) -> str:
    """Substring with slice semantics; negative indices count from the end."""
    text = to_display_string(value)
    start_idx = parse_int(start) if start is not None else 0
    if start_idx is None:
        start_idx = 0
    if end is None:
        return text[start_idx:]
    end_idx = parse_int(end)
    return text[start_idx : end_idx if end_idx is not None else 0]


def pad(
    value: Any,
    length: str | None = None,
    direction: str = "right",
    char: str = " ",
) -> str:
    """Pad to ``length`` on the left, right, or both sides.

    Only the first character of ``char`` is used. Strings already at or
    beyond the target length are returned unchanged.

    Example:
        >>> pad("42", "5", "left", "0")
        '00042'
        >>> pad("hello", "10", "both")
        '  hello   '
    """
    text = to_display_string(value)
    target = parse_int(length) if length is not None else 0
    if target is None or len(text) >= target:
        return text
    fill = char[:1] or " "
    size = target - len(text)
    if direction == "left":
        return fill * size + text
    if direction in ("both", "center"):
        left = size // 2
        return fill * left + text + fill * (size - left)
    return text + fill * size


def truncate(value: Any, length: str | None = None, ellipsis: str = "...") -> str:
    """Cut to ``length`` characters, ellipsis included.

    Example:
        >>> truncate("hello world", "10")
        'hello w...'
    """
    text = to_display_string(value)
    limit = parse_int(length) if length is not None else len(text)
    if limit is None or len(text) <= limit:
        return text
    return text[: max(0, limit - len(ellipsis))] + ellipsis


def replace(value: Any, old: str | None = None, new: str = "") -> str:
    """Replace every occurrence of ``old``; an empty ``old`` is a no-op."""
    text = to_display_string(value)
    if not old:
        return text
    return text.replace(old, new)


TEXT_FILTERS: dict[str, Callable[..., Any]] = {
    "upper": upper,
    "lower": lower,
    "trim": trim,
    "plural": plural,
    "slice": slice_,
    "pad": pad,
    "truncate": truncate,
    "replace": replace,
}
