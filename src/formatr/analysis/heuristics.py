"""Value-shape heuristics for the ``suspicious-filter`` warning.

A filter expects a shape (number or string); a placeholder's shape is
guessed from keywords in its last path segment. Only a confident guess
that disagrees with the filter produces a warning.
"""

from __future__ import annotations

from typing import Final, Literal

Shape = Literal["number", "string"]

FILTER_SHAPES: Final[dict[str, Shape]] = {
    "number": "number",
    "percent": "number",
    "currency": "number",
    "plural": "number",
    "upper": "string",
    "lower": "string",
    "trim": "string",
    "slice": "string",
    "pad": "string",
    "truncate": "string",
    "replace": "string",
}

# Checked in order, number keywords first. Matching is by substring.
NUMBER_KEYWORDS: Final = (
    "count",
    "quantity",
    "amount",
    "total",
    "sum",
    "price",
    "cost",
    "balance",
    "qty",
    "score",
)
STRING_KEYWORDS: Final = (
    "name",
    "title",
    "id",
    "description",
    "label",
    "text",
    "message",
    "email",
    "comment",
    "address",
)


def infer_shape(path: tuple[str, ...]) -> Shape | None:
    """Guess the value shape of a placeholder, or ``None`` when unsure.

    Example:
        >>> infer_shape(("user", "username"))
        'string'
        >>> infer_shape(("cart", "itemCount"))
        'number'
        >>> infer_shape(("xyz",)) is None
        True
    """
    if not path:
        return None
    segment = path[-1].lower()
    if any(word in segment for word in NUMBER_KEYWORDS):
        return "number"
    if any(word in segment for word in STRING_KEYWORDS):
        return "string"
    return None


def check_shape(filter_name: str, path: tuple[str, ...], key: str) -> tuple[str, dict[str, object]] | None:
    """Return ``(message, data)`` when the filter and placeholder shapes disagree."""
    expected = FILTER_SHAPES.get(filter_name)
    if expected is None:
        return None
    actual = infer_shape(path)
    if actual is None or actual == expected:
        return None
    return (
        f'Filter "{filter_name}" expects a {expected}, but placeholder "{key}" looks like a {actual}',
        {"filter": filter_name, "placeholder": key, "expectedType": expected},
    )
