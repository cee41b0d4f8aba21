"""Did-you-mean suggestions for unknown names."""

from __future__ import annotations

from collections.abc import Iterable


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between ``a`` and ``b`` (insert, delete, substitute)."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def suggest_names(
    name: str,
    candidates: Iterable[str],
    *,
    max_suggestions: int = 3,
    max_distance: int = 2,
) -> list[str]:
    """Closest ``candidates`` to ``name``, nearest first, ties broken by name.

    Comparison is case-insensitive.

    Example:
        >>> suggest_names("upperr", ["upper", "lower", "trim"])
        ['upper']
        >>> suggest_names("numb", ["number", "upper"])
        ['number']
    """
    target = name.lower()
    scored = []
    for candidate in candidates:
        distance = levenshtein_distance(target, candidate.lower())
        if distance <= max_distance:
            scored.append((distance, candidate))
    scored.sort()
    return [candidate for _, candidate in scored[:max_suggestions]]


def did_you_mean(suggestions: Iterable[str]) -> str:
    """Message suffix for a suggestion list; empty when there are none."""
    quoted = [f'"{s}"' for s in suggestions]
    if not quoted:
        return ""
    if len(quoted) == 1:
        return f". Did you mean {quoted[0]}?"
    return f". Did you mean one of: {', '.join(quoted)}?"
