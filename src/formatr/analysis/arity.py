"""Argument-count rules for the built-in filters.

Each rule is the accepted ``[minimum, maximum]`` argument count plus the
usage text and example shown in the ``bad-args`` message. ``maximum`` is
``None`` for open-ended rules.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ArityRule:
    minimum: int
    maximum: int | None
    usage: str
    example: str

    def accepts(self, count: int) -> bool:
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    @property
    def expected(self) -> int | str:
        """``2`` for exact counts, ``"1-2"`` for ranges, ``"at least 1"`` when open."""
        if self.maximum is None:
            return f"at least {self.minimum}"
        if self.minimum == self.maximum:
            return self.minimum
        return f"{self.minimum}-{self.maximum}"

    def describe(self, name: str) -> str:
        if self.maximum is None:
            count = f"requires at least {_arguments(self.minimum)}"
        elif self.minimum == self.maximum == 0:
            count = "takes no arguments"
        elif self.minimum == self.maximum:
            count = f"requires exactly {_arguments(self.minimum)}"
        else:
            count = f"takes {self.minimum}-{self.maximum} arguments"
        detail = f": {self.usage}" if self.usage else ""
        return f'Filter "{name}" {count}{detail} (e.g. {self.example})'


def _arguments(n: int) -> str:
    return f"{n} argument" if n == 1 else f"{n} arguments"


ARITY_RULES: dict[str, ArityRule] = {
    "upper": ArityRule(0, 0, "", "{name|upper}"),
    "lower": ArityRule(0, 0, "", "{name|lower}"),
    "trim": ArityRule(0, 0, "", "{name|trim}"),
    "plural": ArityRule(2, 2, "singular, plural", "{count|plural:item,items}"),
    "replace": ArityRule(2, 2, "search, replacement", "{text|replace:-,_}"),
    "slice": ArityRule(1, 2, "start[, end]", "{text|slice:0,5}"),
    "truncate": ArityRule(1, 2, "length[, ellipsis]", "{text|truncate:20}"),
    "pad": ArityRule(1, 3, "length[, direction[, char]]", "{id|pad:6,left,0}"),
    "number": ArityRule(0, 2, "[min fraction digits[, max fraction digits]]", "{n|number:2}"),
    "percent": ArityRule(0, 1, "[fraction digits]", "{ratio|percent:1}"),
    "currency": ArityRule(1, None, "currency code", "{price|currency:USD}"),
    # A single style argument; its value is not validated here.
    "date": ArityRule(1, None, "style (short, medium, long or full)", "{when|date:short}"),
}


def check_arity(name: str, count: int) -> tuple[str, dict[str, object]] | None:
    """Return ``(message, data)`` when ``count`` arguments break ``name``'s rule.

    Names without a rule are never reported.

    Example:
        >>> check_arity("plural", 1)[1]
        {'filter': 'plural', 'expected': 2, 'got': 1}
        >>> check_arity("plural", 2) is None
        True
    """
    rule = ARITY_RULES.get(name)
    if rule is None or rule.accepts(count):
        return None
    message = rule.describe(name)
    if name == "date":
        message = f'Filter "date" requires 1 argument: {rule.usage} (e.g. {rule.example})'
    return (
        f"{message}, got {count}",
        {"filter": name, "expected": rule.expected, "got": count},
    )
