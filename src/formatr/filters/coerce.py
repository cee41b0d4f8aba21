"""Value coercion shared by filters and renderers.

Rendered output follows JavaScript ``String()`` / ``Number()`` rules so
templates produce the same text regardless of which host filled them:
``True`` renders as ``true``, ``2.0`` as ``2``, lists join with commas and
generic records render as ``[object Object]``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def to_display_string(value: Any) -> str:
    """Coerce any value to its display string.

    Example:
        >>> to_display_string([1, None, "a"])
        '1,,a'
        >>> to_display_string({"a": 1})
        '[object Object]'
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_display_string(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _format_float(value: float) -> str:
    """Number-to-string with JavaScript layout.

    ``repr`` supplies the shortest round-trip digits; only their placement
    differs. Plain decimal is used while the decimal point falls within
    ``(-6, 21]`` digits of the first significant digit, exponent form
    (``1e-7``, ``1.5e+21``) otherwise.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0") or "0"
    k = len(digits)
    # value == 0.<digits> * 10**n
    n = len(digit_tuple) + exponent

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits
    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def to_number(value: Any) -> float | None:
    """Coerce a value to a finite float, or ``None`` if that is impossible.

    Mirrors ``Number()``: booleans are 0/1, blank strings are 0, numeric
    strings parse, everything else (and NaN/Infinity) is ``None``.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        n = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return None
        try:
            n = float(text)
        except ValueError:
            return None
    else:
        return None
    return n if math.isfinite(n) else None


def parse_int(text: str | None) -> int | None:
    """Parse a leading integer the way ``parseInt(text, 10)`` does.

    ``"12px"`` gives ``12``; text without a leading integer gives ``None``.
    """
    if text is None:
        return None
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None
