"""Locale-aware number, percent, currency and date filters.

Backed by Babel's CLDR data. ``make_locale_filters(locale)`` returns the
four filters bound to one locale; the result is cached per locale
identifier because building a ``babel.Locale`` parses CLDR files.

Example:
    >>> filters = make_locale_filters("de")
    >>> filters["currency"](12.5, "EUR")
    '12,50\\xa0€'

"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import date, datetime, timezone
from functools import lru_cache
from typing import Any

from babel import Locale, UnknownLocaleError
from babel.dates import format_date
from babel.numbers import (
    UnknownCurrencyError,
    format_currency,
    format_decimal,
    format_percent,
)

from formatr.filters.coerce import to_display_string, to_number

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

_DATE_STYLES = frozenset({"short", "medium", "long", "full"})
_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")
_CURRENCY_LETTERS = re.compile(r"[A-Z]{3,}")
_INTEGER_DIGITS = re.compile(r"0+(?:\.[0#]*)?")


@lru_cache(maxsize=64)
def resolve_locale(identifier: str | None) -> Locale:
    """Parse a locale identifier (``"de"``, ``"en-US"``, ``"pt_BR"``).

    Unknown or malformed identifiers fall back to ``en_US`` with a warning.
    """
    if not identifier:
        return Locale.parse(DEFAULT_LOCALE)
    try:
        return Locale.parse(identifier.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as err:
        logger.warning("Unknown locale %r (%s); falling back to %s", identifier, err, DEFAULT_LOCALE)
        return Locale.parse(DEFAULT_LOCALE)


def _with_fraction(pattern: str, min_digits: int, max_digits: int) -> str:
    """Rewrite the fraction part of a CLDR number pattern."""
    max_digits = max(min_digits, max_digits)
    fraction = ""
    if max_digits > 0:
        fraction = "." + "0" * min_digits + "#" * (max_digits - min_digits)
    return _INTEGER_DIGITS.sub(lambda m: m.group(0).split(".")[0] + fraction, pattern)


def _digits(text: str | None) -> int | None:
    if text is None or text.strip() == "":
        return None
    n = to_number(text)
    if n is None or n < 0:
        return None
    return int(n)


def _to_date(value: Any) -> date | None:
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


@lru_cache(maxsize=64)
def _build_locale_filters(identifier: str | None) -> tuple[tuple[str, Callable[..., Any]], ...]:
    loc = resolve_locale(identifier)
    decimal_pattern = loc.decimal_formats[None].pattern
    percent_pattern = loc.percent_formats[None].pattern
    currency_pattern = loc.currency_formats["standard"].pattern

    def number(value: Any, range_or_min: str | None = None, max_frac: str | None = None) -> str:
        """Group digits; ``number:2``, ``number:1,3`` or ``number:2-4`` fix fraction digits."""
        n = to_number(value)
        if n is None:
            return to_display_string(value)
        if range_or_min is None:
            return format_decimal(n, locale=loc)
        if "-" in range_or_min:
            low, _, high = range_or_min.partition("-")
            min_digits, max_digits = _digits(low), _digits(high)
        else:
            min_digits = _digits(range_or_min)
            max_digits = _digits(max_frac) if max_frac is not None else min_digits
        if min_digits is None or max_digits is None:
            return format_decimal(n, locale=loc)
        return format_decimal(
            n, format=_with_fraction(decimal_pattern, min_digits, max_digits), locale=loc
        )

    def percent(value: Any, frac: str | None = None) -> str:
        n = to_number(value)
        if n is None:
            return to_display_string(value)
        digits = _digits(frac) or 0
        return format_percent(n, format=_with_fraction(percent_pattern, digits, digits), locale=loc)

    def currency(value: Any, code: str | None = None, frac: str | None = None) -> str:
        """Format as currency; accepts ``currency:EUR``, ``currency:EUR,2`` or ``"EUR:2"``."""
        n = to_number(value)
        if n is None:
            return to_display_string(value)
        if not code:
            raise ValueError("currency filter requires code, e.g., currency:EUR")

        currency_code = code.strip()
        fraction = frac
        if ":" in currency_code:
            currency_code, _, embedded = currency_code.partition(":")
            currency_code = currency_code.strip()
            if fraction is None or fraction == "":
                fraction = embedded
        currency_code = currency_code.upper()

        if not _CURRENCY_CODE.match(currency_code):
            letters = _CURRENCY_LETTERS.search(currency_code)
            if letters is None:
                raise ValueError(f"currency filter received invalid currency code: {code}")
            currency_code = letters.group(0)[:3]

        digits = _digits(fraction)
        try:
            if digits is None:
                return format_currency(n, currency_code, locale=loc)
            return format_currency(
                n,
                currency_code,
                format=_with_fraction(currency_pattern, digits, digits),
                locale=loc,
                currency_digits=False,
            )
        except (UnknownCurrencyError, ValueError, LookupError):
            return to_display_string(value)

    def date_(value: Any, style: str | None = None) -> str:
        """Format a date, epoch-milliseconds or ISO string as short/medium/long/full."""
        d = _to_date(value)
        if d is None:
            return to_display_string(value)
        fmt = style if style in _DATE_STYLES else "medium"
        return format_date(d, format=fmt, locale=loc)

    return (
        ("number", number),
        ("percent", percent),
        ("currency", currency),
        ("date", date_),
    )


def make_locale_filters(locale: str | None = None) -> dict[str, Callable[..., Any]]:
    """Return ``number``, ``percent``, ``currency`` and ``date`` bound to ``locale``."""
    return dict(_build_locale_filters(locale))
