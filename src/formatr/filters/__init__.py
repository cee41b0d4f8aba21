"""Built-in filters for formatr.

Text Filters (locale-independent):
    upper, lower, trim, plural, slice, pad, truncate, replace

Locale Filters (Babel-backed, bound per locale):
    number, percent, currency, date

Filters are plain callables ``(value, *args: str) -> value``; a coroutine
function is an async filter and requires ``template_async()``.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from formatr.filters.coerce import parse_int, to_display_string, to_number
from formatr.filters.locale import DEFAULT_LOCALE, make_locale_filters, resolve_locale
from formatr.filters.text import TEXT_FILTERS

Filter = Callable[..., Any]
AsyncFilter = Callable[..., Awaitable[Any]]

__all__ = [
    "DEFAULT_LOCALE",
    "TEXT_FILTERS",
    "AsyncFilter",
    "Filter",
    "make_locale_filters",
    "parse_int",
    "resolve_locale",
    "to_display_string",
    "to_number",
]
