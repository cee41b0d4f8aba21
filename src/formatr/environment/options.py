"""Compile options and cache-key derivation."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from formatr.environment.exceptions import TemplateConfigError
from formatr.filters import Filter

MissingPolicy = Literal["error", "keep"] | Callable[[str], Any]

DEFAULT_CACHE_SIZE = 200

_POLICIES = frozenset({"error", "keep"})


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Options that shape how a template compiles and renders.

    Attributes:
        locale: Locale for number/percent/currency/date filters (part of the cache key)
        on_missing: ``"keep"`` (default) re-emits ``{path}``, ``"error"`` raises
            MissingKeyError, a callable receives the dotted path and returns the text
        strict_keys: Raise on missing keys regardless of ``on_missing``
        filters: Caller filters, highest precedence; only their names enter the cache key
        cache_size: Capacity of the compiled-template cache (0 disables caching)
    """

    locale: str | None = None
    on_missing: MissingPolicy = "keep"
    strict_keys: bool = False
    filters: Mapping[str, Filter] | None = None
    cache_size: int = DEFAULT_CACHE_SIZE

    def validate(self) -> CompileOptions:
        """Return self, raising TemplateConfigError on invalid values."""
        if isinstance(self.on_missing, str):
            if self.on_missing not in _POLICIES:
                raise TemplateConfigError(
                    f'on_missing must be "error", "keep" or a callable, got {self.on_missing!r}'
                )
        elif not callable(self.on_missing):
            raise TemplateConfigError(
                f"on_missing must be a string policy or a callable, got {type(self.on_missing).__name__}"
            )
        if not isinstance(self.cache_size, int) or self.cache_size < 0:
            raise TemplateConfigError(f"cache_size must be an int >= 0, got {self.cache_size!r}")
        return self

    @property
    def raises_on_missing(self) -> bool:
        """True when a missing key must raise (``strict_keys`` wins over ``on_missing``)."""
        return self.strict_keys or self.on_missing == "error"

    def replace(self, **overrides: Any) -> CompileOptions:
        """Return a copy with ``overrides`` applied.

        Only fields passed as keywords change; an explicit ``None`` is a
        value (``locale=None`` resets to the default locale,
        ``filters=None`` drops caller filters).
        """
        if not overrides:
            return self
        return dataclasses.replace(self, **overrides).validate()

    def cache_key(self, source: str, mode: str = "sync") -> tuple[Hashable, ...]:
        """Identity of a compiled template.

        Only behavior-relevant options participate: filter implementations
        are assumed stable per name, and ``cache_size`` never does. A
        callable ``on_missing`` participates by identity.
        """
        return (
            mode,
            source,
            self.locale,
            self.on_missing,
            self.strict_keys,
            tuple(sorted(self.filters)) if self.filters else (),
        )
