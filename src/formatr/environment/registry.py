"""Filter and template registries for the formatr environment.

``FilterRegistry`` is an immutable snapshot: built-in text filters, then
locale filters, then caller filters, later entries winning on name
collision. The compiler and analyzer read from a snapshot, so a
compiled template never observes later filter changes.

``TemplateRegistry`` maps names to reusable sub-template sources for
``{> name}`` includes. It is owned by the host (usually through an
``Environment``) and notifies subscribers on every mutation so that
compiled templates with baked-in includes can be invalidated.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Mapping

from formatr.filters import TEXT_FILTERS, Filter, make_locale_filters


class FilterRegistry(Mapping[str, Filter]):
    """Merged, read-only ``name -> filter`` table.

    Supports:
        - registry['upper']
        - 'upper' in registry
        - registry.get('upper')
        - registry.names()

    Example:
            >>> registry = FilterRegistry(locale="de", filters={"shout": lambda v: f"{v}!"})
            >>> sorted(registry.names())[:3]
            ['currency', 'date', 'lower']

    """

    __slots__ = ("_custom", "_filters", "_locale")

    def __init__(
        self,
        locale: str | None = None,
        filters: Mapping[str, Filter] | None = None,
    ):
        merged: dict[str, Filter] = dict(TEXT_FILTERS)
        merged.update(make_locale_filters(locale))
        if filters:
            merged.update(filters)
        self._filters = merged
        self._custom = frozenset(filters or ())
        self._locale = locale

    @property
    def locale(self) -> str | None:
        return self._locale

    def __getitem__(self, name: str) -> Filter:
        return self._filters[name]

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def names(self) -> list[str]:
        """Return all registered filter names, in registration order."""
        return list(self._filters)

    def is_custom(self, name: str) -> bool:
        """True if ``name`` was supplied (or overridden) by the caller."""
        return name in self._custom


class TemplateRegistry:
    """Name → source map for reusable sub-templates.

    Thread-safe. Every mutation (``register``, ``unregister``, ``clear``)
    calls each subscribed listener with no arguments.

    Example:
            >>> registry = TemplateRegistry()
            >>> registry.register("greeting", "Hello {name|upper}!")
            >>> registry.get("greeting")
            'Hello {name|upper}!'

    """

    __slots__ = ("_listeners", "_lock", "_templates")

    def __init__(self, templates: Mapping[str, str] | None = None):
        self._templates: dict[str, str] = dict(templates or {})
        self._listeners: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Call ``listener()`` after every mutation."""
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[], None]) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener()

    def register(self, name: str, source: str) -> None:
        """Register (or replace) a template by name."""
        with self._lock:
            self._templates[name] = source
        self._notify()

    def unregister(self, name: str) -> bool:
        """Remove a template; returns False if it was not registered."""
        with self._lock:
            removed = self._templates.pop(name, None) is not None
        if removed:
            self._notify()
        return removed

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()
        self._notify()

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._templates.get(name)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._templates

    def list(self) -> list[str]:
        """Return registered template names in registration order."""
        with self._lock:
            return list(self._templates)

    def __contains__(self, name: object) -> bool:
        return self.has(name)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)
