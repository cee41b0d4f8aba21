"""Module-level convenience API over a shared default Environment.

The default Environment is created on first use. Hosts that need
isolated caches or template sets should build their own Environment.
"""

from __future__ import annotations

import threading
from typing import Any

from formatr.analysis import AnalysisReport
from formatr.compiler import AsyncRenderer, Renderer
from formatr.environment.core import Environment

_default: Environment | None = None
_default_lock = threading.Lock()


def get_default_environment() -> Environment:
    """Return the process-wide Environment, creating it on first call."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Environment()
    return _default


def template(source: str, **options: Any) -> Renderer:
    """Compile ``source`` into a cached synchronous renderer.

    Example:
        >>> template("Hello {name|upper}")({"name": "lara"})
        'Hello LARA'
    """
    return get_default_environment().template(source, **options)


def template_async(source: str, **options: Any) -> AsyncRenderer:
    """Compile ``source`` into a cached asynchronous renderer."""
    return get_default_environment().template_async(source, **options)


def analyze(source: str, *, context: Any = None, **options: Any) -> AnalysisReport:
    """Static diagnostics for ``source``; never raises for template problems."""
    return get_default_environment().analyze(source, context=context, **options)


def register_template(name: str, source: str) -> None:
    get_default_environment().register_template(name, source)


def unregister_template(name: str) -> bool:
    return get_default_environment().unregister_template(name)


def clear_templates() -> None:
    get_default_environment().clear_templates()


def clear_cache() -> None:
    get_default_environment().clear_cache()
