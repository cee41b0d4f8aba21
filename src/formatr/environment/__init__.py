"""formatr environment: options, registries, errors and the Environment.

``Environment`` is loaded lazily: the compiler and analyzer import the
error and registry modules from this package, and Environment in turn
imports them.
"""

from formatr.environment.exceptions import (
    AsyncFilterError,
    CircularIncludeError,
    ErrorCode,
    FilterExecutionError,
    MissingKeyError,
    TemplateConfigError,
    TemplateError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UnknownFilterError,
    UnknownTemplateError,
)
from formatr.environment.options import DEFAULT_CACHE_SIZE, CompileOptions, MissingPolicy
from formatr.environment.registry import FilterRegistry, TemplateRegistry

__all__ = [
    "DEFAULT_CACHE_SIZE",
    "AsyncFilterError",
    "CircularIncludeError",
    "CompileOptions",
    "Environment",
    "ErrorCode",
    "FilterExecutionError",
    "FilterRegistry",
    "MissingKeyError",
    "MissingPolicy",
    "TemplateConfigError",
    "TemplateError",
    "TemplateRegistry",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "UnknownFilterError",
    "UnknownTemplateError",
]


def __getattr__(name: str) -> object:
    if name == "Environment":
        from formatr.environment.core import Environment

        globals()["Environment"] = Environment
        return Environment
    raise AttributeError(f"module 'formatr.environment' has no attribute {name!r}")
