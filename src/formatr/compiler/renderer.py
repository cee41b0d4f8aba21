"""Renderers: the callables returned by ``template()`` and ``template_async()``.

Both walk the compiled parts in order. The synchronous renderer resolves
placeholders one after another; the asynchronous renderer starts one
coroutine per placeholder and gathers them, then assembles the output in
document order. Filters within one placeholder always run in sequence.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

from formatr.compiler.parts import MISSING, Part, PlaceholderPart, TextPart, resolve_path
from formatr.environment.exceptions import (
    AsyncFilterError,
    FilterExecutionError,
    MissingKeyError,
)
from formatr.environment.options import MissingPolicy
from formatr.filters import to_display_string


class _BaseRenderer:
    __slots__ = ("_on_missing", "_raises", "_static", "parts", "source")

    def __init__(
        self,
        parts: tuple[Part, ...],
        *,
        on_missing: MissingPolicy = "keep",
        strict_keys: bool = False,
        source: str = "",
    ):
        self.parts = parts
        self.source = source
        self._on_missing = on_missing
        self._raises = strict_keys or on_missing == "error"
        self._static: str | None = None
        if not parts:
            self._static = ""
        elif len(parts) == 1 and isinstance(parts[0], TextPart):
            self._static = parts[0].value

    @property
    def is_static(self) -> bool:
        """True when the template has no placeholders (output is constant)."""
        return self._static is not None

    @property
    def placeholders(self) -> tuple[PlaceholderPart, ...]:
        return tuple(p for p in self.parts if isinstance(p, PlaceholderPart))

    def _missing(self, part: PlaceholderPart) -> str:
        if self._raises:
            raise MissingKeyError(part.key, part.path)
        if self._on_missing == "keep":
            return f"{{{part.key}}}"
        return to_display_string(self._on_missing(part.key))  # type: ignore[operator]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} parts={len(self.parts)} static={self.is_static}>"


class Renderer(_BaseRenderer):
    """Synchronous renderer: ``renderer(context) -> str``.

    Raises:
        AsyncFilterError: If any placeholder uses an async filter.
        MissingKeyError: On an unresolved path under the "error" policy.
        Exception: Whatever a filter raises, unchanged.
    """

    __slots__ = ("_async_key",)

    def __init__(self, parts: tuple[Part, ...], **kwargs: Any):
        super().__init__(parts, **kwargs)
        self._async_key: str | None = next(
            (p.key for p in parts if isinstance(p, PlaceholderPart) and p.has_async),
            None,
        )

    def __call__(self, context: Any = None) -> str:
        if self._static is not None:
            return self._static
        if self._async_key is not None:
            raise AsyncFilterError(self._async_key)

        buf: list[str] = []
        append = buf.append
        for part in self.parts:
            if type(part) is TextPart:
                append(part.value)
                continue
            value = resolve_path(context, part.path)
            if value is MISSING:
                append(self._missing(part))
                continue
            for f in part.filters:
                value = f.func(value, *f.args)
            append(to_display_string(value))
        return "".join(buf)

    render = __call__


class AsyncRenderer(_BaseRenderer):
    """Asynchronous renderer: ``await renderer(context) -> str``.

    Placeholders resolve concurrently; filter exceptions are wrapped in
    FilterExecutionError naming the filter and placeholder.
    """

    __slots__ = ()

    async def __call__(self, context: Any = None) -> str:
        if self._static is not None:
            return self._static
        tasks = [
            asyncio.ensure_future(self._render_placeholder(part, context))
            for part in self.parts
            if type(part) is PlaceholderPart
        ]
        try:
            resolved = iter(await asyncio.gather(*tasks))
        except BaseException:
            # First failure wins; stop the rest and collect their outcomes
            # so a second failure is not left unretrieved.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return "".join(
            part.value if type(part) is TextPart else next(resolved) for part in self.parts
        )

    render = __call__

    async def _render_placeholder(self, part: PlaceholderPart, context: Any) -> str:
        value = resolve_path(context, part.path)
        if value is MISSING:
            return self._missing(part)
        for f in part.filters:
            try:
                result = f.func(value, *f.args)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as err:
                raise FilterExecutionError(f.name, value, f.args, err, key=part.key) from err
            value = result
        return to_display_string(value)
