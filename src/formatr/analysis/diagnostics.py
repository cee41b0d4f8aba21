"""Diagnostic model returned by ``analyze()``."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from formatr.environment import terminal
from formatr.environment.exceptions import build_source_snippet
from formatr.position import Range


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class DiagnosticCode(str, Enum):
    PARSE_ERROR = "parse-error"
    UNKNOWN_FILTER = "unknown-filter"
    BAD_ARGS = "bad-args"
    SUSPICIOUS_FILTER = "suspicious-filter"
    MISSING_KEY = "missing-key"
    UNKNOWN_TEMPLATE = "unknown-template"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One analysis finding.

    ``pos``/``line``/``column`` repeat the start of ``range`` as flat fields
    (``pos`` is the 0-based offset) for consumers that only need a point.
    """

    code: DiagnosticCode
    message: str
    severity: Severity
    range: Range
    pos: int
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def line(self) -> int:
        return self.range.start.line

    @property
    def column(self) -> int:
        return self.range.start.column

    def format(self, source: str) -> str:
        """Render the diagnostic with a colored source snippet.

        The underline spans the range when it stays on one line, otherwise
        it marks the start column only.
        """
        start, end = self.range.start, self.range.end
        width = max(end.column - start.column, 1) if start.line == end.line else 1
        warning = self.severity is not Severity.ERROR
        label = terminal.warning_line if warning else terminal.error_line
        header = label(f"{self.severity.value}[{self.code.value}]: {self.message}")
        snippet = build_source_snippet(source, start.line, context_lines=0, column=start.column, width=width)
        where = terminal.location(f"<template>:{start.line}:{start.column}")
        return f"{header}\n  --> {where}\n{snippet.format(warning=warning)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "range": {
                "start": {"line": self.range.start.line, "column": self.range.start.column},
                "end": {"line": self.range.end.line, "column": self.range.end.column},
            },
            "pos": self.pos,
            "line": self.line,
            "column": self.column,
            "data": dict(self.data),
        }


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """All diagnostics for one template, in source order per check."""

    messages: tuple[Diagnostic, ...] = ()

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(m for m in self.messages if m.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(m for m in self.messages if m.severity is Severity.WARNING)

    @property
    def has_errors(self) -> bool:
        return any(m.severity is Severity.ERROR for m in self.messages)

    def by_code(self, code: DiagnosticCode | str) -> tuple[Diagnostic, ...]:
        code = DiagnosticCode(code)
        return tuple(m for m in self.messages if m.code is code)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [m.to_dict() for m in self.messages]

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)
