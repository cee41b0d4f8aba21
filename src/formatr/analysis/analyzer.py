"""Template analyzer - static checks without rendering.

Runs the parser and reports every problem it can find as a Diagnostic
instead of raising:

- ``parse-error``: the template does not parse (analysis stops here)
- ``unknown-filter``: a filter name is not registered, with suggestions
- ``bad-args``: a built-in filter gets the wrong number of arguments
- ``suspicious-filter``: the filter's expected value shape disagrees with
  the placeholder name (warning)
- ``missing-key``: with a context and a raising missing-key policy, a
  placeholder path does not resolve
- ``unknown-template``: an include names an unregistered template
"""

from __future__ import annotations

import logging
from typing import Any

from formatr.analysis.arity import check_arity
from formatr.analysis.diagnostics import AnalysisReport, Diagnostic, DiagnosticCode, Severity
from formatr.analysis.heuristics import check_shape
from formatr.compiler.parts import MISSING, resolve_path
from formatr.environment.options import CompileOptions
from formatr.environment.registry import FilterRegistry, TemplateRegistry
from formatr.nodes import Include, Placeholder, Span
from formatr.parser import ParseError, parse
from formatr.position import LineIndex
from formatr.utils.suggestions import did_you_mean, suggest_names

logger = logging.getLogger(__name__)

# Distinguishes "no context given" from an explicit None context.
_UNSET: Any = object()


class Analyzer:
    """Static analyzer over one filter/template registry pair.

    Thread-safe: holds only read-only registries; each call builds its own
    line index and message list.

    Example:
            >>> analyzer = Analyzer(FilterRegistry(), TemplateRegistry(), CompileOptions())
            >>> report = analyzer.analyze("{name|upperr}")
            >>> report.messages[0].message
            'Unknown filter "upperr". Did you mean "upper"?'

    """

    def __init__(
        self,
        filters: FilterRegistry,
        templates: TemplateRegistry,
        options: CompileOptions,
    ) -> None:
        self._filters = filters
        self._templates = templates
        self._options = options

    def analyze(self, source: str, context: Any = _UNSET) -> AnalysisReport:
        """Analyze ``source`` and return every diagnostic found.

        Args:
            source: Template source
            context: Optional data; enables ``missing-key`` checks when the
                options raise on missing keys

        Returns:
            AnalysisReport; never raises for template problems
        """
        index = LineIndex(source)
        messages: list[Diagnostic] = []

        def report(
            code: DiagnosticCode,
            message: str,
            span: Span,
            data: dict[str, Any],
            severity: Severity = Severity.ERROR,
        ) -> None:
            messages.append(
                Diagnostic(
                    code=code,
                    message=message,
                    severity=severity,
                    range=index.range(span),
                    pos=span.start,
                    data=data,
                )
            )

        try:
            ast = parse(source)
        except ParseError as err:
            pos = err.pos or 0
            report(DiagnosticCode.PARSE_ERROR, err.message, Span(pos, pos + 1), {})
            logger.debug("Analysis stopped at parse error (offset %d)", pos)
            return AnalysisReport(tuple(messages))

        check_keys = context is not _UNSET and self._options.raises_on_missing

        for node in ast.nodes:
            if isinstance(node, Include):
                if node.name not in self._templates:
                    report(
                        DiagnosticCode.UNKNOWN_TEMPLATE,
                        f'Unknown template "{node.name}"',
                        node.span,
                        {"template": node.name},
                    )
                continue
            if not isinstance(node, Placeholder):
                continue

            for call in node.filters:
                if call.name not in self._filters:
                    suggestions = suggest_names(call.name, self._filters.names())
                    report(
                        DiagnosticCode.UNKNOWN_FILTER,
                        f'Unknown filter "{call.name}"{did_you_mean(suggestions)}',
                        call.span,
                        {"filter": call.name, "suggestions": suggestions},
                    )
                    continue
                if self._filters.is_custom(call.name):
                    continue
                bad_args = check_arity(call.name, len(call.args))
                if bad_args is not None:
                    report(DiagnosticCode.BAD_ARGS, *_unpack(bad_args, call.span))
                suspicious = check_shape(call.name, node.path, node.key)
                if suspicious is not None:
                    report(
                        DiagnosticCode.SUSPICIOUS_FILTER,
                        *_unpack(suspicious, call.span),
                        severity=Severity.WARNING,
                    )

            if check_keys and resolve_path(context, node.path) is MISSING:
                report(
                    DiagnosticCode.MISSING_KEY,
                    f'Missing key "{node.key}"',
                    node.span,
                    {"path": list(node.path)},
                )

        result = AnalysisReport(tuple(messages))
        logger.debug(
            "Analyzed template: %d nodes, %d errors, %d warnings",
            len(ast.nodes),
            len(result.errors),
            len(result.warnings),
        )
        return result


def _unpack(found: tuple[str, dict[str, Any]], span: Span) -> tuple[str, Span, dict[str, Any]]:
    message, data = found
    return message, span, data
