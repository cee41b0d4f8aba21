"""Static analysis for formatr templates.

Example:
    >>> from formatr import analyze
    >>> report = analyze("{count|plural:one}")
    >>> [m.code.value for m in report.messages]
    ['bad-args']

"""

from formatr.analysis.analyzer import Analyzer
from formatr.analysis.arity import ARITY_RULES, ArityRule, check_arity
from formatr.analysis.diagnostics import AnalysisReport, Diagnostic, DiagnosticCode, Severity
from formatr.analysis.heuristics import FILTER_SHAPES, check_shape, infer_shape

__all__ = [
    "ARITY_RULES",
    "FILTER_SHAPES",
    "AnalysisReport",
    "Analyzer",
    "ArityRule",
    "Diagnostic",
    "DiagnosticCode",
    "Severity",
    "check_arity",
    "check_shape",
    "infer_shape",
]
