"""Terminal color utilities for error and diagnostic output.

ANSI colors with TTY detection and NO_COLOR / FORCE_COLOR support.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
}

ColorName = Literal[
    "reset", "bold", "dim",
    "red", "green", "yellow", "cyan",
    "bright_red", "bright_green", "bright_yellow", "bright_blue",
]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    """Check if the terminal supports colors and the user allows them.

    Respects:
        - FORCE_COLOR environment variable (overrides NO_COLOR)
        - NO_COLOR environment variable (https://no-color.org/)
        - sys.stdout.isatty() for TTY detection
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def colorize(text: str, *colors: ColorName) -> str:
    """Apply ANSI color codes to text.

    Returns the text unchanged when colors are disabled.

    Example:
        >>> colorize("Error", "red", "bold")
        '\\033[31m\\033[1mError\\033[0m'  # if colors supported
    """
    if not _USE_COLORS or not colors:
        return text
    prefix = "".join(_COLORS.get(color, "") for color in colors)
    if not prefix:
        return text
    return f"{prefix}{text}{_COLORS['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI color codes from text."""
    return _ANSI_ESCAPE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    return colorize(text, "cyan")


def line_number(text: str) -> str:
    return colorize(text, "yellow")


def error_line(text: str) -> str:
    return colorize(text, "bright_red")


def warning_line(text: str) -> str:
    return colorize(text, "bright_yellow")


def hint(text: str) -> str:
    return colorize(text, "green")


def suggestion(text: str) -> str:
    """Color text as a 'Did you mean?' suggestion."""
    return colorize(text, "bright_green", "bold")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """Format an error header with an optional code prefix.

    Example:
        >>> format_error_header("F-RUN-001", 'Missing key "x"')
        '\\033[91m\\033[1mF-RUN-001\\033[0m: Missing key "x"'
    """
    if code:
        return f"{error_code(code)}: {message}"
    return message


def format_source_line(
    lineno: int,
    content: str,
    is_error: bool = False,
) -> str:
    """Format a numbered source line, highlighting the error line."""
    marker = ">" if is_error else " "
    num_colored = line_number(f"{marker}{lineno:>3}")
    content_colored = error_line(content) if is_error else dim_text(content)
    return f"{num_colored} | {content_colored}"


def format_underline(column: int, width: int = 1, *, warning: bool = False) -> str:
    """Format a caret underline starting at a 1-based column."""
    marks = "^" * max(width, 1)
    pointer = " " * (column - 1) + marks
    colored = warning_line(pointer) if warning else error_line(pointer)
    return f"{dim_text('     |')} {colored}"
