"""Parser error handling for formatr.

Provides ParseError, raised with the offset where scanning stopped.
"""

from __future__ import annotations

from formatr.environment.exceptions import TemplateSyntaxError


class ParseError(TemplateSyntaxError):
    """Malformed template syntax.

    ``pos`` is the 0-based character offset of the offending character;
    ``lineno``/``col_offset`` are derived from it for display.
    """

    def __init__(
        self,
        message: str,
        pos: int,
        source: str | None = None,
        name: str | None = None,
    ):
        super().__init__(message, pos=pos, source=source, name=name)
