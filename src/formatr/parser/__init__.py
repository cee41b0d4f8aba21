"""formatr parser.

Turns template source into a positioned ``TemplateAST`` in one left-to-right
scan. There is no separate token stream: the grammar is small enough that
the scanner builds nodes directly.

Example:
    >>> from formatr.parser import parse
    >>> ast = parse("Hi {user.name|upper}!")
    >>> [type(n).__name__ for n in ast]
    ['Text', 'Placeholder', 'Text']

"""

from formatr.nodes import TemplateAST
from formatr.parser.core import Parser
from formatr.parser.errors import ParseError


def parse(source: str, name: str | None = None) -> TemplateAST:
    """Parse template source into an AST.

    Raises:
        ParseError: On malformed syntax.
    """
    return Parser(source, name=name).parse()


__all__ = ["ParseError", "Parser", "parse"]
