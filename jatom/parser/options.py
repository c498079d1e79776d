"""
Parse options for the jatom parser.
"""

from dataclasses import dataclass
from enum import Enum


class StartSymbol(Enum):
    """Grammar entry points."""
    EXPR = "expr"       # a single expression
    PIPE = "pipe"       # juxtaposed expressions
    BLOCK = "block"     # `;`-separated pipes without braces


@dataclass(frozen=True)
class ParseOptions:
    """
    Per-parse configuration.

    Attributes:
        filename: Name reported in diagnostics
        start: Grammar entry point
        intern_identifiers: Attach a Symbol from the session SymbolTable
            to every Identifier node
    """
    filename: str = "<string>"
    start: StartSymbol = StartSymbol.PIPE
    intern_identifiers: bool = True
