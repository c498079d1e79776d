"""
jatom Front End

Scanner, parser and literal decoder for the jatom expression language.

Architecture:
    jatom/
    ├── lexer/           # Tokenization and lexical analysis
    └── parser/          # Syntax analysis, literal decoding, AST and printing

Typical use::

    import jatom
    tree = jatom.parse("x = 1 + 2; x.show", start=jatom.StartSymbol.BLOCK)

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, LexerError, LiteralEscapeError, tokenize_string as tokenize
from .parser import (
    Parser, ParseError, ParseOptions, StartSymbol, SymbolTable,
    parse_string as parse, parse_file, parse_with_symbols, to_source
)

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParseOptions",
    "StartSymbol",
    "SymbolTable",

    # Entry points
    "tokenize",
    "parse",
    "parse_file",
    "parse_with_symbols",
    "to_source",

    # Errors
    "LexerError",
    "LiteralEscapeError",
    "ParseError",

    # Version info
    "__version__",
    "__license__",
]
