"""
jatom Lexer Package

Implements the lexical scanner for the jatom expression language.

Key Features:
- Unicode XID identifiers
- Decimal/exponent numeric literals
- Three string literal forms (raw, triple-quoted, escaped)
- Longest-match operator recognition
- Source location and span tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation, SourceSpan
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError, LiteralEscapeError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "SourceSpan",
    "Diagnostic",
    "LexerError",
    "LiteralEscapeError",
    "tokenize_string",
    "tokenize_file",
]
