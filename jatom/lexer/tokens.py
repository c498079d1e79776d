"""
Token definitions for the jatom lexer.

This module defines all token types supported by jatom, including:
- Keywords (`if`, `else`)
- Operators and punctuation
- Literals (numbers and the three string forms)
- Identifiers (Unicode XID rules)

It also holds the source position types shared by the lexer, the
parser and the AST.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Tuple


class TokenType(Enum):
    """
    Enumeration of all token types in jatom.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input

    # ========================================================================
    # Literals
    # ========================================================================
    NUMBER = auto()                 # 42, 3.14, 1.2e3
    RAW_STRING = auto()             # 'verbatim'
    TRIPLE_STRING = auto()          # '''multi-line verbatim'''
    ESCAPED_STRING = auto()         # "with \n escapes"

    # ========================================================================
    # Identifiers and Keywords
    # ========================================================================
    IDENTIFIER = auto()             # name, _name, 名前
    IF = auto()                     # if
    ELSE = auto()                   # else

    # ========================================================================
    # Operators
    # ========================================================================
    LOGICAL_OR = auto()             # ||
    LOGICAL_AND = auto()            # &&
    LOGICAL_NOT = auto()            # !

    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    LESS_EQUAL = auto()             # <=
    GREATER_EQUAL = auto()          # >=

    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    MODULO = auto()                 # %
    FLOOR_DIVIDE = auto()           # //

    ASSIGN = auto()                 # =

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }

    SEMICOLON = auto()              # ;
    COMMA = auto()                  # ,
    DOT = auto()                    # .


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    `offset` counts code points from the start of the source; line and
    column are 1-based.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"

    def advanced(self, text: str) -> 'SourceLocation':
        """Return the location reached after reading `text` from here."""
        newlines = text.count('\n')
        if newlines:
            column = len(text) - text.rfind('\n')
        else:
            column = self.column + len(text)
        return SourceLocation(self.filename, self.line + newlines, column, self.offset + len(text))


@dataclass(frozen=True)
class SourceSpan:
    """A start-inclusive, end-exclusive region of source code."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"

    @property
    def offsets(self) -> Tuple[int, int]:
        return (self.start.offset, self.end.offset)

    def text(self, source: str) -> str:
        """Slice the spanned text out of `source`."""
        return source[self.start.offset:self.end.offset]

    def byte_range(self, source: str) -> Tuple[int, int]:
        """Convert the span to UTF-8 byte offsets into `source`."""
        start = len(source[:self.start.offset].encode('utf-8'))
        length = len(source[self.start.offset:self.end.offset].encode('utf-8'))
        return (start, start + length)


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the jatom language.

    Contains the token type, lexeme (raw text), semantic value and the
    source locations of its first character and of the position just past
    its last character.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Identifier name, otherwise None
    location: SourceLocation        # Start of the token
    end: SourceLocation             # Just past the end of the token

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def span(self) -> SourceSpan:
        return SourceSpan(self.location, self.end)

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_string(self) -> bool:
        return self.type in STRING_TYPES

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.lexeme in KEYWORDS and self.type == KEYWORDS[self.lexeme]

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


STRING_TYPES = frozenset({
    TokenType.RAW_STRING,
    TokenType.TRIPLE_STRING,
    TokenType.ESCAPED_STRING,
})

LITERAL_TYPES = STRING_TYPES | {TokenType.NUMBER}

# Reserved words, never identifiers
KEYWORDS = {
    "if": TokenType.IF,
    "else": TokenType.ELSE,
}

OPERATORS = {
    # Logical
    "||": TokenType.LOGICAL_OR,
    "&&": TokenType.LOGICAL_AND,
    "!": TokenType.LOGICAL_NOT,

    # Comparison
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,

    # Arithmetic
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
    "//": TokenType.FLOOR_DIVIDE,

    # Assignment
    "=": TokenType.ASSIGN,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
}

# Longest operator first, so `//` wins over `/` and `<=` over `<`
OPERATOR_LENGTHS = sorted({len(op) for op in OPERATORS}, reverse=True)

# Human readable names used in diagnostics
TOKEN_DESCRIPTIONS = {
    TokenType.EOF: "end of input",
    TokenType.NUMBER: "number",
    TokenType.RAW_STRING: "string",
    TokenType.TRIPLE_STRING: "string",
    TokenType.ESCAPED_STRING: "string",
    TokenType.IDENTIFIER: "identifier",
    **{token_type: f"'{text}'" for text, token_type in KEYWORDS.items()},
    **{token_type: f"'{text}'" for text, token_type in OPERATORS.items()},
}


def describe(token_type: TokenType) -> str:
    """Return the diagnostic name of a token type."""
    return TOKEN_DESCRIPTIONS.get(token_type, token_type.name)
