"""
Error handling for the jatom parser.

Provides syntax error reporting with the offending token, its span, the
set of tokens the grammar would have accepted, and IDE-friendly
diagnostics. The parser stops at the first error.
"""

from typing import Iterable, List, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation, SourceSpan, describe
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    Locations and `span` count code points into the source string; use
    `span.byte_range(source)` for UTF-8 byte offsets.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        expected: Optional[List[str]] = None,
        span: Optional[SourceSpan] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token
        self.expected = expected or []
        if span is None:
            span = token.span if token is not None else SourceSpan(location, location)
        self.span = span

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """Hints attached to syntax errors."""

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.RIGHT_BRACKET: ["Add a closing bracket ']'"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.IDENTIFIER: ["Add a name"],
        }
        return list(token_suggestions.get(expected, []))


# Tokens that can begin an expression
EXPRESSION_START = frozenset({
    TokenType.IDENTIFIER,
    TokenType.NUMBER,
    TokenType.RAW_STRING,
    TokenType.TRIPLE_STRING,
    TokenType.ESCAPED_STRING,
    TokenType.LEFT_PAREN,
    TokenType.LEFT_BRACKET,
    TokenType.LEFT_BRACE,
    TokenType.MINUS,
    TokenType.LOGICAL_NOT,
    TokenType.IF,
})


def expected_names(token_types: Iterable[TokenType]) -> List[str]:
    """Sorted, de-duplicated diagnostic names for a set of token types."""
    return sorted({describe(token_type) for token_type in token_types})


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P009": "Invalid operator usage",
    "P010": "Unexpected end of input",
    "P011": "Nesting too deep",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: Iterable[TokenType], found: Token) -> ParseError:
    """Create an error for a token the grammar does not accept here."""
    expected = list(expected)
    if found.type == TokenType.EOF:
        return create_unexpected_eof_error(expected, found)

    names = expected_names(expected)
    expected_str = " or ".join(names)
    found_str = describe(found.type)
    suggestions = []
    for token_type in expected:
        suggestions.extend(SyntaxErrorRecovery.suggest_missing_token(token_type))

    return ParseError(
        message=f"Expected {expected_str}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=suggestions,
        expected=names
    )


def create_invalid_expression_error(reason: str, found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    if found.type == TokenType.EOF:
        return create_unexpected_eof_error(EXPRESSION_START, found)

    return ParseError(
        message=f"Invalid expression: {reason}",
        location=found.location,
        token=found,
        code="P005",
        help_text=reason,
        suggestions=["Check the expression syntax", "Ensure all operators have operands"],
        expected=expected_names(EXPRESSION_START)
    )


def create_invalid_operator_error(reason: str, found: Token, help_text: str) -> ParseError:
    """Create an error for a well-formed operator used where the grammar forbids it."""
    return ParseError(
        message=f"Invalid operator usage: {reason}",
        location=found.location,
        token=found,
        code="P009",
        help_text=help_text,
        suggestions=["Add parentheses to make the grouping explicit"]
    )


def create_unexpected_eof_error(expected: Iterable[TokenType], found: Token) -> ParseError:
    """Create an error for unexpected end of input."""
    names = expected_names(expected)
    expected_str = " or ".join(names)

    return ParseError(
        message=f"Unexpected end of input, expected {expected_str}",
        location=found.location,
        token=found,
        code="P010",
        help_text=f"The parser reached the end of the input while expecting {expected_str}.",
        suggestions=[f"Add the missing {expected_str}"],
        expected=names
    )


def create_nesting_too_deep_error(found: Token) -> ParseError:
    """Create an error for input nested beyond the interpreter stack."""
    return ParseError(
        message="Expression nested too deeply",
        location=found.location,
        token=found,
        code="P011",
        help_text="The parser ran out of stack while reading nested brackets, prefixes or if-chains.",
        suggestions=["Split the expression into smaller named parts"]
    )
