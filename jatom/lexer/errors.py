"""
Error handling for the jatom lexer.

Provides error reporting with source location and span information,
correction suggestions, and IDE-friendly diagnostics. The lexer stops at
the first error; there is no recovery.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation, SourceSpan


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    Contains detailed diagnostic information for error reporting and the
    span of the offending text. Span offsets count code points; use
    `span.byte_range(source)` for UTF-8 byte offsets.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
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
        self.span = span or SourceSpan(location, location)

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class LiteralEscapeError(LexerError):
    """Malformed or out-of-range escape sequence in a double-quoted string."""


class ErrorRecovery:
    """Correction hints for lexical errors."""

    @staticmethod
    def suggest_operator_corrections(char: str) -> List[str]:
        """Suggest operators that start with an unrecognized character."""
        from .tokens import OPERATORS

        return sorted(op for op in OPERATORS if op.startswith(char) and op != char)[:3]


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
    "L005": "Unexpected character in identifier",
    "L006": "Invalid escape sequence",
}


# Helper functions for creating common errors
def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    suggestions = ErrorRecovery.suggest_operator_corrections(char)

    if suggestions:
        help_text = f"Did you mean one of these operators: {', '.join(suggestions)}?"
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in jatom source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions,
        span=SourceSpan(location, location.advanced(char))
    )


def create_unterminated_string_error(quote_type: str, location: SourceLocation,
                                     end: SourceLocation) -> LexerError:
    """Create an error for an unterminated string literal."""
    return LexerError(
        message="Unterminated string literal",
        location=location,
        code="L002",
        help_text=f"String literals must be closed with a matching {quote_type} quote.",
        suggestions=[f"Add a closing {quote_type}"],
        span=SourceSpan(location, end)
    )


def create_lone_underscore_error(location: SourceLocation) -> LexerError:
    """Create an error for a `_` that does not start an identifier."""
    return LexerError(
        message="'_' is not a valid identifier",
        location=location,
        code="L005",
        help_text="An identifier starting with '_' needs at least one more character.",
        span=SourceSpan(location, location.advanced('_'))
    )


def create_invalid_escape_error(sequence: str, location: SourceLocation, reason: str) -> LiteralEscapeError:
    """Create an error for a malformed escape sequence."""
    return LiteralEscapeError(
        message=f"Invalid escape sequence: '{sequence}'",
        location=location,
        code="L006",
        help_text=reason,
        suggestions=["Use one of \\\\ \\n \\r \\b \\t \\e \\\" \\xHH \\uHHHH \\UHHHHHHHH"],
        span=SourceSpan(location, location.advanced(sequence))
    )
