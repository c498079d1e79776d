"""
Literal decoding for the jatom parser.

Turns the lexeme of a NUMBER or string token into its value. The lexer
only finds where a literal ends; escape processing and the triple-quote
trimming rule live here.
"""

import string
from typing import Callable, Dict

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import create_invalid_escape_error

SIMPLE_ESCAPES = {
    '\\': '\\',
    '"': '"',
    'n': '\n',
    'r': '\r',
    'b': '\b',
    't': '\t',
    'e': '\x1b',
}

# Escape letter -> number of hex digits that must follow
HEX_ESCAPE_WIDTHS = {
    'x': 2,
    'u': 4,
    'U': 8,
}

MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


def decode_number(lexeme: str) -> float:
    """Convert a NUMBER lexeme to a 64-bit float.

    The lexer's pattern only admits valid float syntax, so a failure here
    is a bug rather than a user error.
    """
    try:
        return float(lexeme)
    except ValueError as exc:
        raise AssertionError(f"numeric lexeme {lexeme!r} failed float conversion") from exc


def decode_raw_string(lexeme: str) -> str:
    """'...' : contents verbatim."""
    return lexeme[1:-1]


def decode_triple_string(lexeme: str) -> str:
    """'''...''' : contents verbatim minus one leading line terminator."""
    body = lexeme[3:-3]
    if body.startswith('\r\n'):
        return body[2:]
    if body.startswith('\n'):
        return body[1:]
    return body


def decode_escaped_string(lexeme: str, location: SourceLocation) -> str:
    """
    "..." : contents with backslash escapes resolved.

    Args:
        lexeme: Full literal text including both quotes
        location: Source location of the opening quote

    Raises:
        LiteralEscapeError: For an unknown escape, missing hex digits, or a
            code point that is not a Unicode scalar value
    """
    body = lexeme[1:-1]
    if '\\' not in body:
        return body

    def fail(start: int, end: int, reason: str):
        # +1 skips the opening quote
        escape_location = location.advanced(lexeme[:start + 1])
        return create_invalid_escape_error(body[start:end], escape_location, reason)

    parts = []
    i = 0
    while i < len(body):
        backslash = body.find('\\', i)
        if backslash < 0:
            parts.append(body[i:])
            break
        parts.append(body[i:backslash])

        escape = body[backslash + 1:backslash + 2]
        if escape in SIMPLE_ESCAPES:
            parts.append(SIMPLE_ESCAPES[escape])
            i = backslash + 2
            continue

        width = HEX_ESCAPE_WIDTHS.get(escape)
        if width is None:
            raise fail(backslash, backslash + 2, f"Unknown escape character {escape!r}.")

        digits_start = backslash + 2
        digits = body[digits_start:digits_start + width]
        if len(digits) != width or not all(c in string.hexdigits for c in digits):
            raise fail(backslash, digits_start + len(digits),
                       f"'\\{escape}' must be followed by exactly {width} hex digits.")

        code_point = int(digits, 16)
        if code_point > MAX_CODE_POINT or code_point in SURROGATES:
            raise fail(backslash, digits_start + width,
                       f"U+{code_point:X} is not a valid Unicode scalar value.")

        parts.append(chr(code_point))
        i = digits_start + width

    return ''.join(parts)


_STRING_DECODERS: Dict[TokenType, Callable[[Token], str]] = {
    TokenType.RAW_STRING: lambda token: decode_raw_string(token.lexeme),
    TokenType.TRIPLE_STRING: lambda token: decode_triple_string(token.lexeme),
    TokenType.ESCAPED_STRING: lambda token: decode_escaped_string(token.lexeme, token.location),
}


def decode_string(token: Token) -> str:
    """Decode any of the string token forms."""
    return _STRING_DECODERS[token.type](token)
