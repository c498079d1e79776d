"""
jatom Lexer - turns source text into a token list.

Whitespace and `#` line comments are skipped. The first unrecognized
input aborts with a LexerError; string literals are only delimited here,
their contents are decoded by the parser.
"""

import logging
import re
from typing import List

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, OPERATORS, OPERATOR_LENGTHS
)
from .errors import (
    create_invalid_character_error,
    create_unterminated_string_error, create_lone_underscore_error
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    jatom lexical analyzer.

    Converts source code text into a stream of tokens terminated by an
    EOF token.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.number_pattern = re.compile(r'[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?')
        self.comment_pattern = re.compile(r'#[^\n]*')
        self.whitespace_pattern = re.compile(r'\s+')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including EOF token

        Raises:
            LexerError: On the first input that matches no token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens.clear()

        while True:
            self._skip_whitespace_and_comments()
            if self.pos >= len(self.source):
                break
            self.tokens.append(self._next_token())

        eof_location = self._location()
        self.tokens.append(Token(TokenType.EOF, "", None, eof_location, eof_location))

        logger.debug("%s: scanned %d tokens", self.filename, len(self.tokens))
        return self.tokens

    def _next_token(self) -> Token:
        """Get the next token from the source."""
        start = self._location()
        current_char = self.source[self.pos]

        if current_char.isdigit() and current_char.isascii():
            return self._tokenize_number(start)

        if self._is_identifier_start(current_char):
            return self._tokenize_identifier_or_keyword(start)

        if current_char == "'":
            if self.source.startswith("'''", self.pos):
                return self._tokenize_triple_string(start)
            return self._tokenize_raw_string(start)

        if current_char == '"':
            return self._tokenize_escaped_string(start)

        # Operators and punctuation (multi-character first)
        for op_len in OPERATOR_LENGTHS:
            potential_op = self.source[self.pos:self.pos + op_len]
            if potential_op in OPERATORS:
                self._advance_by(op_len)
                return self._make_token(OPERATORS[potential_op], potential_op, None, start)

        raise create_invalid_character_error(current_char, start)

    def _make_token(self, token_type: TokenType, lexeme: str, value, start: SourceLocation) -> Token:
        return Token(token_type, lexeme, value, start, self._location())

    def _tokenize_number(self, start: SourceLocation) -> Token:
        """Tokenize a numeric literal; decoding happens in the parser."""
        match = self.number_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))
        return self._make_token(TokenType.NUMBER, lexeme, None, start)

    def _tokenize_identifier_or_keyword(self, start: SourceLocation) -> Token:
        """Tokenize an identifier or keyword."""
        start_pos = self.pos

        # First character is already validated as identifier start
        self._advance()

        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        if lexeme == '_':
            raise create_lone_underscore_error(start)

        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None

        return self._make_token(token_type, lexeme, value, start)

    def _tokenize_raw_string(self, start: SourceLocation) -> Token:
        """Tokenize a single-quoted string literal."""
        close = self.source.find("'", self.pos + 1)
        if close < 0:
            raise create_unterminated_string_error("'", start, start.advanced(self.source[self.pos:]))
        return self._take_string(TokenType.RAW_STRING, close + 1, start)

    def _tokenize_triple_string(self, start: SourceLocation) -> Token:
        """Tokenize a triple-quoted string literal."""
        close = self.source.find("'''", self.pos + 3)
        if close < 0:
            raise create_unterminated_string_error("'''", start, start.advanced(self.source[self.pos:]))
        return self._take_string(TokenType.TRIPLE_STRING, close + 3, start)

    def _tokenize_escaped_string(self, start: SourceLocation) -> Token:
        """Tokenize a double-quoted string literal.

        A backslash hides the following character from the closing-quote
        search; whether the escape is valid is decided by the decoder.
        """
        i = self.pos + 1
        while i < len(self.source):
            char = self.source[i]
            if char == '\\':
                i += 2
                continue
            if char == '"':
                return self._take_string(TokenType.ESCAPED_STRING, i + 1, start)
            i += 1

        raise create_unterminated_string_error('"', start, start.advanced(self.source[self.pos:]))

    def _take_string(self, token_type: TokenType, end_pos: int, start: SourceLocation) -> Token:
        lexeme = self.source[self.pos:end_pos]
        self._advance_by(len(lexeme))
        return self._make_token(token_type, lexeme, None, start)

    def _is_identifier_start(self, char: str) -> bool:
        """XID_Start or underscore."""
        return char.isidentifier()

    def _is_identifier_continue(self, char: str) -> bool:
        """XID_Continue (which includes underscore)."""
        return ('a' + char).isidentifier()

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and `#` comments."""
        while self.pos < len(self.source):
            match = (self.whitespace_pattern.match(self.source, self.pos)
                     or self.comment_pattern.match(self.source, self.pos))
            if not match:
                break
            self._advance_by(match.end() - self.pos)

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
