"""
jatom Recursive Descent Parser

Implements the jatom grammar with one method per precedence tier,
lowest to highest binding:

    or          a || b                  left-assoc
    and         a && b                  left-assoc
    equality    == !=                   non-associative
    comparison  < > <= >=               non-associative
    term        + -                     left-assoc
    factor      * / % //                left-assoc
    if_value    if C Y [else N]         else binds to the nearest if
    unary       -x  !x  name = value
    dot         a.b  and  f a, b        (command call)
    call        f(a, b)
    atom        (pipe)  {a; b}  [a; b]  literal  identifier

Conditions use the same or/and/equality/comparison chain but stop at
prefix-operated atoms, so `if a + b x` is rejected while `if (a + b) x`
is accepted.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Type, Union

from ..lexer.tokens import Token, TokenType, SourceLocation, SourceSpan
from .ast_nodes import (
    Expression, Literal, Identifier, This, UnaryOp, BinaryOp, And, Or,
    Call, Assign, ListLiteral, Pipe, Block, If, BinaryOperator, UnaryOperator
)
from .errors import (
    EXPRESSION_START, create_unexpected_token_error,
    create_invalid_expression_error, create_invalid_operator_error,
    create_nesting_too_deep_error
)
from .literals import decode_number, decode_string
from .options import ParseOptions, StartSymbol
from .symbols import SymbolTable

logger = logging.getLogger(__name__)


EQUALITY_OPERATORS = {
    TokenType.EQUAL: BinaryOperator.EQ,
    TokenType.NOT_EQUAL: BinaryOperator.NE,
}

COMPARISON_OPERATORS = {
    TokenType.LESS_THAN: BinaryOperator.LT,
    TokenType.GREATER_THAN: BinaryOperator.GT,
    TokenType.LESS_EQUAL: BinaryOperator.LE,
    TokenType.GREATER_EQUAL: BinaryOperator.GE,
}

TERM_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}

FACTOR_OPERATORS = {
    TokenType.MULTIPLY: BinaryOperator.MUL,
    TokenType.DIVIDE: BinaryOperator.DIV,
    TokenType.MODULO: BinaryOperator.REM,
    TokenType.FLOOR_DIVIDE: BinaryOperator.IDIV,
}

PREFIX_OPERATORS = {
    TokenType.MINUS: UnaryOperator.NEG,
    TokenType.LOGICAL_NOT: UnaryOperator.NOT,
}

# Tokens after an identifier that turn it into a command call.
# A `(` only does so when separated from the identifier by whitespace;
# `f(x)` is an ordinary call.
COMMAND_ARGUMENT_START = frozenset({
    TokenType.IDENTIFIER,
    TokenType.NUMBER,
    TokenType.RAW_STRING,
    TokenType.TRIPLE_STRING,
    TokenType.ESCAPED_STRING,
    TokenType.LEFT_BRACKET,
    TokenType.LEFT_BRACE,
})

# Prefix operators allowed on the right of a `.`, as in `f(2).--3`
MAX_DOT_PREFIX_DEPTH = 2


class Parser:
    """
    jatom parser.

    Consumes the token list produced by the lexer and builds one
    Expression tree. Identifiers are interned into `self.symbols`, a fresh
    SymbolTable per parse that is frozen once the parse succeeds.
    """

    def __init__(self, tokens: List[Token], options: Optional[ParseOptions] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
            options: Start symbol and interning settings
        """
        self.tokens = tokens
        self.options = options or ParseOptions()
        self.current = 0
        self.symbols = SymbolTable()

    def parse(self) -> Expression:
        """
        Parse the whole token stream from the configured start symbol.

        Returns:
            Root expression of the tree

        Raises:
            ParseError: On the first syntax error, including input nested
                deeper than the interpreter stack allows
            LiteralEscapeError: On a malformed escape in a "..." string
        """
        self.current = 0
        self.symbols = SymbolTable()

        start = self.options.start
        try:
            if start == StartSymbol.EXPR:
                tree = self._parse_expression()
                trailing = [TokenType.EOF]
            elif start == StartSymbol.PIPE:
                tree = self._parse_pipe()
                trailing = [TokenType.EOF]
            else:
                tree = self._parse_top_level_block()
                trailing = [TokenType.SEMICOLON, TokenType.EOF]
        except RecursionError:
            raise create_nesting_too_deep_error(self._peek()) from None

        if not self._is_at_end():
            raise create_unexpected_token_error(trailing, self._peek())

        self.symbols.freeze()
        logger.debug("%s: parsed %s, %d symbols interned",
                     self.options.filename, start.value, len(self.symbols))
        return tree

    # ------------------------------------------------------------------
    # Start symbols
    # ------------------------------------------------------------------

    def _parse_pipe(self) -> Expression:
        """One or more juxtaposed expressions."""
        elements = [self._parse_expression()]
        while self._peek().type in EXPRESSION_START:
            elements.append(self._parse_expression())

        if len(elements) == 1:
            return elements[0]
        return Pipe(elements, _join(elements[0], elements[-1]))

    def _parse_top_level_block(self) -> Block:
        elements = [self._parse_pipe()]
        while self._match(TokenType.SEMICOLON):
            elements.append(self._parse_pipe())
        return Block(elements, _join(elements[0], elements[-1]))

    def _parse_expression(self) -> Expression:
        return self._parse_or()

    # ------------------------------------------------------------------
    # Binary tiers
    # ------------------------------------------------------------------

    def _parse_or(self) -> Expression:
        return self._parse_logical(TokenType.LOGICAL_OR, Or, self._parse_and)

    def _parse_and(self) -> Expression:
        return self._parse_logical(TokenType.LOGICAL_AND, And, self._parse_equality)

    def _parse_equality(self) -> Expression:
        return self._parse_non_associative(EQUALITY_OPERATORS, self._parse_comparison)

    def _parse_comparison(self) -> Expression:
        return self._parse_non_associative(COMPARISON_OPERATORS, self._parse_term)

    def _parse_term(self) -> Expression:
        return self._parse_left_associative(TERM_OPERATORS, self._parse_factor)

    def _parse_factor(self) -> Expression:
        return self._parse_left_associative(FACTOR_OPERATORS, self._parse_if_value)

    def _parse_logical(self, operator: TokenType, node_class: Type[Union[And, Or]],
                       operand: Callable[[], Expression]) -> Expression:
        left = operand()
        while self._match(operator):
            right = operand()
            left = node_class(left, right, _join(left, right))
        return left

    def _parse_left_associative(self, operators: Dict[TokenType, BinaryOperator],
                                operand: Callable[[], Expression]) -> Expression:
        left = operand()
        while self._peek().type in operators:
            operator = operators[self._advance().type]
            right = operand()
            left = BinaryOp(left, operator, right, _join(left, right))
        return left

    def _parse_non_associative(self, operators: Dict[TokenType, BinaryOperator],
                               operand: Callable[[], Expression]) -> Expression:
        """At most one operator of this tier without explicit grouping."""
        left = operand()
        if self._peek().type not in operators:
            return left

        operator = operators[self._advance().type]
        right = operand()
        left = BinaryOp(left, operator, right, _join(left, right))

        if self._peek().type in operators:
            token = self._peek()
            raise create_invalid_operator_error(
                f"'{token.lexeme}' cannot be chained after '{operator.symbol}'",
                token,
                "Comparison operators are non-associative; group one side in parentheses."
            )
        return left

    # ------------------------------------------------------------------
    # Conditions
    # ------------------------------------------------------------------

    def _parse_condition(self) -> Expression:
        return self._parse_logical(TokenType.LOGICAL_OR, Or, self._parse_condition_and)

    def _parse_condition_and(self) -> Expression:
        return self._parse_logical(TokenType.LOGICAL_AND, And, self._parse_condition_equality)

    def _parse_condition_equality(self) -> Expression:
        return self._parse_non_associative(EQUALITY_OPERATORS, self._parse_condition_comparison)

    def _parse_condition_comparison(self) -> Expression:
        return self._parse_non_associative(COMPARISON_OPERATORS, self._parse_condition_operand)

    def _parse_condition_operand(self) -> Expression:
        """Prefix operators applied to a bare atom."""
        token = self._peek()
        if token.type in PREFIX_OPERATORS:
            self._advance()
            operand = self._parse_condition_operand()
            return UnaryOp(PREFIX_OPERATORS[token.type], operand, _span(token, operand))
        return self._parse_atom()

    # ------------------------------------------------------------------
    # if / unary
    # ------------------------------------------------------------------

    def _parse_if_value(self) -> Expression:
        if self._check(TokenType.IF):
            return self._parse_if()
        return self._parse_unary()

    def _parse_if(self) -> If:
        """`if C Y`, `if C Y else N`; `else if` nests through `N`."""
        if_token = self._advance()
        cond = self._parse_condition()
        yes = self._parse_if_value()

        no = None
        if self._match(TokenType.ELSE):
            no = self._parse_if_value()

        return If(cond, yes, no, _span(if_token, no or yes))

    def _parse_unary(self) -> Expression:
        token = self._peek()

        if token.type in PREFIX_OPERATORS:
            self._advance()
            operand = self._parse_unary()
            return UnaryOp(PREFIX_OPERATORS[token.type], operand, _span(token, operand))

        if token.is_identifier and self._peek(1).type == TokenType.ASSIGN:
            target = self._parse_identifier()
            self._advance()  # Consume =
            value = self._parse_if_value()
            return Assign(target, value, _join(target, value))

        return self._parse_dot()

    # ------------------------------------------------------------------
    # dot / command call / call
    # ------------------------------------------------------------------

    def _parse_dot(self, allow_command: bool = True) -> Expression:
        """`lhs.rhs` becomes Call(rhs, [lhs]); chains to the left."""
        if allow_command and self._at_command_call():
            left = self._parse_command_call()
        else:
            left = self._parse_call()

        while self._match(TokenType.DOT):
            method = self._parse_dot_operand()
            left = Call(method, [left], _join(left, method))

        return left

    def _parse_dot_operand(self) -> Expression:
        prefixes = []
        while self._peek().type in PREFIX_OPERATORS:
            if len(prefixes) == MAX_DOT_PREFIX_DEPTH:
                raise create_invalid_operator_error(
                    f"more than {MAX_DOT_PREFIX_DEPTH} prefix operators after '.'",
                    self._peek(),
                    "Wrap the operand in parentheses."
                )
            prefixes.append(self._advance())

        operand = self._parse_call()
        for token in reversed(prefixes):
            operand = UnaryOp(PREFIX_OPERATORS[token.type], operand, _span(token, operand))
        return operand

    def _at_command_call(self) -> bool:
        token = self._peek()
        if not token.is_identifier:
            return False

        following = self._peek(1)
        if following.type in COMMAND_ARGUMENT_START:
            return True
        return following.type == TokenType.LEFT_PAREN and not _adjacent(token, following)

    def _parse_command_call(self) -> Call:
        """`f a, b` becomes Call(f, [This, a, b])."""
        callee = self._parse_identifier()
        receiver = This(SourceSpan(callee.span.end, callee.span.end))

        args: List[Expression] = [receiver, self._parse_dot(allow_command=False)]
        while self._match(TokenType.COMMA):
            args.append(self._parse_dot(allow_command=False))

        return Call(callee, args, _join(callee, args[-1]))

    def _parse_call(self) -> Expression:
        """Atom followed by argument lists written flush against it."""
        expr = self._parse_atom()

        while self._check(TokenType.LEFT_PAREN) and _adjacent(self._previous(), self._peek()):
            self._advance()  # Consume (
            args, close = self._parse_separated(
                self._parse_pipe, TokenType.COMMA, TokenType.RIGHT_PAREN,
                allow_empty=True, allow_trailing=True
            )
            expr = Call(expr, args, SourceSpan(expr.span.start, close.end))

        return expr

    # ------------------------------------------------------------------
    # Atoms
    # ------------------------------------------------------------------

    def _parse_atom(self) -> Expression:
        token = self._peek()

        if token.type == TokenType.LEFT_PAREN:
            self._advance()
            expr = self._parse_pipe()
            self._consume(TokenType.RIGHT_PAREN)
            return expr

        if token.type == TokenType.LEFT_BRACE:
            self._advance()
            elements, close = self._parse_separated(
                self._parse_pipe, TokenType.SEMICOLON, TokenType.RIGHT_BRACE,
                allow_empty=False, allow_trailing=False
            )
            return Block(elements, SourceSpan(token.location, close.end))

        if token.type == TokenType.LEFT_BRACKET:
            self._advance()
            elements, close = self._parse_separated(
                self._parse_pipe, TokenType.SEMICOLON, TokenType.RIGHT_BRACKET,
                allow_empty=True, allow_trailing=True
            )
            return ListLiteral(elements, SourceSpan(token.location, close.end))

        if token.is_literal:
            self._advance()
            if token.is_string:
                return Literal(decode_string(token), "string", token.span)
            return Literal(decode_number(token.lexeme), "number", token.span)

        if token.is_identifier:
            return self._parse_identifier()

        raise create_invalid_expression_error(
            f"Unexpected token '{token.lexeme}' in expression", token
        )

    def _parse_identifier(self) -> Identifier:
        token = self._consume(TokenType.IDENTIFIER)
        symbol = self.symbols.intern(token.lexeme) if self.options.intern_identifiers else None
        return Identifier(token.lexeme, token.span, symbol)

    def _parse_separated(self, parse_item: Callable[[], Expression], separator: TokenType,
                         terminator: TokenType, allow_empty: bool,
                         allow_trailing: bool) -> Tuple[List[Expression], Token]:
        """
        Parse `item (separator item)*` up to and including `terminator`.

        Returns:
            The items and the terminator token
        """
        items: List[Expression] = []
        if self._check(terminator) and allow_empty:
            return items, self._advance()

        while True:
            items.append(parse_item())
            if not self._match(separator):
                break
            if allow_trailing and self._check(terminator):
                break

        close = self._consume(terminator, expected=[separator, terminator])
        return items, close

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._peek().type == TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        """Return a token ahead of the cursor without consuming."""
        index = self.current + offset
        if index < len(self.tokens):
            return self.tokens[index]
        if self.tokens and self.tokens[-1].type == TokenType.EOF:
            return self.tokens[-1]
        # Token list without EOF: synthesize one past the last token
        end = self.tokens[-1].end if self.tokens else SourceLocation(self.options.filename, 1, 1, 0)
        return Token(TokenType.EOF, "", None, end, end)

    def _previous(self) -> Token:
        """Return previous token."""
        if self.current > 0:
            return self.tokens[self.current - 1]
        return self._peek()

    def _consume(self, token_type: TokenType, expected: Optional[Iterable[TokenType]] = None) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_unexpected_token_error(expected or [token_type], self._peek())


def _span(start: Token, end: Expression) -> SourceSpan:
    return SourceSpan(start.location, end.span.end)


def _join(first: Expression, last: Expression) -> SourceSpan:
    return SourceSpan(first.span.start, last.span.end)


def _adjacent(left: Token, right: Token) -> bool:
    """No whitespace or comment between the two tokens."""
    return left.end.offset == right.location.offset


def _resolve_options(options: Optional[ParseOptions], **overrides) -> ParseOptions:
    options = options or ParseOptions()
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return replace(options, **overrides) if overrides else options


def parse_with_symbols(source: str, filename: Optional[str] = None, *,
                       start: Optional[StartSymbol] = None,
                       intern_identifiers: Optional[bool] = None,
                       options: Optional[ParseOptions] = None) -> Tuple[Expression, SymbolTable]:
    """
    Parse a source string and return the tree with its symbol table.

    Keyword arguments override the matching fields of `options`.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    options = _resolve_options(options, filename=filename, start=start,
                               intern_identifiers=intern_identifiers)
    tokens = tokenize_string(source, options.filename)
    parser = Parser(tokens, options)
    tree = parser.parse()
    return tree, parser.symbols


def parse_string(source: str, filename: Optional[str] = None, *,
                 start: Optional[StartSymbol] = None,
                 intern_identifiers: Optional[bool] = None,
                 options: Optional[ParseOptions] = None) -> Expression:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        start: Grammar entry point (default PIPE)
        intern_identifiers: Attach symbols to identifiers (default True)
        options: Base options; the arguments above override its fields

    Returns:
        Root expression

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    tree, _ = parse_with_symbols(source, filename, start=start,
                                 intern_identifiers=intern_identifiers, options=options)
    return tree


def parse_file(filepath: str, *, start: Optional[StartSymbol] = None,
               options: Optional[ParseOptions] = None) -> Expression:
    """
    Convenience function to parse a source file.

    Args:
        filepath: Path to source file
        start: Grammar entry point (default PIPE)
        options: Base options

    Returns:
        Root expression

    Raises:
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath, start=start, options=options)
