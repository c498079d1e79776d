"""
Abstract Syntax Tree node definitions for jatom.

Each node carries the source span it was parsed from and supports the
visitor pattern. Nodes are never mutated after construction and hold no
parent pointers, so a subtree may be shared by several parents.
Equality and hashing are structural and ignore spans.
"""

from abc import ABC
from typing import Any, Iterator, List, Optional, Tuple, Union
from enum import Enum

from ..lexer.tokens import SourceSpan
from .symbols import Symbol


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    LITERAL = "Literal"
    IDENTIFIER = "Identifier"
    THIS = "This"
    UNARY_OP = "UnaryOp"
    BINARY_OP = "BinaryOp"
    AND = "And"
    OR = "Or"
    CALL = "Call"
    ASSIGN = "Assign"
    LIST = "List"
    PIPE = "Pipe"
    BLOCK = "Block"
    IF = "If"


class BinaryOperator(Enum):
    """Binary operators, valued by their surface symbol."""
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    REM = "%"
    IDIV = "//"

    @property
    def symbol(self) -> str:
        return self.value


class UnaryOperator(Enum):
    """Prefix operators, valued by their surface symbol."""
    NEG = "-"
    NOT = "!"

    @property
    def symbol(self) -> str:
        return self.value


class ASTVisitor:
    """
    Base visitor for traversing AST nodes.

    `visit` dispatches to `visit_<NodeClass>` (e.g. `visit_BinaryOp`) and
    falls back to `generic_visit`, which visits every child.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        for child in node.children():
            self.visit(child)
        return None


class ASTNode(ABC):
    """Base class for all AST nodes."""

    # Attribute names that make up the node's structure
    _fields: Tuple[str, ...] = ()

    def __init__(self, node_type: ASTNodeType, span: SourceSpan):
        self.node_type = node_type
        self.span = span

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def children(self) -> List['ASTNode']:
        """Get all child nodes, in source order."""
        result = []
        for name in self._fields:
            value = getattr(self, name)
            if isinstance(value, ASTNode):
                result.append(value)
            elif isinstance(value, list):
                result.extend(value)
        return result

    def walk(self) -> Iterator['ASTNode']:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def _key(self) -> tuple:
        return tuple(
            tuple(value) if isinstance(value, list) else value
            for value in (getattr(self, name) for name in self._fields)
        )

    def __eq__(self, other) -> bool:
        """Structural equality; spans are not compared."""
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.span}"

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{self.__class__.__name__}({fields})"


class Expression(ASTNode):
    """Base class for expressions."""
    pass


# ============================================================================
# Leaves
# ============================================================================

class Literal(Expression):
    """Number or string literal."""
    value: Union[float, str]
    kind: str  # "number" or "string"

    _fields = ("value", "kind")

    def __init__(self, value: Union[float, str], kind: str, span: SourceSpan):
        super().__init__(ASTNodeType.LITERAL, span)
        self.value = value
        self.kind = kind

    @property
    def is_number(self) -> bool:
        return self.kind == "number"

    @property
    def is_string(self) -> bool:
        return self.kind == "string"


class Identifier(Expression):
    """Identifier reference; `symbol` is set when interning is enabled."""
    name: str
    symbol: Optional[Symbol]

    _fields = ("name",)

    def __init__(self, name: str, span: SourceSpan, symbol: Optional[Symbol] = None):
        super().__init__(ASTNodeType.IDENTIFIER, span)
        self.name = name
        self.symbol = symbol


class This(Expression):
    """Implicit receiver injected by command-call syntax."""

    def __init__(self, span: SourceSpan):
        super().__init__(ASTNodeType.THIS, span)


# ============================================================================
# Operators
# ============================================================================

class UnaryOp(Expression):
    """Prefix operation: `-x`, `!x`."""
    operator: UnaryOperator
    operand: Expression

    _fields = ("operator", "operand")

    def __init__(self, operator: UnaryOperator, operand: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.UNARY_OP, span)
        self.operator = operator
        self.operand = operand


class BinaryOp(Expression):
    """Arithmetic or comparison operation."""
    left: Expression
    operator: BinaryOperator
    right: Expression

    _fields = ("left", "operator", "right")

    def __init__(self, left: Expression, operator: BinaryOperator, right: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.BINARY_OP, span)
        self.left = left
        self.operator = operator
        self.right = right


class And(Expression):
    """Short-circuit `left && right`."""
    left: Expression
    right: Expression

    _fields = ("left", "right")

    def __init__(self, left: Expression, right: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.AND, span)
        self.left = left
        self.right = right


class Or(Expression):
    """Short-circuit `left || right`."""
    left: Expression
    right: Expression

    _fields = ("left", "right")

    def __init__(self, left: Expression, right: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.OR, span)
        self.left = left
        self.right = right


# ============================================================================
# Calls and bindings
# ============================================================================

class Call(Expression):
    """
    Call expression.

    Produced by `f(a, b)` (args `[a, b]`), by `x.f` (callee `f`, args
    `[x]`) and by the command form `f a, b` (args `[This, a, b]`).
    """
    callee: Expression
    args: List[Expression]

    _fields = ("callee", "args")

    def __init__(self, callee: Expression, args: List[Expression], span: SourceSpan):
        super().__init__(ASTNodeType.CALL, span)
        self.callee = callee
        self.args = args

    @property
    def is_command(self) -> bool:
        """True when the first argument is the implicit receiver."""
        return bool(self.args) and isinstance(self.args[0], This)


class Assign(Expression):
    """`name = value`; the target is always a bare identifier."""
    target: Identifier
    value: Expression

    _fields = ("target", "value")

    def __init__(self, target: Identifier, value: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.ASSIGN, span)
        self.target = target
        self.value = value


# ============================================================================
# Sequences
# ============================================================================

class ListLiteral(Expression):
    """`[a; b; c]`"""
    elements: List[Expression]

    _fields = ("elements",)

    def __init__(self, elements: List[Expression], span: SourceSpan):
        super().__init__(ASTNodeType.LIST, span)
        self.elements = elements


class Pipe(Expression):
    """Two or more juxtaposed expressions: `a b c`."""
    elements: List[Expression]

    _fields = ("elements",)

    def __init__(self, elements: List[Expression], span: SourceSpan):
        super().__init__(ASTNodeType.PIPE, span)
        self.elements = elements


class Block(Expression):
    """`{a; b; c}`, or a top-level `;`-separated program."""
    elements: List[Expression]

    _fields = ("elements",)

    def __init__(self, elements: List[Expression], span: SourceSpan):
        super().__init__(ASTNodeType.BLOCK, span)
        self.elements = elements


# ============================================================================
# Control flow
# ============================================================================

class If(Expression):
    """
    `if cond yes [else no]`.

    `no` is None only for the form without `else`; `else if` is stored as
    a nested If in `no`.
    """
    cond: Expression
    yes: Expression
    no: Optional[Expression]

    _fields = ("cond", "yes", "no")

    def __init__(self, cond: Expression, yes: Expression, no: Optional[Expression], span: SourceSpan):
        super().__init__(ASTNodeType.IF, span)
        self.cond = cond
        self.yes = yes
        self.no = no


# Alias for the main AST type
AST = Expression
