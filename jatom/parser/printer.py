"""
Source printer for jatom trees.

Renders an Expression back to jatom text that parses (from the PIPE start
symbol) to a structurally equal tree. Output is fully parenthesized rather
than pretty; it is meant for diagnostics and round-trip checks.
"""

import math

from .ast_nodes import (
    ASTNode, ASTVisitor, Literal, Identifier, This, UnaryOp, BinaryOp, And, Or,
    Call, Assign, ListLiteral, Pipe, Block, If
)

_STRING_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\b': '\\b',
    '\x1b': '\\e',
}


def quote_string(value: str) -> str:
    """Render a string as a "..." literal."""
    parts = ['"']
    for char in value:
        if char in _STRING_ESCAPES:
            parts.append(_STRING_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        else:
            code_point = ord(char)
            if code_point <= 0xFF:
                parts.append(f"\\x{code_point:02x}")
            elif code_point <= 0xFFFF:
                parts.append(f"\\u{code_point:04x}")
            else:
                parts.append(f"\\U{code_point:08x}")
    parts.append('"')
    return ''.join(parts)


def format_number(value: float) -> str:
    if math.isnan(value):
        raise ValueError("NaN has no jatom literal form")
    if math.isinf(value):
        # The lexer rounds an out-of-range exponent to infinity
        return "1e999"
    return repr(float(value))


class ASTPrinter(ASTVisitor):
    """Visitor producing jatom source text."""

    def print(self, node: ASTNode) -> str:
        return node.accept(self)

    def generic_visit(self, node: ASTNode) -> str:
        raise TypeError(f"cannot print {type(node).__name__}")

    def visit_Literal(self, node: Literal) -> str:
        if node.is_number:
            return format_number(node.value)
        return quote_string(node.value)

    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_This(self, node: This) -> str:
        raise ValueError("implicit receiver only appears as the first argument of a command call")

    def visit_UnaryOp(self, node: UnaryOp) -> str:
        return f"({node.operator.symbol}{self.visit(node.operand)})"

    def visit_BinaryOp(self, node: BinaryOp) -> str:
        return f"({self.visit(node.left)} {node.operator.symbol} {self.visit(node.right)})"

    def visit_And(self, node: And) -> str:
        return f"({self.visit(node.left)} && {self.visit(node.right)})"

    def visit_Or(self, node: Or) -> str:
        return f"({self.visit(node.left)} || {self.visit(node.right)})"

    def visit_Call(self, node: Call) -> str:
        if isinstance(node.callee, Identifier) and node.is_command and len(node.args) > 1:
            args = ", ".join(self.visit(arg) for arg in node.args[1:])
            return f"({node.callee.name} {args})"

        callee = self.visit(node.callee)
        if not isinstance(node.callee, Identifier):
            callee = f"({callee})"
        args = ", ".join(self.visit(arg) for arg in node.args)
        return f"{callee}({args})"

    def visit_Assign(self, node: Assign) -> str:
        return f"({node.target.name} = {self.visit(node.value)})"

    def visit_ListLiteral(self, node: ListLiteral) -> str:
        return "[" + "; ".join(self.visit(element) for element in node.elements) + "]"

    def visit_Block(self, node: Block) -> str:
        return "{" + "; ".join(self.visit(element) for element in node.elements) + "}"

    def visit_Pipe(self, node: Pipe) -> str:
        parts = []
        for element in node.elements:
            text = self.visit(element)
            # A bare name followed by an argument would read as a command call
            if isinstance(element, Identifier):
                text = f"({text})"
            parts.append(text)
        return "(" + " ".join(parts) + ")"

    def visit_If(self, node: If) -> str:
        cond = self.visit(node.cond)
        # Conditions stop at atoms, so `f(x)` must be grouped
        if isinstance(node.cond, Call) and not node.cond.is_command:
            cond = f"({cond})"
        text = f"(if {cond} {self.visit(node.yes)}"
        if node.no is not None:
            text += f" else {self.visit(node.no)}"
        return text + ")"


def to_source(node: ASTNode) -> str:
    """Render a tree as jatom source."""
    return ASTPrinter().print(node)
