"""
jatom Parser Package

Implements a precedence-tiered recursive descent parser for the jatom
expression language. Produces immutable AST nodes with full source span
information.

Key Features:
- One parse method per precedence tier
- Command-call, dot-call and juxtaposition (pipe) syntax
- Literal decoding with escape diagnostics
- Optional identifier interning into a per-parse SymbolTable
- Source printer for round-trip checks
"""

from .ast_nodes import *
from .parser import Parser, parse_string, parse_file, parse_with_symbols
from .errors import ParseError
from .options import ParseOptions, StartSymbol
from .symbols import Symbol, SymbolTable
from .printer import ASTPrinter, to_source

__all__ = [
    # Core parser
    "Parser", "ParseOptions", "StartSymbol",
    "parse_string", "parse_file", "parse_with_symbols",

    # AST nodes
    "AST", "ASTNode", "ASTNodeType", "ASTVisitor", "Expression",
    "Literal", "Identifier", "This", "UnaryOp", "BinaryOp", "And", "Or",
    "Call", "Assign", "ListLiteral", "Pipe", "Block", "If",
    "BinaryOperator", "UnaryOperator",

    # Symbols
    "Symbol", "SymbolTable",

    # Printing
    "ASTPrinter", "to_source",

    # Error handling
    "ParseError",
]
