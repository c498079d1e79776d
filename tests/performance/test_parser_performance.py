#!/usr/bin/env python3
"""
Parser Performance Test Suite
=============================

Benchmarks the lexer and parser on generated programs so that regressions
in the scanning loop or the tier methods show up as timing changes.

Run with:
    pytest tests/performance --benchmark-only
"""

import pytest
import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from jatom.lexer import tokenize_string
from jatom.parser import Block, ParseError, Parser, ParseOptions, StartSymbol, parse_string, to_source


def generate_program(statements: int) -> str:
    """Build a `;`-separated program that touches every precedence tier."""
    lines = []
    for i in range(statements):
        lines.append(
            f"x{i} = if a{i} < {i} && !done || retry f({i}, 'arg').--g else "
            f"[{i}; \"s\\t{i}\"] show {{x{i} * 2 + 1; y.z}} # line {i}"
        )
    return ";\n".join(lines)


class TestParserPerformance:
    """Timing benchmarks for the front end."""

    SIZES = [10, 100, 1000]

    @pytest.mark.parametrize("statements", SIZES)
    def test_tokenize(self, benchmark, statements):
        source = generate_program(statements)
        tokens = benchmark(tokenize_string, source)
        assert tokens[-1].lexeme == ""

    @pytest.mark.parametrize("statements", SIZES)
    def test_parse(self, benchmark, statements):
        tokens = tokenize_string(generate_program(statements))
        options = ParseOptions(start=StartSymbol.BLOCK)

        tree = benchmark(lambda: Parser(tokens, options).parse())

        assert isinstance(tree, Block)
        assert len(tree.elements) == statements

    def test_deep_nesting(self, benchmark):
        depth = 30
        source = "(" * depth + "1" + ")" * depth
        tree = benchmark(parse_string, source)
        assert tree.value == 1.0

    def test_nesting_overflow(self, benchmark):
        depth = 1000
        source = "(" * depth + "1" + ")" * depth

        def parse_deep():
            with pytest.raises(ParseError) as info:
                parse_string(source)
            return info.value

        error = benchmark(parse_deep)
        assert error.diagnostic.code == "P011"

    def test_round_trip(self, benchmark):
        tree = parse_string(generate_program(100), start=StartSymbol.BLOCK)
        text = benchmark(to_source, tree)
        assert parse_string(text) == tree
