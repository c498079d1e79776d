"""
Test suite for the jatom source printer.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from jatom.lexer import SourceLocation, SourceSpan
from jatom.parser import ASTNodeType, Call, Expression, Identifier, This, parse_string, to_source
from jatom.parser.printer import format_number, quote_string

from test_parser import VALID_PROGRAMS

_HERE = SourceLocation("<test>", 1, 1, 0)
SPAN = SourceSpan(_HERE, _HERE)


class Unknown(Expression):
    pass


class TestPrinterOutput(unittest.TestCase):

    def test_numbers(self):
        self.assertEqual(format_number(1.0), "1.0")
        self.assertEqual(format_number(1e22), "1e+22")
        self.assertEqual(format_number(float("inf")), "1e999")
        with self.assertRaises(ValueError):
            format_number(float("nan"))

    def test_strings(self):
        self.assertEqual(quote_string('a"b\\c'), '"a\\"b\\\\c"')
        self.assertEqual(quote_string("\n\t\x1b"), '"\\n\\t\\e"')
        self.assertEqual(quote_string("\x00\u200b测"), '"\\x00\\u200b测"')

    def test_calls(self):
        self.assertEqual(to_source(parse_string("f(1, x)")), "f(1.0, x)")
        self.assertEqual(to_source(parse_string("f x, y")), "(f x, y)")
        self.assertEqual(to_source(parse_string("f(1)(2)")), "(f(1.0))(2.0)")

    def test_pipe_wraps_names(self):
        self.assertEqual(to_source(parse_string("(1 a)")), "(1.0 (a))")

    def test_sequences(self):
        self.assertEqual(to_source(parse_string("[1; 'a']")), '[1.0; "a"]')
        self.assertEqual(to_source(parse_string("[]")), "[]")
        self.assertEqual(to_source(parse_string("{x = 1; x}")), "{(x = 1.0); x}")

    def test_condition_call_is_grouped(self):
        tree = parse_string("if (f(x)) y")
        self.assertEqual(to_source(tree), "(if (f(x)) y)")

    def test_receiver_cannot_be_printed_alone(self):
        with self.assertRaises(ValueError):
            to_source(This(SPAN))
        with self.assertRaises(ValueError):
            to_source(Call(Identifier("f", SPAN), [This(SPAN)], SPAN))

    def test_unknown_node(self):
        with self.assertRaises(TypeError):
            to_source(Unknown(ASTNodeType.LITERAL, SPAN))


class TestRoundTrip(unittest.TestCase):
    """Printing then re-parsing yields an equal tree."""

    EXTRA_PROGRAMS = [
        "'it''s'",
        "\"tab\\there\\u00e9\\x01\"",
        "f x, y.g, [1]",
        "f g x",
        "x.--f",
        "(a b) c",
        "if f(x) y",
        "1 + if a b else c * 2",
        "a.b(1)(2).c",
        "{a; {b; c}}",
        "x = y = if a b",
        "f(a b, c)",
        "g(1 2)",
        "((f x))(y)",
        "1e999",
    ]

    def assertRoundTrip(self, source):
        tree = parse_string(source)
        text = to_source(tree)
        self.assertEqual(parse_string(text), tree, f"{source!r} printed as {text!r}")
        self.assertEqual(to_source(parse_string(text)), text)

    def test_valid_programs(self):
        for source in VALID_PROGRAMS:
            with self.subTest(source=source):
                self.assertRoundTrip(source)

    def test_extra_programs(self):
        for source in self.EXTRA_PROGRAMS:
            with self.subTest(source=source):
                self.assertRoundTrip(source)


if __name__ == '__main__':
    unittest.main()
