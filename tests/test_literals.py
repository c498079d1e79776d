"""
Test suite for jatom literal decoding.

Tests cover:
- Numeric conversion
- Raw and triple-quoted string contents
- Escape sequences in double-quoted strings
- Escape error spans
"""

import math
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from jatom.lexer import LexerError, LiteralEscapeError, SourceLocation, tokenize_string
from jatom.parser import Literal, parse_string
from jatom.parser.literals import (
    decode_number, decode_raw_string, decode_triple_string,
    decode_escaped_string, decode_string
)

START = SourceLocation("<test>", 1, 1, 0)


def string_value(source):
    tree = parse_string(source)
    assert isinstance(tree, Literal) and tree.is_string, tree
    return tree.value


class TestNumbers(unittest.TestCase):

    def test_decode_number(self):
        self.assertEqual(decode_number("1"), 1.0)
        self.assertEqual(decode_number("1.5e3"), 1500.0)
        self.assertEqual(decode_number("25E-1"), 2.5)
        self.assertIsInstance(decode_number("7"), float)

    def test_overflow_becomes_infinity(self):
        self.assertTrue(math.isinf(decode_number("1e999")))

    def test_parsed_number_literal(self):
        tree = parse_string("1.2e3")
        self.assertTrue(tree.is_number)
        self.assertEqual(tree.value, 1200.0)


class TestStrings(unittest.TestCase):

    def test_raw_string_is_verbatim(self):
        self.assertEqual(decode_raw_string("'a\\nb'"), "a\\nb")
        self.assertEqual(string_value("'say \"hi\"'"), 'say "hi"')
        self.assertEqual(string_value("''"), "")

    def test_triple_string_trims_one_leading_newline(self):
        self.assertEqual(decode_triple_string("'''\nhello'''"), "hello")
        self.assertEqual(decode_triple_string("'''\r\nhi'''"), "hi")
        self.assertEqual(decode_triple_string("'''\n\nx'''"), "\nx")
        self.assertEqual(decode_triple_string("'''a\n'''"), "a\n")
        self.assertEqual(decode_triple_string("''''''"), "")

    def test_triple_string_through_parser(self):
        self.assertEqual(string_value("'''\nhello'''"), "hello")
        self.assertEqual(string_value("''''''"), "")
        self.assertEqual(string_value("'''it's'''"), "it's")

    def test_escapes(self):
        cases = [
            ('""', ""),
            ('"abc"', "abc"),
            ('"abc\\n"', "abc\n"),
            ('"abc\\ndef\\""', 'abc\ndef"'),
            ('"abc\\n\\\\\\ndef"', "abc\n\\\ndef"),
            ('"\\x1b\\e\\u001b\\U0000001b"', "\x1b" * 4),
            ('"\\r\\t\\b"', "\r\t\b"),
            ('"\\n"', "\n"),
            ('"\\nq"', "\nq"),
        ]
        for lexeme, expected in cases:
            with self.subTest(lexeme=lexeme):
                self.assertEqual(decode_escaped_string(lexeme, START), expected)

    def test_hex_escapes(self):
        self.assertEqual(string_value('"\\x41\\u0042"'), "AB")
        self.assertEqual(string_value('"\\U0001F600"'), "\U0001F600")
        self.assertEqual(string_value('"\\u00e9"'), "é")

    def test_decode_string_dispatch(self):
        tokens = tokenize_string("'a\\n' \"a\\n\" '''\na'''")
        self.assertEqual([decode_string(t) for t in tokens[:3]], ["a\\n", "a\n", "a"])


class TestEscapeErrors(unittest.TestCase):

    def assertEscapeError(self, lexeme, offsets):
        with self.assertRaises(LiteralEscapeError) as ctx:
            decode_escaped_string(lexeme, START)
        self.assertEqual(ctx.exception.code, "L006")
        self.assertEqual(ctx.exception.span.offsets, offsets)
        return ctx.exception

    def test_unknown_escape(self):
        self.assertEscapeError('"\\q"', (1, 3))

    def test_unknown_escape_after_text(self):
        self.assertEscapeError('"ab\\q"', (3, 5))

    def test_short_hex_escape(self):
        self.assertEscapeError('"\\x4"', (1, 4))
        self.assertEscapeError('"\\u12g4"', (1, 7))

    def test_surrogate_rejected(self):
        error = self.assertEscapeError('"\\uD800"', (1, 7))
        self.assertIn("U+D800", error.diagnostic.help_text)

    def test_out_of_range_rejected(self):
        self.assertEscapeError('"\\U00110000"', (1, 11))

    def test_escape_error_is_lexer_error(self):
        with self.assertRaises(LexerError):
            parse_string('"\\q"')

    def test_escape_error_span_in_source(self):
        source = 'x "\\q"'
        with self.assertRaises(LiteralEscapeError) as ctx:
            parse_string(source)
        self.assertEqual(ctx.exception.span.offsets, (3, 5))
        self.assertEqual(ctx.exception.span.text(source), "\\q")


if __name__ == '__main__':
    unittest.main()
