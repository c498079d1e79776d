#!/usr/bin/env python3
"""
Main test runner for the jatom front end tests.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_all_tests():
    """Run all jatom unit tests."""

    print("🚀 jatom Front End Test Suite")
    print("=" * 60)

    # Test if basic imports work
    try:
        from jatom.lexer.lexer import Lexer
        from jatom.parser.parser import Parser
        from jatom.parser.printer import to_source

        print("✅ All front end modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import front end modules: {e}")
        return False

    # Smoke test the lexer -> parser -> printer pipeline
    print("Testing simple parse pipeline...")
    code = "{x = 1 + 2 * 3; if x > 6 x.show else 'small' print}"

    print("  🔧 Lexing...")
    tokens = Lexer(code).tokenize()
    print(f"     Generated {len(tokens)} tokens")

    print("  🔧 Parsing...")
    parser = Parser(tokens)
    tree = parser.parse()
    print(f"     Generated {type(tree).__name__} with {len(list(tree.walk()))} nodes, "
          f"{len(parser.symbols)} symbols")

    print("  🔧 Printing...")
    print(f"     {to_source(tree)}")
    print()

    # Unit tests (the performance suite needs pytest-benchmark and is run by pytest)
    loader = unittest.TestLoader()
    suite = loader.discover(os.path.join(project_root, "tests"), pattern="test_*.py")
    result = unittest.TextTestRunner(verbosity=2).run(suite)

    print()
    if result.wasSuccessful():
        print("🎉 All tests PASSED!")
    else:
        print(f"❌ {len(result.failures)} failures, {len(result.errors)} errors")
    print("=" * 60)

    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
