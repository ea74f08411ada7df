# python
"""
Help rendering tests.

Scope
- Exact plain-text layout: usage line, description, sections, column alignment.
- Kind/arity tags and ordering rules.
- Purity: rendering twice gives the same text; colors never change the text.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argbind import Argument, Parser, Registry, format_help, render


def _registry():
    registry = Registry("tool", "does things")
    registry.register(Argument("file", message="input file"))
    registry.register(Argument("--verbose", message="chatty", kind=bool, length=0))
    registry.register(Argument("number", message="a number", kind=int))
    registry.register(Argument("-c", "--count", message="how many", kind=int))
    registry.register(Argument("--range", message="window", kind=int, length=2))
    return registry


def _line(names, body):
    return f"  {names:<24} - {body}".rstrip()


class TestHelpLayout(TestCase):
    """Plain text produced by format_help()."""

    def testFullLayout(self):
        expected = "\n".join([
            "Usage : tool file number --count --help --range --verbose",
            "",
            "Description: does things",
            "",
            "Required Arguments:",
            _line("file", "input file <string>"),
            _line("number", "a number <int>"),
            "",
            "Optional Arguments:",
            _line("-c, --count", "how many <int>"),
            _line("-h, --help", "show this help message and exit"),
            _line("--range", "window <2 ints>"),
            _line("--verbose", "chatty"),
        ])
        self.assertEqual(format_help(_registry()), expected)

    def testWithoutDescriptionOrRequired(self):
        registry = Registry("tool")
        registry.register(Argument("--quiet", length=0))
        expected = "\n".join([
            "Usage : tool --help --quiet",
            "",
            "Optional Arguments:",
            _line("-h, --help", "show this help message and exit"),
            _line("--quiet", ""),
        ])
        self.assertEqual(format_help(registry), expected)

    def testEmptyMessageKeepsTag(self):
        registry = Registry("tool")
        registry.register(Argument("--name"))
        self.assertIn(_line("--name", "<string>"), format_help(registry).splitlines())

    def testRequiredMultiValueTag(self):
        registry = Registry("tool")
        registry.register(Argument("point", message="x and y", kind=float, length=2))
        self.assertIn(_line("point", "x and y <2 doubles>"), format_help(registry).splitlines())

    def testLongNamesOverflowColumn(self):
        registry = Registry("tool")
        registry.register(Argument("--an-exceptionally-long-name", message="wide"))
        self.assertIn("  --an-exceptionally-long-name - wide <string>", format_help(registry).splitlines())


class TestHelpPurity(TestCase):
    """Rendering has no side effects and is repeatable."""

    def testIdempotent(self):
        registry = _registry()
        self.assertEqual(format_help(registry), format_help(registry))

    def testColorfulHasSameText(self):
        registry = _registry()
        colored = render(registry, colorful=True)
        self.assertEqual(colored.plain, format_help(registry))
        self.assertTrue(colored.spans)

    def testPlainRenderHasNoStyles(self):
        self.assertFalse(any(span.style for span in render(_registry()).spans))

    def testParserFormatHelp(self):
        registry = _registry()
        self.assertEqual(Parser(registry).format_help(), format_help(registry))


if __name__ == "__main__":
    unittest.main()
