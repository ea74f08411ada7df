# python
"""
Kinds module behavioral tests.

Scope
- Built-in kinds: conversion of raw tokens and flag presence markers.
- Kind.of() resolution of Python types.
- User-defined kinds: validation and defaults.
"""

from __future__ import annotations

import pathlib
import unittest
from unittest import TestCase

from argbind import Kind, BOOL, DOUBLE, FLOAT, INT, STRING


class TestBuiltinKinds(TestCase):
    """Conversion and markers of the built-in kinds."""

    def testString(self):
        self.assertEqual(STRING("file.txt"), "file.txt")
        self.assertEqual(STRING.mark("--name"), "--name")

    def testInt(self):
        self.assertEqual(INT("42"), 42)
        self.assertEqual(INT("-7"), -7)
        self.assertEqual(INT.mark("--count"), 1)

    def testIntRejectsGarbage(self):
        for token in ("4x", "0x10", "", "1.5"):
            with self.subTest(token=token), self.assertRaises(ValueError):
                INT(token)

    def testFloatAndDouble(self):
        self.assertEqual(FLOAT("2.5"), 2.5)
        self.assertEqual(DOUBLE("1e3"), 1000.0)
        self.assertEqual(FLOAT.mark("--f"), 1.0)
        self.assertEqual(DOUBLE.mark("--d"), 1.0)

    def testFloatRejectsGarbage(self):
        with self.assertRaises(ValueError):
            DOUBLE("two")

    def testNumbersAreStrictAscii(self):
        for token in ("1_000", "٣", " 7 ", "7\n", "+", "", "７"):
            with self.subTest(token=token):
                for kind in (INT, FLOAT, DOUBLE, BOOL):
                    with self.assertRaises(ValueError):
                        kind(token)

    def testDecimalRejectsSpecialValues(self):
        for token in ("inf", "nan", "-Infinity", "1.5_0", "1e"):
            with self.subTest(token=token), self.assertRaises(ValueError):
                DOUBLE(token)

    def testDecimalForms(self):
        self.assertEqual(DOUBLE("+.5"), 0.5)
        self.assertEqual(DOUBLE("3."), 3.0)
        self.assertEqual(FLOAT("-2E-2"), -0.02)
        self.assertEqual(INT("+8"), 8)

    def testBoolIsIntegerThenNonZero(self):
        self.assertIs(BOOL("0"), False)
        self.assertIs(BOOL("1"), True)
        self.assertIs(BOOL("3"), True)
        self.assertIs(BOOL.mark("--verbose"), True)

    def testBoolRejectsWords(self):
        with self.assertRaises(ValueError):
            BOOL("yes")

    def testNames(self):
        self.assertEqual(
            [kind.name for kind in (STRING, INT, FLOAT, DOUBLE, BOOL)],
            ["string", "int", "float", "double", "bool"],
        )

    def testRepr(self):
        self.assertEqual(repr(INT), "kind('int')")


class TestKindOf(TestCase):
    """Resolution of Python types into kinds."""

    def testPythonTypes(self):
        self.assertIs(Kind.of(str), STRING)
        self.assertIs(Kind.of(int), INT)
        self.assertIs(Kind.of(float), DOUBLE)
        self.assertIs(Kind.of(bool), BOOL)

    def testKindPassesThrough(self):
        self.assertIs(Kind.of(FLOAT), FLOAT)

    def testUnsupported(self):
        for object in (list, "int", [], None):
            with self.subTest(object=object), self.assertRaises(TypeError):
                Kind.of(object)


class TestCustomKind(TestCase):
    """User-defined kinds."""

    def testConverterAndDefaultMarker(self):
        path = Kind("path", pathlib.Path)
        self.assertEqual(path("a/b"), pathlib.Path("a/b"))
        self.assertIs(path.mark("--path"), True)
        self.assertIs(path.converter, pathlib.Path)

    def testCustomMarker(self):
        level = Kind("level", int, lambda token: token.count("v"))
        self.assertEqual(level.mark("-v"), 1)

    def testNameIsStripped(self):
        self.assertEqual(Kind("  path ", str).name, "path")

    def testInvalidDeclarations(self):
        with self.assertRaises(ValueError):
            Kind("  ", str)
        with self.assertRaises(TypeError):
            Kind(1, str)
        with self.assertRaises(TypeError):
            Kind("x", 1)
        with self.assertRaises(TypeError):
            Kind("x", str, 1)


if __name__ == "__main__":
    unittest.main()
