# python
"""
Sinks module behavioral tests.

Scope
- Slot, Buffer, Attribute and Item storage semantics.
- accepts()/deliver() dispatch between __accept__ objects and plain callables.
- collapse(): scalars for one value, tuples for several.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from argbind import Attribute, Buffer, Item, Slot, accepts, collapse, deliver


class TestCollapse(TestCase):
    def testSingleValue(self):
        self.assertEqual(collapse([1]), 1)

    def testSeveralValues(self):
        self.assertEqual(collapse([1, 2]), (1, 2))

    def testNoValues(self):
        self.assertEqual(collapse([]), ())


class TestSlot(TestCase):
    """Slot keeps the last delivered value."""

    def testDefault(self):
        self.assertIsNone(Slot().value)
        self.assertEqual(Slot(3).value, 3)

    def testScalarThenTuple(self):
        slot = Slot()
        deliver(slot, (1,))
        self.assertEqual(slot.value, 1)
        deliver(slot, (1, 2))
        self.assertEqual(slot.value, (1, 2))


class TestBuffer(TestCase):
    """Fixed-length, bounds-checked storage."""

    def testFromSize(self):
        buffer = Buffer(3, 0)
        self.assertEqual(buffer, [0, 0, 0])
        self.assertEqual(buffer.capacity, 3)

    def testFromSequence(self):
        self.assertEqual(Buffer((1, 2)), [1, 2])

    def testWritesFromHead(self):
        buffer = Buffer(3, 0)
        deliver(buffer, (7, 8))
        self.assertEqual(list(buffer), [7, 8, 0])

    def testOverflowLeavesBufferUntouched(self):
        buffer = Buffer(2, 0)
        with self.assertRaises(IndexError):
            deliver(buffer, (1, 2, 3))
        self.assertEqual(buffer, [0, 0])

    def testInvalidSources(self):
        for source in (True, "ab", 1.5):
            with self.subTest(source=source), self.assertRaises(TypeError):
                Buffer(source)
        for source in (0, -1, []):
            with self.subTest(source=source), self.assertRaises(ValueError):
                Buffer(source)

    def testUnhashable(self):
        with self.assertRaises(TypeError):
            hash(Buffer(1))


class TestAttributeAndItem(TestCase):
    """Write-through sinks on caller-owned objects."""

    def testAttribute(self):
        target = SimpleNamespace(count=0)
        deliver(Attribute(target, "count"), (5,))
        self.assertEqual(target.count, 5)

    def testAttributeNameValidation(self):
        with self.assertRaises(TypeError):
            Attribute(SimpleNamespace(), 1)
        with self.assertRaises(ValueError):
            Attribute(SimpleNamespace(), "not valid")

    def testItem(self):
        mapping = {}
        deliver(Item(mapping, "range"), (1, 9))
        self.assertEqual(mapping, {"range": (1, 9)})

    def testItemRequiresAssignment(self):
        with self.assertRaises(TypeError):
            Item(object(), "key")


class TestDeliver(TestCase):
    """Dispatch rules."""

    def testAccepts(self):
        self.assertTrue(accepts(None))
        self.assertTrue(accepts(Slot()))
        self.assertTrue(accepts(print))
        self.assertFalse(accepts(42))

    def testNoneSink(self):
        deliver(None, (1,))

    def testCallableReceivesPositionalValues(self):
        received = []
        deliver(lambda *values: received.append(values), (1, 2))
        self.assertEqual(received, [(1, 2)])

    def testUndeliverable(self):
        with self.assertRaises(TypeError):
            deliver(42, (1,))


if __name__ == "__main__":
    unittest.main()
