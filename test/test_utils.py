"""
Utility helpers tests (Unset sentinel, coalesce, mirror, ordinal).

Scope
- Validate the sentinel contract relied upon by optional parameters.
- Validate that mirrored properties never leak mutable registry state.
- Validate ordinal labels used in parse fault messages.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from flagset.utils import Unset, UnsetType, coalesce, mirror, ordinal, rename


class TestUnset(TestCase):
    """Sentinel behavior."""

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndPrintable(self) -> None:
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsNot(Unset, None)

    def testNotSubclassable(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnionWithTypes(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)
        self.assertNotIsInstance(3, str | Unset)


class TestCoalesce(TestCase):
    """Only Unset is replaced."""

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalseyValues(self) -> None:
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class TestMirror(TestCase):
    """Read-only properties over private fields."""

    def setUp(self):
        class Holder:
            items = mirror("items")
            label = mirror("label")

            def __init__(self):
                self._items = ["a", "b"]
                self._label = "holder"

        self.holder = Holder()

    def testReadsBackingField(self) -> None:
        self.assertEqual(self.holder.items, ["a", "b"])
        self.assertEqual(self.holder.label, "holder")

    def testContainersAreDetached(self) -> None:
        items = self.holder.items
        items.append("c")
        self.assertEqual(self.holder.items, ["a", "b"])

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.label = "other"

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            mirror(3)


class TestRename(TestCase):
    """Stable names for generated callables."""

    def testDirectForm(self) -> None:
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self) -> None:
        @rename("decorated")
        def function():
            pass

        self.assertEqual(function.__name__, "decorated")

    def testArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(print, "a", "b")


class TestOrdinal(TestCase):
    """Position labels."""

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testNumericSuffixes(self) -> None:
        expected = {
            11: "11th",
            12: "12th",
            13: "13th",
            21: "21st",
            22: "22nd",
            23: "23rd",
            24: "24th",
            101: "101st",
            111: "111th",
            112: "112th",
            102: "102nd",
        }
        for number, label in expected.items():
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), label)

    def testRejectsNonPositive(self) -> None:
        with self.assertRaises(ValueError):
            ordinal(0)
        with self.assertRaises(ValueError):
            ordinal(-3)

    def testRejectsNonIntegers(self) -> None:
        ordinal(1)
        with self.assertRaises(TypeError):
            ordinal(True)
        with self.assertRaises(TypeError):
            ordinal(1.0)


if __name__ == "__main__":
    unittest.main()
