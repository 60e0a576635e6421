"""
Values module behavioral tests (kinds, parsing, rendering, typed access).

Scope
- Validate per-kind text parsing, including the failure messages users see.
- Validate canonical rendering and parse/render round-trips on accepted text.
- Validate kind preservation, cloning and typed accessors.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from unittest import TestCase

from flagset import Kind, Value, ValueParseError, KindMismatchError, INT64_MAX, INT64_MIN


class TestIntValue(TestCase):
    """Behavioral tests for int values."""

    def setUp(self):
        self.value = Value(Kind.INT, 8080)

    def testParseDecimal(self):
        self.assertEqual(self.value.parse("9090").payload, 9090)

    def testParseSigned(self):
        self.assertEqual(self.value.parse("-42").payload, -42)
        self.assertEqual(self.value.parse("+7").payload, 7)

    def testParseRejectsNonNumeric(self):
        for text in ("abc", "12abc", "", " 5", "1_000", "1.5", "0x10"):
            with self.subTest(text=text):
                with self.assertRaises(ValueParseError) as context:
                    self.value.parse(text)
                self.assertEqual(context.exception.message, "not an integer")
                self.assertIs(context.exception.kind, Kind.INT)
                self.assertEqual(context.exception.text, text)

    def testParseBounds(self):
        self.assertEqual(self.value.parse(str(INT64_MAX)).payload, INT64_MAX)
        self.assertEqual(self.value.parse(str(INT64_MIN)).payload, INT64_MIN)

    def testParseOverflow(self):
        for text in (str(INT64_MAX + 1), str(INT64_MIN - 1), "9" * 5000):
            with self.subTest(length=len(text)):
                with self.assertRaises(ValueParseError) as context:
                    self.value.parse(text)
                self.assertEqual(context.exception.message, "out of range for int64")

    def testParseErrorIsValueError(self):
        with self.assertRaises(ValueError):
            self.value.parse("nope")

    def testRenderRoundTrip(self):
        self.assertEqual(self.value.parse("8080").render(), "8080")
        self.assertEqual(self.value.parse("+7").render(), "7")
        self.assertEqual(self.value.parse("-0").render(), "0")


class TestFloatValue(TestCase):
    """Behavioral tests for float values."""

    def setUp(self):
        self.value = Value(Kind.FLOAT, 1.0)

    def testParseDecimalAndScientific(self):
        self.assertEqual(self.value.parse("1.5").payload, 1.5)
        self.assertEqual(self.value.parse(".5").payload, 0.5)
        self.assertEqual(self.value.parse("2.").payload, 2.0)
        self.assertEqual(self.value.parse("1e3").payload, 1000.0)
        self.assertEqual(self.value.parse("-2.5E-2").payload, -0.025)

    def testParseIntegerText(self):
        self.assertEqual(self.value.parse("3").payload, 3.0)

    def testParseSpecialValues(self):
        self.assertTrue(math.isinf(self.value.parse("inf").payload))
        self.assertTrue(math.isinf(self.value.parse("-Infinity").payload))
        self.assertTrue(math.isnan(self.value.parse("NaN").payload))

    def testParseRejectsNonNumeric(self):
        for text in ("abc", "", "1.5x", ".", "e5", "1,5"):
            with self.subTest(text=text):
                with self.assertRaises(ValueParseError) as context:
                    self.value.parse(text)
                self.assertEqual(context.exception.message, "not a float")

    def testParseOverflow(self):
        with self.assertRaises(ValueParseError) as context:
            self.value.parse("1e999")
        self.assertEqual(context.exception.message, "out of range for float")

    def testRenderRoundTrip(self):
        self.assertEqual(self.value.parse("1.5").render(), "1.5")
        self.assertEqual(self.value.parse("0.1").render(), "0.1")
        self.assertEqual(Value(Kind.FLOAT, 1.0).render(), "1.0")

    def testIntegerPayloadIsWidened(self):
        value = Value(Kind.FLOAT, 3)
        self.assertIsInstance(value.payload, float)
        self.assertEqual(value.payload, 3.0)


class TestBoolValue(TestCase):
    """Behavioral tests for bool values."""

    def setUp(self):
        self.value = Value(Kind.BOOL, False)

    def testTruthySpellings(self):
        for text in ("true", "TRUE", "True", "1", "yes", "Yes", "on", "ON"):
            with self.subTest(text=text):
                self.assertIs(self.value.parse(text).payload, True)

    def testFalsySpellings(self):
        for text in ("false", "FALSE", "0", "no", "NO", "off", "Off"):
            with self.subTest(text=text):
                self.assertIs(Value(Kind.BOOL, True).parse(text).payload, False)

    def testInvalidSpellingListsAccepted(self):
        for text in ("maybe", "", "2", "y", "t"):
            with self.subTest(text=text):
                with self.assertRaises(ValueParseError) as context:
                    self.value.parse(text)
                self.assertEqual(
                    context.exception.message,
                    "invalid boolean value, accepts true/false, 1/0, yes/no, on/off"
                )

    def testRender(self):
        self.assertEqual(Value(Kind.BOOL, True).render(), "true")
        self.assertEqual(Value(Kind.BOOL, False).render(), "false")
        self.assertEqual(self.value.parse("YES").render(), "true")


class TestStringValue(TestCase):
    """Behavioral tests for string values."""

    def testParseIsVerbatim(self):
        value = Value(Kind.STRING, "fast")
        for text in ("slow", "", "--weird=text", "  spaced  ", "[bold]markup[/]"):
            with self.subTest(text=text):
                self.assertEqual(value.parse(text).payload, text)
                self.assertEqual(value.parse(text).render(), text)


class TestValueContract(TestCase):
    """Kind preservation, cloning, construction and typed access."""

    def testParsePreservesKindAndReturnsNewValue(self):
        value = Value(Kind.INT, 1)
        parsed = value.parse("2")
        self.assertIs(parsed.kind, Kind.INT)
        self.assertIsNot(parsed, value)
        self.assertEqual(value.payload, 1)

    def testParseRequiresString(self):
        with self.assertRaises(TypeError):
            Value(Kind.INT, 1).parse(2)

    def testCloneIsEqualButIndependent(self):
        value = Value(Kind.STRING, "fast")
        clone = value.clone()
        self.assertEqual(clone, value)
        self.assertIsNot(clone, value)

    def testNanCloneComparesEqual(self):
        value = Value(Kind.FLOAT, math.nan)
        self.assertEqual(value.clone(), value)

    def testEqualityConsidersKind(self):
        self.assertNotEqual(Value(Kind.INT, 1), Value(Kind.FLOAT, 1.0))
        self.assertNotEqual(Value(Kind.INT, 1), Value(Kind.BOOL, True))
        self.assertEqual(Value(Kind.INT, 1), Value(Kind.INT, 1))

    def testZeroDefaults(self):
        self.assertEqual(Value(Kind.INT).payload, 0)
        self.assertEqual(Value(Kind.FLOAT).payload, 0.0)
        self.assertIs(Value(Kind.BOOL).payload, False)
        self.assertEqual(Value(Kind.STRING).payload, "")

    def testOfInfersKind(self):
        self.assertIs(Value.of(True).kind, Kind.BOOL)
        self.assertIs(Value.of(3).kind, Kind.INT)
        self.assertIs(Value.of(1.5).kind, Kind.FLOAT)
        self.assertIs(Value.of("x").kind, Kind.STRING)
        with self.assertRaises(TypeError):
            Value.of(None)

    def testConstructorRejectsMismatchedPayload(self):
        with self.assertRaises(TypeError):
            Value(Kind.INT, True)
        with self.assertRaises(TypeError):
            Value(Kind.INT, "8080")
        with self.assertRaises(TypeError):
            Value(Kind.BOOL, 1)
        with self.assertRaises(TypeError):
            Value(Kind.STRING, None)
        with self.assertRaises(TypeError):
            Value("int", 1)

    def testConstructorRejectsOutOfRangeInt(self):
        with self.assertRaises(ValueError):
            Value(Kind.INT, INT64_MAX + 1)

    def testTypedAccess(self):
        self.assertEqual(Value(Kind.INT, 5).get(int), 5)
        self.assertEqual(Value(Kind.FLOAT, 0.5).get(float), 0.5)
        self.assertIs(Value(Kind.BOOL, True).get(bool), True)
        self.assertEqual(Value(Kind.STRING, "a").get(str), "a")

    def testTypedAccessMismatch(self):
        with self.assertRaises(KindMismatchError):
            Value(Kind.BOOL, True).get(int)
        with self.assertRaises(KindMismatchError):
            Value(Kind.INT, 1).get(bool)
        with self.assertRaises(KindMismatchError):
            Value(Kind.INT, 1).get(float)
        with self.assertRaises(TypeError):
            Value(Kind.STRING, "").get(bytes)

    def testKindNames(self):
        self.assertEqual([kind.typename for kind in Kind], ["int", "float", "bool", "string"])
        self.assertIs(Kind.BOOL.pytype, bool)

    def testRepr(self):
        self.assertEqual(repr(Value(Kind.INT, 8080)), "value(int, 8080)")
        self.assertEqual(repr(Value(Kind.STRING, "fast")), "value(string, 'fast')")


if __name__ == "__main__":
    unittest.main()
