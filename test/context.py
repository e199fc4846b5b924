"""
Context behavioral tests (argument binding and typed access).

Scope
- Validate the binder: markers, value look-ahead, flags, skipped tokens, duplicates.
- Validate coercion per type: str, bool, int, float (whole-string rule, ranges).
- Validate absence/default/warning policy of the defaulted accessor.

Conventions
- Test method names follow CamelCase per project convention.
- Warnings are observed through an injected recording logger.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from clixxi import (
    Context,
    BadOptionTypeError,
    MissingRequiredOptionError,
    UncastableOptionWarning,
    DuplicatedOptionWarning,
)


class Recorder:
    def __init__(self):
        self.warnings = []

    def warn(self, message):
        self.warnings.append(message)


class TestBinding(TestCase):
    """Behavioral tests for turning tokens into the raw option store."""

    def testFlagBindsTrue(self):
        context = Context(["--verbose"])
        self.assertEqual(dict(context.options), {"verbose": "true"})

    def testValueIsCaptured(self):
        context = Context(["--name", "Alice"])
        self.assertEqual(context.options["name"], "Alice")

    def testMarkerIsNeverConsumedAsValue(self):
        context = Context(["--a", "--b", "1"])
        self.assertEqual(dict(context.options), {"a": "true", "b": "1"})

    def testNonMarkerTokensAreSkipped(self):
        context = Context(["stray", "--x", "1", "again", "-y", "--z"])
        self.assertEqual(dict(context.options), {"x": "1", "z": "true"})

    def testSingleDashValueIsConsumed(self):
        context = Context(["--offset", "-5"])
        self.assertEqual(context.options["offset"], "-5")

    def testBareMarkerBindsEmptyName(self):
        context = Context(["--", "value"])
        self.assertEqual(dict(context.options), {"": "value"})

    def testEmptyArguments(self):
        self.assertEqual(dict(Context().options), {})
        self.assertEqual(dict(Context([]).options), {})

    def testInsertionOrderIsPreserved(self):
        context = Context(["--c", "--a", "1", "--b"])
        self.assertEqual(list(context.options), ["c", "a", "b"])

    def testFirstOccurrenceWinsAndWarns(self):
        recorder = Recorder()
        context = Context(["--n", "1", "--n", "2", "--m"], logger=recorder)
        self.assertEqual(dict(context.options), {"n": "1", "m": "true"})
        self.assertEqual(len(recorder.warnings), 1)
        self.assertIsInstance(recorder.warnings[0], DuplicatedOptionWarning)
        self.assertEqual(recorder.warnings[0].name, "n")

    def testStoreIsReadOnly(self):
        context = Context(["--a", "1"])
        with self.assertRaises(TypeError):
            context.options["a"] = "2"  # type: ignore[index]

    def testArgsMustBeStrings(self):
        with self.assertRaises(TypeError):
            Context("--a 1")  # type: ignore[arg-type]
        with self.assertRaises(TypeError):
            Context(["--a", 1])  # type: ignore[list-item]

    def testLoggerMustWarn(self):
        with self.assertRaises(TypeError):
            Context([], logger=object())  # type: ignore[arg-type]

    def testMembership(self):
        context = Context(["--help"])
        self.assertTrue(context.has("help"))
        self.assertIn("help", context)
        self.assertFalse(context.has("other"))


class TestAccess(TestCase):
    """Behavioral tests for the typed accessor."""

    def testStringIsVerbatim(self):
        context = Context(["--name", "  Alice 42 "])
        self.assertEqual(context.get("name"), "  Alice 42 ")
        self.assertEqual(context.get("name", str), "  Alice 42 ")

    def testAbsentBoolIsFalse(self):
        context = Context(["--verbose"])
        self.assertIs(context.get("verbose", bool), True)
        self.assertIs(context.get("quiet", bool), False)

    def testAbsentBoolIgnoresDefault(self):
        self.assertIs(Context().get("flag", bool, True), False)

    def testBoolWords(self):
        for word in ("true", "1", "on", "yes"):
            self.assertIs(Context(["--b", word]).get("b", bool), True)
        for word in ("false", "0", "off", "no"):
            self.assertIs(Context(["--b", word]).get("b", bool), False)

    def testBoolIsCaseSensitive(self):
        with self.assertRaises(BadOptionTypeError) as caught:
            Context(["--b", "True"]).get("b", bool)
        self.assertEqual(caught.exception.expected, "bool")
        self.assertEqual(caught.exception.value, "True")

    def testIntWholeString(self):
        self.assertEqual(Context(["--x", "12"]).get("x", int), 12)
        self.assertEqual(Context(["--x", "-7"]).get("x", int), -7)
        self.assertEqual(Context(["--x", "+3"]).get("x", int), 3)
        for value in ("12abc", "1.5", "", " 1", "1_000", "0x10", "true"):
            with self.assertRaises(BadOptionTypeError, msg=value):
                Context(["--x", value]).get("x", int)

    def testIntRange(self):
        self.assertEqual(Context(["--x", "2147483647"]).get("x", int), 2147483647)
        self.assertEqual(Context(["--x", "-2147483648"]).get("x", int), -2147483648)
        with self.assertRaises(BadOptionTypeError):
            Context(["--x", "2147483648"]).get("x", int)
        self.assertEqual(Context(["--x", "-0000000000002147483648"]).get("x", int), -2147483648)
        huge = "1" * 5000
        with self.assertRaises(BadOptionTypeError) as caught:
            Context(["--x", huge]).get("x", int)
        self.assertEqual(caught.exception.value, huge)
        recorder = Recorder()
        self.assertEqual(Context(["--x", huge], logger=recorder).get("x", int, 7), 7)
        self.assertEqual(len(recorder.warnings), 1)
        self.assertIsInstance(recorder.warnings[0], UncastableOptionWarning)

    def testFlagAsIntFails(self):
        with self.assertRaises(BadOptionTypeError):
            Context(["--x"]).get("x", int)

    def testFloatSyntax(self):
        self.assertEqual(Context(["--f", "1.5"]).get("f", float), 1.5)
        self.assertEqual(Context(["--f", "-.5"]).get("f", float), -0.5)
        self.assertEqual(Context(["--f", "3."]).get("f", float), 3.0)
        self.assertEqual(Context(["--f", "2e-3"]).get("f", float), 0.002)
        self.assertEqual(Context(["--f", "7"]).get("f", float), 7.0)
        for value in ("1.5x", ".", "e5", "inf", "nan", "1e39", ""):
            with self.assertRaises(BadOptionTypeError, msg=value):
                Context(["--f", value]).get("f", float)

    def testFloatUnderflow(self):
        self.assertEqual(Context(["--f", "1e-40"]).get("f", float), 1e-40)
        self.assertEqual(Context(["--f", "0.0"]).get("f", float), 0.0)
        self.assertEqual(Context(["--f", "0e-999"]).get("f", float), 0.0)
        for value in ("1e-60", "-1e-46", "1e-400", "0.001e-999"):
            with self.assertRaises(BadOptionTypeError, msg=value):
                Context(["--f", value]).get("f", float)

    def testMissingRequiredOption(self):
        with self.assertRaises(MissingRequiredOptionError) as caught:
            Context().get("count", int)
        self.assertEqual(caught.exception.name, "count")
        with self.assertRaises(MissingRequiredOptionError):
            Context().get("name")

    def testUnsupportedTypeRaisesTypeError(self):
        with self.assertRaises(TypeError):
            Context(["--x", "1"]).get("x", list)

    def testEveryAccessReparses(self):
        context = Context(["--n", "5"])
        self.assertEqual(context.get("n", int), 5)
        self.assertEqual(context.get("n", str), "5")
        self.assertEqual(context.get("n", float), 5.0)


class TestDefaults(TestCase):
    """Behavioral tests for the defaulted accessor and its warnings."""

    def testAbsentReturnsDefaultSilently(self):
        recorder = Recorder()
        context = Context([], logger=recorder)
        self.assertEqual(context.get("count", int, 3), 3)
        self.assertEqual(context.get("name", str, "world"), "world")
        self.assertEqual(recorder.warnings, [])

    def testNoneIsAValidDefault(self):
        self.assertIsNone(Context([], logger=Recorder()).get("x", float, None))

    def testMalformedReturnsDefaultAndWarnsOnce(self):
        recorder = Recorder()
        context = Context(["--count", "12abc"], logger=recorder)
        self.assertEqual(context.get("count", int, 0), 0)
        self.assertEqual(len(recorder.warnings), 1)
        warning = recorder.warnings[0]
        self.assertIsInstance(warning, UncastableOptionWarning)
        self.assertEqual(warning.error.name, "count")
        self.assertEqual(warning.default, 0)
        self.assertIn("cannot be converted to int", str(warning))

    def testWellFormedIgnoresDefault(self):
        recorder = Recorder()
        context = Context(["--count", "12"], logger=recorder)
        self.assertEqual(context.get("count", int, 0), 12)
        self.assertEqual(recorder.warnings, [])


if __name__ == "__main__":
    unittest.main()
