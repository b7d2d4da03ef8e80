"""
Parser lifecycle behavioral tests (parse, parse_positional, validate, reset).

Scope
- End-to-end scenarios over ArgParser with realistic declarations.
- Strict vs permissive handling of unmatched tokens.
- Executable-path handling, including sys.argv as the default source.
- Typed accessors and lookups, lifecycle state and fail-fast parsing.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (ArgParser, Switch, Scalar, Custom, Section).
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase, mock

from argspell import ArgParser, State, Switch, Scalar, Custom, Section
from argspell.faults import (
    UnknownArgumentError,
    RepeatedOptionError,
    MissingValueError,
    EmptyArgumentListError,
    ValueSyntaxError,
    RequiredOptionError,
    InvalidValueError,
    NameNotFoundError,
)


def cake_baker():
    return ArgParser(
        "cake baker",
        Switch("help", "-h", "--help", descr="show this help"),
        Scalar("exit", "-e=", descr="exit code"),
    )


def cake_slicer():
    return ArgParser(
        "cake slicer",
        Scalar("cake", "-c=", type=float, validator=lambda v: 0 <= v <= 1),
        Scalar("slices", "-s=", default=8),
    )


class TestScenarios(TestCase):
    """Scenario-level checks over a complete parse/validate cycle."""

    def testRequiredIntegerAssigned(self):
        parser = cake_baker()
        parser.parse(["-e=5"])
        parser.validate()
        self.assertIs(parser.get_switch("help"), False)
        self.assertEqual(parser.get_integer("exit"), 5)

    def testRequiredIntegerMissing(self):
        parser = cake_baker()
        parser.parse([])
        with self.assertRaises(RequiredOptionError) as context:
            parser.validate()
        self.assertEqual(context.exception.name, "exit")

    def testValidatorRejectsAfterSuccessfulParse(self):
        parser = cake_slicer()
        parser.parse(["-c=1.5"])
        self.assertEqual(parser.get_decimal("cake"), 1.5)
        with self.assertRaises(InvalidValueError):
            parser.validate()

    def testSyntaxErrorAbortsBeforeLaterTokens(self):
        parser = cake_slicer()
        with self.assertRaises(ValueSyntaxError):
            parser.parse(["-c=not_a_number", "-s=4"])
        self.assertFalse(parser.option("slices").seen)
        self.assertEqual(parser.get_integer("slices"), 8)

    def testAssignmentsBeforeFailureAreKept(self):
        parser = cake_slicer()
        with self.assertRaises(UnknownArgumentError):
            parser.parse(["-s=4", "--bogus", "-c=0.5"])
        self.assertEqual(parser["slices"], 4)
        self.assertFalse(parser.option("cake").seen)


class TestStrictAndPermissive(TestCase):
    """Unmatched tokens in both parsing modes."""

    def testStrictRejectsUnknownToken(self):
        parser = cake_baker()
        with self.assertRaises(UnknownArgumentError) as context:
            parser.parse(["-e=1", "file.txt"])
        self.assertEqual(context.exception.token, "file.txt")

    def testPermissiveCollectsPositionalsInOrder(self):
        parser = cake_baker()
        positionals = parser.parse_positional(["a.txt", "-e=1", "b.txt", "-h", "c"])
        self.assertEqual(positionals, ["a.txt", "b.txt", "c"])
        self.assertEqual(parser.get_integer("exit"), 1)
        self.assertTrue(parser.get_switch("help"))

    def testBareSpellingIsMissingValueInBothModes(self):
        with self.assertRaises(MissingValueError):
            cake_baker().parse(["-e="])
        with self.assertRaises(MissingValueError):
            cake_baker().parse_positional(["-e="])

    def testRepeatedOptionInOneCycle(self):
        parser = cake_baker()
        with self.assertRaises(RepeatedOptionError):
            parser.parse(["-h", "--help"])

    def testEmptyTokenIsUnknownOrPositional(self):
        with self.assertRaises(UnknownArgumentError):
            cake_baker().parse([""])
        self.assertEqual(cake_baker().parse_positional([""]), [""])


class TestExecutable(TestCase):
    """Executable-path consumption and the sys.argv default source."""

    def testExecutableConsumedAndShownInUsage(self):
        parser = cake_baker()
        parser.parse(["/usr/bin/baker", "-e=0"], executable=True)
        self.assertEqual(parser.executable_name, "/usr/bin/baker")
        self.assertIn("Usage: /usr/bin/baker [-h] -e=I", parser.usage())

    def testExecutableNeverMatched(self):
        parser = cake_baker()
        parser.parse(["-h", "-e=0"], executable=True)
        self.assertEqual(parser.executable_name, "-h")
        self.assertIs(parser.get_switch("help"), False)

    def testEmptyListWithExecutable(self):
        parser = cake_baker()
        with self.assertRaises(EmptyArgumentListError) as context:
            parser.parse([], executable=True)
        self.assertIsInstance(context.exception, IndexError)

    def testDefaultsToSysArgv(self):
        parser = cake_baker()
        with mock.patch.object(sys, "argv", ["baker", "-e=7"]):
            parser.parse()
        self.assertEqual(parser.executable_name, "baker")
        self.assertEqual(parser.get_integer("exit"), 7)

    def testSysArgvWithoutExecutable(self):
        parser = cake_baker()
        with mock.patch.object(sys, "argv", ["-e=7"]):
            self.assertEqual(parser.parse_positional(executable=False), [])
        self.assertIsNone(parser.executable_name)
        self.assertEqual(parser.get_integer("exit"), 7)

    def testTokensMustBeAnIterableOfStrings(self):
        parser = cake_baker()
        with self.assertRaises(TypeError):
            parser.parse("-e=1")
        with self.assertRaises(TypeError):
            parser.parse(["-e=1", 2])
        with self.assertRaises(TypeError):
            parser.parse(5)

    def testGeneratorTokens(self):
        parser = cake_baker()
        parser.parse(token for token in ["-e=2"])
        self.assertEqual(parser.get_integer("exit"), 2)


class TestAccessors(TestCase):
    """Typed accessors and name lookups."""

    def setUp(self):
        self.parser = ArgParser(
            "kitchen",
            Section("Options:"),
            Switch("verbose", "-v"),
            Scalar("count", "-n=", default=1),
            Scalar("ratio", "-r=", type=float, default=0.5),
            Scalar("label", "-l=", type=str, default="none"),
            Custom("pair", "-p=", converter=lambda x: tuple(x.split(":")), default=("a", "b")),
        )

    def testDefaultsBeforeParse(self):
        self.assertIs(self.parser.get_switch("verbose"), False)
        self.assertEqual(self.parser.get_integer("count"), 1)
        self.assertEqual(self.parser.get_decimal("ratio"), 0.5)
        self.assertEqual(self.parser.get_text("label"), "none")
        self.assertEqual(self.parser.get_custom("pair"), ("a", "b"))

    def testValuesAfterParse(self):
        self.parser.parse(["-v", "-n=3", "-r=0.25", "-l=x y", "-p=k:v"])
        self.assertTrue(self.parser["verbose"])
        self.assertEqual(self.parser["count"], 3)
        self.assertEqual(self.parser["ratio"], 0.25)
        self.assertEqual(self.parser["label"], "x y")
        self.assertEqual(self.parser["pair"], ("k", "v"))

    def testWrongKindIsNameNotFound(self):
        with self.assertRaises(NameNotFoundError):
            self.parser.get_integer("ratio")
        with self.assertRaises(NameNotFoundError):
            self.parser.get_text("verbose")

    def testUnknownName(self):
        with self.assertRaises(NameNotFoundError):
            self.parser["missing"]
        with self.assertRaises(NameNotFoundError):
            self.parser.option("Options:")

    def testContains(self):
        self.assertIn("count", self.parser)
        self.assertNotIn("missing", self.parser)

    def testEntriesAndOptions(self):
        self.assertEqual(len(self.parser.entries), 6)
        self.assertEqual(len(self.parser.options), 5)


class TestLifecycle(TestCase):
    """State tracking and reset behaviour."""

    def testStateTransitions(self):
        parser = cake_baker()
        self.assertIs(parser.state, State.FRESH)
        parser.parse(["-e=1"])
        self.assertIs(parser.state, State.PARSED)
        parser.validate()
        self.assertIs(parser.state, State.VALIDATED)
        parser.reset()
        self.assertIs(parser.state, State.FRESH)

    def testFailedParseKeepsState(self):
        parser = cake_baker()
        with self.assertRaises(UnknownArgumentError):
            parser.parse(["?"])
        self.assertIs(parser.state, State.FRESH)

    def testResetAllowsReuse(self):
        parser = cake_baker()
        parser.parse(["/bin/baker", "-e=1", "-h"], executable=True)
        parser.reset()
        self.assertIsNone(parser.executable_name)
        self.assertIsNone(parser.get_integer("exit"))
        parser.parse(["-e=2", "-h"])
        parser.validate()
        self.assertEqual(parser.get_integer("exit"), 2)

    def testResetIsIdempotent(self):
        parser = cake_slicer()
        parser.parse(["-s=3"])
        parser.reset()
        snapshot = [(option.value, option.seen) for option in parser.options]
        parser.reset()
        self.assertEqual([(option.value, option.seen) for option in parser.options], snapshot)

    def testSecondParseWithoutResetRepeats(self):
        parser = cake_baker()
        parser.parse(["-e=1"])
        with self.assertRaises(RepeatedOptionError):
            parser.parse(["-e=2"])

    def testConstructionChecks(self):
        with self.assertRaises(TypeError):
            ArgParser(42)
        with self.assertRaises(TypeError):
            ArgParser("tool", indent="wide")
        with self.assertRaises(TypeError):
            ArgParser("tool", indent=True)
        with self.assertRaises(ValueError):
            ArgParser("tool", indent=-1)
        with self.assertRaises(TypeError):
            ArgParser("tool", "-h")

    def testRepr(self):
        self.assertEqual(repr(cake_baker()), "arg-parser(program='cake baker', options=2, state='fresh')")


if __name__ == "__main__":
    unittest.main()
