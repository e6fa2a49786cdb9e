"""
Results module behavioral tests (options and commands).

Scope
- Validate Option construction (names, values) and derived accessors.
- Validate Command insertion (last wins on resolved names), lookups by short or
  long name with or without dashes, argument access and value equality.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import Template, Option, Command


class TestOption(TestCase):
    """Behavioral tests for Option."""

    def testOptionRequiresAName(self):
        with self.assertRaises(TypeError):
            Option()

    def testOptionValuesAreTupled(self):
        o = Option("a", values=["1", "2"])
        self.assertEqual(o.values, ("1", "2"))
        self.assertEqual(o.value, "1")

    def testOptionWithoutValues(self):
        o = Option("a")
        self.assertEqual(o.values, ())
        self.assertIsNone(o.value)

    def testOptionRejectsStringValues(self):
        with self.assertRaises(TypeError):
            Option("a", values="12")

    def testOptionRejectsNonStringValue(self):
        with self.assertRaises(TypeError):
            Option("a", values=[1])

    def testOptionFromTemplate(self):
        o = Option.from_template(Template("a", "all", max_values=1), ("x",))
        self.assertEqual((o.short_name, o.long_name, o.values), ("a", "all", ("x",)))

    def testOptionFromTemplateLongOnly(self):
        o = Option.from_template(Template(long_name="all"))
        self.assertIsNone(o.short_name)
        self.assertEqual(o.name, "all")

    def testOptionFromNonTemplateRejected(self):
        with self.assertRaises(TypeError):
            Option.from_template("a")

    def testOptionEqualityByValue(self):
        self.assertEqual(Option("a", values=("1",)), Option("a", values=("1",)))
        self.assertNotEqual(Option("a", values=("1",)), Option("a", values=("2",)))
        self.assertEqual(hash(Option("a", "all")), hash(Option("a", "all")))

    def testOptionRendering(self):
        self.assertEqual(str(Option("a", values=("1", "2"))), "-a=1,2")
        self.assertEqual(str(Option(long_name="all")), "--all")


class TestCommand(TestCase):
    """Behavioral tests for Command."""

    def testEmptyCommand(self):
        c = Command()
        self.assertIsNone(c.name)
        self.assertEqual(c.options, ())
        self.assertEqual(c.arguments, ())
        self.assertEqual(c.argument_count(), 0)

    def testCommandLookupByShortAndLongName(self):
        c = Command("tool", options=(Option("a", "all", values=("1",)),))
        for key in ("a", "-a", "all", "--all"):
            self.assertTrue(c.has_option(key), key)
            self.assertEqual(c.get_option_value(key), "1")

    def testCommandBlankLookupNeverMatches(self):
        c = Command(options=(Option("a"),))
        self.assertFalse(c.has_option(""))
        self.assertFalse(c.has_option("  "))

    def testCommandMissingOptionRaisesKeyError(self):
        c = Command(options=(Option("a"),))
        self.assertFalse(c.has_option("b"))
        with self.assertRaises(KeyError):
            c.get_option("b")
        with self.assertRaises(KeyError):
            c.get_option_values("b")
        with self.assertRaises(KeyError):
            c.get_option_value("b")

    def testCommandOptionWithoutValues(self):
        c = Command(options=(Option("a"),))
        self.assertIsNone(c.get_option_value("a"))
        self.assertEqual(c.get_option_values("a"), ())

    def testCommandLastOptionWins(self):
        c = Command(options=(Option("a", values=("1",)), Option("b"), Option("a", values=("2",))))
        self.assertEqual(c.get_option_values("a"), ("2",))
        self.assertEqual([o.name for o in c.options], ["b", "a"])

    def testCommandArguments(self):
        c = Command(arguments=["x", "y"])
        self.assertEqual(c.argument_count(), 2)
        self.assertEqual(c.get_argument(0), "x")
        self.assertEqual(c.get_argument(1), "y")

    def testCommandArgumentOutOfRange(self):
        c = Command(arguments=["x"])
        with self.assertRaises(IndexError):
            c.get_argument(1)
        with self.assertRaises(IndexError):
            c.get_argument(-1)

    def testCommandArgumentIndexMustBeInteger(self):
        c = Command(arguments=["x"])
        with self.assertRaises(TypeError):
            c.get_argument("0")
        with self.assertRaises(TypeError):
            c.get_argument(False)

    def testCommandRejectsNonOptions(self):
        with self.assertRaises(TypeError):
            Command(options=("-a",))

    def testCommandRejectsStringArguments(self):
        with self.assertRaises(TypeError):
            Command(arguments="xy")

    def testCommandEqualityByValue(self):
        first = Command("tool", options=(Option("a"),), arguments=("x",))
        second = Command("tool", options=(Option("a"),), arguments=("x",))
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertNotEqual(first, Command("tool", options=(Option("a"),)))

    def testCommandRendering(self):
        c = Command("tool", options=(Option("a", values=("1",)),), arguments=("x",))
        self.assertEqual(str(c), "tool -a=1 x")
        self.assertEqual(str(Command()), "<undefined>")


if __name__ == "__main__":
    unittest.main()
