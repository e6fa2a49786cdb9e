"""
POSIX parser behavioral tests.

Scope
- Validate token rewriting (clustered flags, glued and detached values).
- Validate where rewriting stops ('-', '--', first non-option token).
- Validate descriptor sanitization (long names dropped, groups rebuilt) and
  that faults match the GNU parser's.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import (
    Template,
    Group,
    Descriptor,
    PosixParser,
    parse,
    parse_posix,
    try_parse,
    UnrecognizedTokenError,
    MissingValueError,
    MissingOptionError,
    MissingGroupError,
    ExclusiveOptionsError,
    TooManyArgumentsError,
)


class TestPosixRewrite(TestCase):
    """Clustered options and their values."""

    def setUp(self):
        self.descriptor = Descriptor(
            "tool",
            templates=(Template("a"), Template("b", max_values=1), Template("c")),
            max_args=2,
        )

    def testClusterEquivalentToGnu(self):
        posix = parse_posix(self.descriptor, ["-ab", "val"])
        gnu = parse(self.descriptor, ["-a", "-b=val"])
        self.assertEqual(set(posix.options), set(gnu.options))
        self.assertEqual(posix, gnu)

    def testGluedValue(self):
        command = parse_posix(self.descriptor, ["-bval"])
        self.assertEqual(command.get_option_value("b"), "val")

    def testDetachedValue(self):
        command = parse_posix(self.descriptor, ["-b", "val", "x"])
        self.assertEqual(command.get_option_value("b"), "val")
        self.assertEqual(command.arguments, ("x",))

    def testGluedValueEndsCluster(self):
        command = parse_posix(self.descriptor, ["-abxc"])
        self.assertTrue(command.has_option("a"))
        self.assertEqual(command.get_option_value("b"), "xc")
        self.assertFalse(command.has_option("c"))

    def testKnownOptionIsNotAGluedValue(self):
        command = parse_posix(self.descriptor, ["-ba"])
        self.assertTrue(command.has_option("a"))
        self.assertIsNone(command.get_option_value("b"))

    def testDashedTokenIsNotADetachedValue(self):
        command = parse_posix(self.descriptor, ["-b", "-a"])
        self.assertTrue(command.has_option("a"))
        self.assertEqual(command.get_option_values("b"), ())

    def testValueAtEndOfTokens(self):
        command = parse_posix(self.descriptor, ["-b"])
        self.assertEqual(command.get_option_values("b"), ())

    def testUnknownCharacter(self):
        with self.assertRaises(UnrecognizedTokenError) as context:
            parse_posix(self.descriptor, ["-ax"])
        self.assertEqual(context.exception.token, "-x")

    def testLongOptionIsUnknown(self):
        with self.assertRaises(UnrecognizedTokenError) as context:
            parse_posix(self.descriptor, ["--all"])
        self.assertEqual(context.exception.token, "--all")

    def testGluedValueWithEqualsIsUnknown(self):
        with self.assertRaises(UnrecognizedTokenError):
            parse_posix(self.descriptor, ["-bx=y"])


class TestPosixPhases(TestCase):
    """Where rewriting stops."""

    def setUp(self):
        self.descriptor = Descriptor(templates=(Template("a"), Template("b")), max_args=2)

    def testTerminator(self):
        command = parse_posix(self.descriptor, ["-a", "--", "-b"])
        self.assertTrue(command.has_option("a"))
        self.assertFalse(command.has_option("b"))
        self.assertEqual(command.arguments, ("-b",))

    def testLoneDash(self):
        command = parse_posix(self.descriptor, ["-a", "-", "-b"])
        self.assertEqual(command.arguments, ("-", "-b"))

    def testFirstArgumentStopsRewriting(self):
        command = parse_posix(self.descriptor, ["x", "-ab"])
        self.assertEqual(command.options, ())
        self.assertEqual(command.arguments, ("x", "-ab"))

    def testNoTemplatesPassesTokensThrough(self):
        command = parse_posix(Descriptor(max_args=2), ["-ab", "x"])
        self.assertEqual(command.arguments, ("-ab", "x"))


class TestPosixDescriptor(TestCase):
    """Descriptor sanitization and shared validation."""

    def testLongOnlyTemplateRejected(self):
        with self.assertRaises(ValueError):
            PosixParser(Descriptor(templates=(Template(long_name="all"),)))

    def testLongNamesDropped(self):
        descriptor = Descriptor("tool", templates=(Template("a", "all"),), min_args=1, max_args=1)
        parser = PosixParser(descriptor)
        self.assertIs(parser.descriptor, descriptor)
        command = parser.parse(["-a", "x"])
        self.assertIsNone(command.get_option("a").long_name)
        self.assertEqual(command.name, "tool")

    def testRequiredChecksSkippedWhenArgumentsStart(self):
        group = Group(Template("a"), Template("b"), required=True)
        descriptor = Descriptor(templates=(Template("c", required=True),), groups=(group,), max_args=1)
        self.assertEqual(parse_posix(descriptor, ["x"]).arguments, ("x",))
        self.assertEqual(parse_posix(descriptor, ["--", "-c"]).arguments, ("-c",))
        with self.assertRaises(MissingOptionError):
            parse_posix(descriptor, ["-a"])

    def testGroupsSurviveSanitization(self):
        group = Group(Template("a"), Template("b"), required=True)
        descriptor = Descriptor(groups=(group,))
        with self.assertRaises(ExclusiveOptionsError):
            parse_posix(descriptor, ["-ab"])
        with self.assertRaises(MissingGroupError):
            parse_posix(descriptor, [])
        self.assertTrue(parse_posix(descriptor, ["-b"]).has_option("b"))

    def testValueBoundsStillApply(self):
        descriptor = Descriptor(templates=(Template("f", min_values=1, max_values=1),))
        with self.assertRaises(MissingValueError):
            parse_posix(descriptor, ["-f"])

    def testArgumentBoundsStillApply(self):
        with self.assertRaises(TooManyArgumentsError):
            parse_posix(Descriptor(templates=(Template("a"),)), ["-a", "x"])

    def testDeterministic(self):
        parser = PosixParser(Descriptor(templates=(Template("a"), Template("b", max_values=1)), max_args=1))
        self.assertEqual(parser.parse(["-ab", "1", "x"]), parser.parse(["-ab", "1", "x"]))

    def testTryParsePosix(self):
        descriptor = Descriptor(templates=(Template("a"),))
        self.assertIsInstance(try_parse(descriptor, ["-z"], posix=True), UnrecognizedTokenError)
        self.assertTrue(try_parse(descriptor, ["-a"], posix=True).has_option("a"))

    def testStringTokensRejected(self):
        with self.assertRaises(TypeError):
            parse_posix(Descriptor(), "-a")


if __name__ == "__main__":
    unittest.main()
