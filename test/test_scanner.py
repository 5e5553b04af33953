"""
Scanner behavioral tests.

Scope
- Token classification: positionals, the "-" terminator, long options, short clusters.
- Value rules: '=' only for long forms, next token only for short forms.
- Fatal faults (raised as ParseError subclasses) and the empty inline value warning.

Conventions
- Every test builds its own registry; sinks are read through `.value`.
"""
import unittest
from unittest import TestCase

from gnuopts import (
    Flag,
    RequiredValue,
    OptionalValue,
    Repeatable,
    Registry,
    FaultCode,
    UnknownOptionError,
    MissingArgumentError,
    UnexpectedArgumentError,
    EmptyInlineValueWarning,
)
from gnuopts.scanner import Scanner


class TestScanner(TestCase):
    """Behavioral tests for Scanner.scan()."""

    def setUp(self):
        self.registry = Registry()
        self.warnings = []
        self.scanner = Scanner(self.registry, self.warnings.append)

    def declare(self, descriptor):
        return self.registry.register(descriptor).sink

    def testInvocationNameSkipped(self):
        state = self.scanner.scan(["-x"])
        self.assertEqual(state.positionals, [])
        self.assertEqual(state.consumed, 1)

    def testUntouchedSinksKeepInitialValues(self):
        verbose = self.declare(Flag("-v", "--verbose"))
        output = self.declare(RequiredValue("-o", "--output", default="-"))
        self.scanner.scan(["prog", "file"])
        self.assertIs(verbose.value, False)
        self.assertEqual(output.value, "-")

    def testClusterWithTrailingValue(self):
        a = self.declare(Flag("-a"))
        b = self.declare(Flag("-b"))
        c = self.declare(RequiredValue("-c"))
        state = self.scanner.scan(["prog", "-abc", "x"])
        self.assertIs(a.value, True)
        self.assertIs(b.value, True)
        self.assertEqual(c.value, "x")
        self.assertEqual(state.positionals, [])
        self.assertEqual(state.consumed, 3)

    def testLongValueWithEquals(self):
        format = self.declare(RequiredValue("-f", "--format"))
        self.scanner.scan(["prog", "--format=csv"])
        self.assertEqual(format.value, "csv")

    def testLongValueSplitsOnFirstEquals(self):
        define = self.declare(RequiredValue("--define"))
        self.scanner.scan(["prog", "--define=key=value"])
        self.assertEqual(define.value, "key=value")

    def testLongValueWithoutEqualsIsMissing(self):
        self.declare(RequiredValue("-f", "--format"))
        with self.assertRaises(MissingArgumentError) as context:
            self.scanner.scan(["prog", "--format", "csv"])
        self.assertEqual(context.exception.form, "--format")
        self.assertEqual(context.exception.code, FaultCode.MISSING_ARGUMENT)

    def testRepeatableAccumulatesInOrder(self):
        include = self.declare(Repeatable("-I", "--include"))
        self.scanner.scan(["prog", "-I", "a", "--include=b", "-I", "c"])
        self.assertEqual(include.value, ["a", "b", "c"])

    def testRepeatableLongWithoutEqualsIsMissing(self):
        self.declare(Repeatable("-I", "--include"))
        with self.assertRaises(MissingArgumentError):
            self.scanner.scan(["prog", "--include"])

    def testRepeatableNotLastInCluster(self):
        include = self.declare(Repeatable("-I"))
        self.declare(Flag("-v"))
        with self.assertRaises(MissingArgumentError) as context:
            self.scanner.scan(["prog", "-Iv", "path"])
        self.assertEqual(context.exception.form, "-I")
        self.assertEqual(include.value, [])

    def testRepeatableShortAtEndOfInput(self):
        include = self.declare(Repeatable("-I"))
        with self.assertRaises(MissingArgumentError) as context:
            self.scanner.scan(["prog", "-I", "a", "-I"])
        self.assertEqual(context.exception.form, "-I")
        self.assertEqual(include.value, ["a"])

    def testRepeatableShortRejectsOptionLikeToken(self):
        include = self.declare(Repeatable("-I"))
        self.declare(Flag("-v"))
        with self.assertRaises(MissingArgumentError) as context:
            self.scanner.scan(["prog", "-I", "-v"])
        self.assertEqual(context.exception.form, "-I")
        self.assertEqual(include.value, [])

    def testRepeatableClosingCluster(self):
        include = self.declare(Repeatable("-I"))
        verbose = self.declare(Flag("-v"))
        state = self.scanner.scan(["prog", "-vI", "a", "-vI", "b", "c"])
        self.assertIs(verbose.value, True)
        self.assertEqual(include.value, ["a", "b"])
        self.assertEqual(state.positionals, ["c"])

    def testDashTerminatesOptions(self):
        self.declare(Flag("-h"))
        state = self.scanner.scan(["prog", "-h", "-", "-x"])
        self.assertTrue(state.terminated)
        self.assertEqual(state.positionals, ["-x"])

    def testPositionalsKeepOrderAndDuplicates(self):
        verbose = self.declare(Flag("-v"))
        state = self.scanner.scan(["prog", "a", "-v", "a", "b", "-", "-v", "-", "a"])
        self.assertIs(verbose.value, True)
        self.assertEqual(state.positionals, ["a", "a", "b", "-v", "-", "a"])

    def testDoubleDashIsUnknownUnlessDeclared(self):
        with self.assertRaises(UnknownOptionError) as context:
            self.scanner.scan(["prog", "--"])
        self.assertEqual(context.exception.form, "--")

    def testUnknownLongOption(self):
        with self.assertRaises(UnknownOptionError) as context:
            self.scanner.scan(["prog", "--nope=1"])
        self.assertEqual(context.exception.form, "--nope")
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_OPTION)

    def testUnknownShortInCluster(self):
        self.declare(Flag("-v"))
        with self.assertRaises(UnknownOptionError) as context:
            self.scanner.scan(["prog", "-vq"])
        self.assertEqual(context.exception.form, "-q")

    def testFlagRejectsInlineValue(self):
        self.declare(Flag("-v", "--verbose"))
        with self.assertRaises(UnexpectedArgumentError) as context:
            self.scanner.scan(["prog", "--verbose=yes"])
        self.assertEqual(context.exception.form, "--verbose")
        self.assertEqual(context.exception.code, FaultCode.UNEXPECTED_ARGUMENT)

    def testValueOptionNotLastInCluster(self):
        self.declare(RequiredValue("-a"))
        self.declare(Flag("-b"))
        with self.assertRaises(MissingArgumentError) as context:
            self.scanner.scan(["prog", "-ab", "value"])
        self.assertEqual(context.exception.form, "-a")

    def testShortValueAtEndOfInput(self):
        self.declare(RequiredValue("-f"))
        with self.assertRaises(MissingArgumentError):
            self.scanner.scan(["prog", "-f"])

    def testShortValueRejectsOptionLikeToken(self):
        self.declare(RequiredValue("-f"))
        self.declare(Flag("-v"))
        with self.assertRaises(MissingArgumentError):
            self.scanner.scan(["prog", "-f", "-v"])

    def testShortValueAcceptsBareDash(self):
        output = self.declare(RequiredValue("-o"))
        state = self.scanner.scan(["prog", "-o", "-", "file"])
        self.assertEqual(output.value, "-")
        self.assertFalse(state.terminated)
        self.assertEqual(state.positionals, ["file"])

    def testScanningHaltsAtFirstFault(self):
        include = self.declare(Repeatable("-I"))
        with self.assertRaises(UnknownOptionError):
            self.scanner.scan(["prog", "-I", "a", "-x", "-I", "b"])
        self.assertEqual(include.value, ["a"])

    def testOptionalValueForms(self):
        color = self.declare(OptionalValue("-c", "--color", absent="auto", given="always"))
        self.scanner.scan(["prog", "--color=never"])
        self.assertEqual(color.value, "never")

    def testOptionalValueLongWithoutValue(self):
        color = self.declare(OptionalValue("-c", "--color", absent="auto", given="always"))
        self.scanner.scan(["prog", "--color"])
        self.assertEqual(color.value, "always")

    def testOptionalValueShortNeverConsumes(self):
        color = self.declare(OptionalValue("-c", "--color", absent="auto", given="always"))
        verbose = self.declare(Flag("-v"))
        state = self.scanner.scan(["prog", "-cv", "never"])
        self.assertEqual(color.value, "always")
        self.assertIs(verbose.value, True)
        self.assertEqual(state.positionals, ["never"])

    def testOptionalValueAbsent(self):
        color = self.declare(OptionalValue("--color", absent="auto", given="always"))
        self.scanner.scan(["prog"])
        self.assertEqual(color.value, "auto")

    def testLastRegistrationWins(self):
        verbose = self.declare(Flag("-v", "--verbose"))
        version = self.declare(Flag("-v", "--version"))
        self.scanner.scan(["prog", "-v"])
        self.assertIs(version.value, True)
        self.assertIs(verbose.value, False)

    def testEmptyInlineValueWarns(self):
        format = self.declare(RequiredValue("--format", default="csv"))
        self.scanner.scan(["prog", "--format="])
        self.assertEqual(format.value, "")
        self.assertEqual(len(self.warnings), 1)
        self.assertIsInstance(self.warnings[0], EmptyInlineValueWarning)
        self.assertEqual(self.warnings[0].form, "--format")
        self.assertEqual(self.warnings[0].code, FaultCode.EMPTY_INLINE_VALUE)

    def testNonEmptyInlineValueDoesNotWarn(self):
        self.declare(RequiredValue("--format"))
        self.scanner.scan(["prog", "--format=csv"])
        self.assertEqual(self.warnings, [])


if __name__ == "__main__":
    unittest.main()
