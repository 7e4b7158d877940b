# python
"""
Fault model behavioral tests: codes, option merging, raising versus warning,
and rich rendering.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
import warnings
from unittest import TestCase

from rich.console import Group
from rich.panel import Panel

from verbum import (
    FaultCode,
    MissingValueWarning,
    ParseError,
    RegistrationError,
    UncastableValueWarning,
    UnknownOptionError,
    UnknownVerbError,
    UnsupportedTypeError,
    VerbException,
    VerbWarning,
    trigger,
)
from verbum.faults import console


class TestFaultCode(TestCase):

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.UNKNOWN_VERB, 11101)
        self.assertEqual(FaultCode.UNKNOWN_OPTION, 11112)
        self.assertEqual(FaultCode.UNCASTABLE_VALUE, 12111)
        self.assertEqual(FaultCode.UNSUPPORTED_TYPE, 11206)

    def testNormalizeFallsBackToNumber(self):
        self.assertEqual(FaultCode.AMBIGUOUS_VERB.normalize(), "11201")

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))


class TestHierarchy(TestCase):

    def testParseErrors(self):
        self.assertTrue(issubclass(UnknownVerbError, ParseError))
        self.assertTrue(issubclass(ParseError, VerbException))
        self.assertFalse(issubclass(UnknownVerbError, RegistrationError))
        self.assertTrue(issubclass(UnsupportedTypeError, RegistrationError))

    def testWarnings(self):
        self.assertTrue(issubclass(UncastableValueWarning, VerbWarning))
        self.assertTrue(issubclass(VerbWarning, Warning))


class TestReplace(TestCase):

    def testOptionsAreReadOnly(self):
        fault = UnknownVerbError("unknown verb 'x'", token="x")
        with self.assertRaises(TypeError):
            fault.options["token"] = "y"

    def testReplaceMergesOptions(self):
        fault = UnknownVerbError("unknown verb 'x'", token="x", shell=True)
        replaced = fault.__replace__(shell=False, prog="tool")
        self.assertIsInstance(replaced, UnknownVerbError)
        self.assertIsNot(replaced, fault)
        self.assertEqual(dict(replaced.options), {"token": "x", "shell": False, "prog": "tool"})
        self.assertEqual(replaced.message, fault.message)


class TestTrigger(TestCase):

    def testExceptionIsRaisedOutsideShell(self):
        with self.assertRaises(UnknownOptionError) as context:
            trigger(UnknownOptionError("unable to find option '--x'", token="--x"), verb="do")
        self.assertEqual(context.exception.options["verb"], "do")

    def testWarningIsWarnedOutsideShell(self):
        with self.assertWarns(MissingValueWarning) as context:
            trigger(MissingValueWarning("option '-l' expects a value"), verb="do")
        self.assertEqual(context.warning.options["verb"], "do")

    def testWarningInShellIsPrinted(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with console.capture() as capture:
                trigger(UncastableValueWarning("bad value", title="uncastable value", hint="pass a number"), shell=True)
        output = capture.get()
        self.assertIn("Uncastable Value", output)
        self.assertIn("bad value", output)
        self.assertIn("pass a number", output)

    def testNonFaultRejected(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestRendering(TestCase):

    def testPlainGroup(self):
        fault = UnknownVerbError("unknown verb 'x'", code=FaultCode.UNKNOWN_VERB, prog="tool")
        self.assertIsInstance(fault.__rich__(), Group)

    def testFancyPanel(self):
        fault = UnknownVerbError("unknown verb 'x'", code=FaultCode.UNKNOWN_VERB, fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)

    def testRenderedHeader(self):
        fault = UnknownVerbError("unknown verb 'x'", title="unknown verb", code=FaultCode.UNKNOWN_VERB, prog="tool")
        with console.capture() as capture:
            console.print(fault)
        output = capture.get()
        self.assertIn("11101 | Unknown Verb", output)
        self.assertIn("unknown verb 'x'", output)


if __name__ == "__main__":
    unittest.main()
