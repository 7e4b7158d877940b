"""
Tests for the internal helpers.

This module verifies the guarantees the other layers rely on:
- Unset is a falsy singleton distinct from None, usable in type unions.
- coalesce() only replaces Unset.
- mirror() exposes read-only copies of container state.
- mglob() expands registry source strings into importable module names.
"""
import copy
import unittest
from unittest import TestCase

from verbum.utils import *


class Holder:
    names = mirror("names")
    pair = mirror("pair")
    tags = mirror("tags")

    def __init__(self):
        self._names = ["a", "b"]
        self._pair = ("x", "y")
        self._tags = {"x"}


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        """
        `str | Unset` builds a union accepted by isinstance().
        """
        self.assertIsInstance("x", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(3, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)


class HelpersTest(TestCase):

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertIsNone(coalesce(Unset))

    def testMirrorReturnsCopies(self) -> None:
        holder = Holder()
        holder.names.append("c")
        self.assertEqual(holder.names, ["a", "b"])

    def testMirrorCopiesSets(self) -> None:
        holder = Holder()
        holder.tags.add("z")
        self.assertEqual(holder.tags, {"x"})

    def testMirrorKeepsTuples(self) -> None:
        holder = Holder()
        self.assertIs(holder.pair, holder._pair)

    def testMirrorIsReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            Holder().names = []

    def testRename(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")


class GlobTest(TestCase):

    def testConcreteNameIsReturnedUnchanged(self) -> None:
        self.assertEqual(mglob("verbum.app"), ["verbum.app"])

    def testWildcardExpandsChildren(self) -> None:
        matches = mglob("verbum.*")
        self.assertIn("verbum.app", matches)
        self.assertIn("verbum.binder", matches)
        self.assertEqual(matches, sorted(matches))

    def testUnimportablePrefix(self) -> None:
        self.assertEqual(mglob("nowhere_at_all.*"), [])

    def testWildcardOnlyRejected(self) -> None:
        with self.assertRaises(ValueError):
            mglob("*.verbs")

    def testEmptyRejected(self) -> None:
        with self.assertRaises(ValueError):
            mglob("  ")

    def testRecursiveWildcard(self) -> None:
        self.assertIn("verbum.tokens", mglob("verbum.**"))

    def testWildcardOnPlainModuleIsEmpty(self) -> None:
        self.assertEqual(mglob("verbum.app.*"), [])

    def testInnerWildcardRejected(self) -> None:
        with self.assertRaises(ValueError):
            mglob("verbum.*.verbs")


if __name__ == "__main__":
    unittest.main()
