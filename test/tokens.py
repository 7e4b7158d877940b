# python
"""
TokenStream behavioral tests: peek/pop/push cursor semantics and flag shape.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from verbum.tokens import TokenStream, looks_like_flag


class TestTokenStream(TestCase):

    def testPeekDoesNotConsume(self):
        tokens = TokenStream(["a", "b"])
        self.assertEqual(tokens.peek(), "a")
        self.assertEqual(tokens.peek(), "a")
        self.assertEqual(len(tokens), 2)

    def testPopAdvances(self):
        tokens = TokenStream(["a", "b"])
        self.assertEqual(tokens.pop(), "a")
        self.assertEqual(tokens.consumed, 1)
        self.assertEqual(list(tokens), ["b"])

    def testExhaustedStream(self):
        tokens = TokenStream(["a"])
        tokens.pop()
        self.assertFalse(tokens)
        self.assertIsNone(tokens.peek())
        with self.assertRaises(IndexError):
            tokens.pop()

    def testPushRewindsLastPopped(self):
        tokens = TokenStream(["a", "b"])
        token = tokens.pop()
        tokens.push(token)
        self.assertEqual(tokens.consumed, 0)
        self.assertEqual(tokens.peek(), "a")

    def testPushRejectsForeignToken(self):
        tokens = TokenStream(["a", "b"])
        tokens.pop()
        with self.assertRaises(ValueError):
            tokens.push("z")

    def testPushBeforeAnyPopRejected(self):
        with self.assertRaises(ValueError):
            TokenStream(["a"]).push("a")

    def testSourceIsNeverModified(self):
        source = ["a", "b"]
        tokens = TokenStream(source)
        tokens.pop()
        tokens.pop()
        self.assertEqual(source, ["a", "b"])

    def testNonStringTokensRejected(self):
        with self.assertRaises(TypeError):
            TokenStream(["a", 1])

    def testEmptyStringsAreKept(self):
        tokens = TokenStream(["", "x"])
        self.assertEqual(tokens.pop(), "")
        self.assertEqual(len(tokens), 1)


class TestFlagShape(TestCase):

    def testFlagShapedTokens(self):
        for token in ("-q", "--quiet", "-", "--", "-8"):
            self.assertTrue(looks_like_flag(token), token)

    def testValueShapedTokens(self):
        for token in ("quiet", "8", "", "a-b"):
            self.assertFalse(looks_like_flag(token), token)


if __name__ == "__main__":
    unittest.main()
