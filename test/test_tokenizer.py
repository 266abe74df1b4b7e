"""
Tokenizer behavioral tests.

Scope
- Validate the "--" split, short-flag bundling, value joining and the
  marked/unmarked classification.
- Validate program-name extraction and the empty-vector error.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optparser import tokenize, MissingProgramNameError


class TestSplit(TestCase):
    """Behavioral tests for the literal "--" separator."""

    def testLiteralTokensAreVerbatim(self):
        tokens = tokenize(["tool", "add", "--", "-x", "--name=value", "plain"])
        self.assertEqual(tokens.literal, ["-x", "--name=value", "plain"])
        self.assertEqual(tokens.marked, {})
        self.assertEqual(tokens.unmarked, ["add"])

    def testOnlyFirstSeparatorSplits(self):
        tokens = tokenize(["tool", "--", "a", "--", "b"])
        self.assertEqual(tokens.literal, ["a", "--", "b"])

    def testNoSeparatorMeansNoLiterals(self):
        tokens = tokenize(["tool", "a", "b"])
        self.assertEqual(tokens.literal, [])
        self.assertEqual(tokens.unmarked, ["a", "b"])


class TestBundling(TestCase):
    """Behavioral tests for "-abc" explosion."""

    def testBundleExplodesInOrder(self):
        tokens = tokenize(["tool", "-abc"])
        self.assertEqual(list(tokens.marked), ["a", "b", "c"])
        self.assertTrue(all(value is None for value in tokens.marked.values()))

    def testBundleJoinsValueToLastFlagOnly(self):
        tokens = tokenize(["tool", "-abc", "val"])
        self.assertEqual(tokens.marked, {"a": None, "b": None, "c": "val"})
        self.assertEqual(tokens.unmarked, [])

    def testBundleWithEqualsIsNotExploded(self):
        tokens = tokenize(["tool", "-ab=1"])
        self.assertEqual(tokens.unmarked, ["-ab=1"])
        self.assertEqual(tokens.marked, {})


class TestJoining(TestCase):
    """Behavioral tests for "-x value" and "--name value" joining."""

    def testShortOptionJoinsNextToken(self):
        tokens = tokenize(["tool", "-a", "val"])
        self.assertEqual(tokens.marked, {"a": "val"})

    def testLongOptionJoinsNextToken(self):
        tokens = tokenize(["tool", "--password", "secret", "john"])
        self.assertEqual(tokens.marked, {"password": "secret"})
        self.assertEqual(tokens.unmarked, ["john"])

    def testNextOptionIsNotJoined(self):
        tokens = tokenize(["tool", "--verbose", "--quiet"])
        self.assertEqual(tokens.marked, {"verbose": None, "quiet": None})

    def testInlineValueIsNotJoinedAgain(self):
        tokens = tokenize(["tool", "--password=secret", "john"])
        self.assertEqual(tokens.marked, {"password": "secret"})
        self.assertEqual(tokens.unmarked, ["john"])

    def testTrailingOptionKeepsNoValue(self):
        tokens = tokenize(["tool", "john", "--verbose"])
        self.assertEqual(tokens.marked, {"verbose": None})


class TestClassification(TestCase):
    """Behavioral tests for marked/unmarked classification."""

    def testEmptyInlineValueIsEmptyString(self):
        tokens = tokenize(["tool", "--name="])
        self.assertEqual(tokens.marked, {"name": ""})

    def testLastOccurrenceWins(self):
        tokens = tokenize(["tool", "--role=admin", "--role=user"])
        self.assertEqual(tokens.marked, {"role": "user"})

    def testHyphenatedNames(self):
        tokens = tokenize(["tool", "--dry-run"])
        self.assertEqual(tokens.marked, {"dry-run": None})

    def testUppercaseOptionIsUnmarked(self):
        tokens = tokenize(["tool", "--Name=x", "-X"])
        self.assertEqual(tokens.marked, {})
        self.assertEqual(tokens.unmarked, ["--Name=x", "-X"])

    def testLoneDashIsUnmarked(self):
        tokens = tokenize(["tool", "-"])
        self.assertEqual(tokens.unmarked, ["-"])

    def testValueMayContainEquals(self):
        tokens = tokenize(["tool", "--filter=a=b"])
        self.assertEqual(tokens.marked, {"filter": "a=b"})


class TestProgramName(TestCase):
    """Behavioral tests for the program name."""

    def testProgramIsBaseFilename(self):
        self.assertEqual(tokenize(["/usr/local/bin/tool", "x"]).program, "tool")

    def testEmptyVectorRaises(self):
        with self.assertRaises(MissingProgramNameError):
            tokenize([])

    def testEmptyProgramRaises(self):
        with self.assertRaises(MissingProgramNameError):
            tokenize([""])


if __name__ == "__main__":
    unittest.main()
