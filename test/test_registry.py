"""
Option registry tests.

Scope
- Validate canonical-name selection, alias uniqueness across kinds and
  alias format checks.
- Validate lookups, registration order and the built-in help flag.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optparser import (
    OptionRegistry,
    OptionKind,
    ArgType,
    Command,
    Param,
    DuplicateAliasError,
    MissingLongNameError,
    InvalidAliasFormatError,
    UnknownOptionError,
    UnsupportedTypeError,
)


class TestCanonicalNames(TestCase):
    """Behavioral tests for canonical name selection."""

    def setUp(self):
        self.registry = OptionRegistry()

    def testFirstLongAliasIsCanonical(self):
        param = self.registry.add_param(["p", "pw", "password"], "STRING", "Password")
        self.assertEqual(param.name, "pw")
        self.assertEqual(param.aliases, ("p", "password"))

    def testLongerLaterAliasDoesNotWin(self):
        command = self.registry.add_command(["add", "append", "a"], "Add a user")
        self.assertEqual(command.name, "add")
        self.assertEqual(command.aliases, ("append", "a"))
        self.assertEqual(self.registry.get_option_type("add"), "command")
        with self.assertRaises(UnknownOptionError):
            self.registry.get_option("append")

    def testSingleCharacterAliasesRaise(self):
        with self.assertRaises(MissingLongNameError):
            self.registry.add_flag(["v", "x"], "Verbose")

    def testFailedRegistrationReservesNothing(self):
        with self.assertRaises(MissingLongNameError):
            self.registry.add_flag(["v"], "Verbose")
        flag = self.registry.add_flag(["v", "verbose"], "Verbose")
        self.assertEqual(flag.name, "verbose")


class TestAliases(TestCase):
    """Behavioral tests for the shared alias namespace."""

    def setUp(self):
        self.registry = OptionRegistry()
        self.registry.add_command(["add", "a"], "Add a user")

    def testDuplicateAcrossKindsRaises(self):
        with self.assertRaises(DuplicateAliasError):
            self.registry.add_term("add", "STRING", "Shadowing term")
        with self.assertRaises(DuplicateAliasError):
            self.registry.add_flag(["a", "all"], "Shadowing flag")

    def testDuplicateWithinOneRegistrationRaises(self):
        with self.assertRaises(DuplicateAliasError):
            self.registry.add_param(["role", "role"], "STRING", "Role")

    def testHelpAliasesAreReserved(self):
        with self.assertRaises(DuplicateAliasError):
            self.registry.add_param(["h", "host"], "DOMAIN", "Host")

    def testInvalidAliasFormatRaises(self):
        for alias in ("Name", "dry_run", "-x", "1st", "trailing-", ""):
            with self.subTest(alias=alias), self.assertRaises(InvalidAliasFormatError):
                self.registry.add_flag([alias, "valid-name"], "Bad alias")

    def testHyphenatedNamesAreAccepted(self):
        flag = self.registry.add_flag(["dry-run", "n"], "Dry run")
        self.assertEqual(flag.name, "dry-run")
        self.assertEqual(flag.write(), "--dry-run")

    def testUnsupportedTypeRaises(self):
        with self.assertRaises(UnsupportedTypeError):
            self.registry.add_term("count", "NUMBER", "Count")


class TestLookups(TestCase):
    """Behavioral tests for lookups and enumeration."""

    def setUp(self):
        self.registry = OptionRegistry()
        self.registry.add_command(["add", "a"], "Add a user")
        self.registry.add_term("username", "STRING", "Username")
        self.registry.add_flag(["v", "verbose"], "Verbose")
        self.registry.add_param(["p", "password"], ArgType.STRING, "Password")

    def testHelpIsPreregistered(self):
        self.assertEqual(self.registry.help.name, "help")
        self.assertEqual(self.registry.help.aliases, ("h",))
        self.assertIs(self.registry.get_option_type("help"), OptionKind.FLAG)

    def testAllNamesInRegistrationOrder(self):
        self.assertEqual(
            self.registry.get_all_names(),
            ["help", "add", "username", "verbose", "password"],
        )
        self.assertEqual(len(self.registry), 5)

    def testGetOptionAndType(self):
        self.assertIsInstance(self.registry.get_option("add"), Command)
        self.assertIsInstance(self.registry.get_option("password"), Param)
        self.assertIs(self.registry.get_option_type("username"), OptionKind.TERM)

    def testUnknownNameRaises(self):
        with self.assertRaises(UnknownOptionError):
            self.registry.get_option("missing")
        with self.assertRaises(UnknownOptionError):
            self.registry.get_option_type("a")

    def testFindResolvesAliases(self):
        self.assertEqual(self.registry.find("p").name, "password")
        self.assertEqual(self.registry.find("add").name, "add")
        self.assertIsNone(self.registry.find("x"))

    def testOptionsByKind(self):
        self.assertTrue(self.registry.has_option_type(OptionKind.PARAM))
        self.assertEqual([option.name for option in self.registry.options("flag")], ["help", "verbose"])
        self.assertIn("username", self.registry)
        self.assertNotIn("u", self.registry)


if __name__ == "__main__":
    unittest.main()
