"""
Usage declaration tests.

Scope
- Validate role partitioning, term order and the single-command rule.
- Validate the rendered usage line.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optparser import OptionRegistry, OptionKind, Usage, MultipleCommandsError, UnknownOptionError


def registry():
    registry = OptionRegistry()
    registry.add_command(["add", "a"], "Add a user")
    registry.add_command(["delete", "d"], "Delete a user")
    registry.add_term("username", "STRING", "Username")
    registry.add_term("email", "EMAIL", "Email")
    registry.add_flag(["v", "verbose"], "Verbose")
    registry.add_param(["p", "password"], "STRING", "Password")
    return registry


class TestUsage(TestCase):
    """Behavioral tests for Usage."""

    def setUp(self):
        self.registry = registry()

    def testPartitionByRole(self):
        usage = Usage(self.registry, ["password", "add", "email", "verbose", "username"])
        self.assertEqual(usage.command, "add")
        self.assertEqual(usage.terms, ("email", "username"))
        self.assertEqual(usage.flags, ("verbose",))
        self.assertEqual(usage.params, ("password",))
        self.assertEqual(usage.get_options(OptionKind.COMMAND), ("add",))
        self.assertIn("password", usage)

    def testCommandLessUsage(self):
        usage = Usage(self.registry, ["username"])
        self.assertIsNone(usage.command)
        self.assertEqual(usage.commands, ())

    def testRepeatedNamesCollapse(self):
        usage = Usage(self.registry, ["add", "username", "username"])
        self.assertEqual(usage.terms, ("username",))

    def testMultipleCommandsRaise(self):
        with self.assertRaises(MultipleCommandsError):
            Usage(self.registry, ["add", "delete", "username"])

    def testUnknownNameRaises(self):
        with self.assertRaises(UnknownOptionError):
            Usage(self.registry, ["add", "a"])

    def testWrite(self):
        usage = Usage(self.registry, ["add", "username", "email", "verbose", "password"])
        self.assertEqual(
            usage.write("tool"),
            "tool add username:STRING email:EMAIL [--verbose] [--password=STRING]",
        )

    def testWriteHelp(self):
        self.assertEqual(Usage(self.registry, ["help"]).write("tool"), "tool [--help]")


if __name__ == "__main__":
    unittest.main()
