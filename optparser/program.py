"""
Program: the definition-and-parse facade.

What this module provides
- Program: holds the registry and the usages of one command-line program,
  exposes a fluent definition API, parses argument vectors and applies the
  error policy.

Definition rules
- options (commands, terms, flags, params) are declared first; declaring one
  after the first usage raises RegistrationClosedError.
- the built-in help usage ([--help]) is always the first usage and is only
  used for help output.
- a usage names at most one command (MultipleCommandsError).
- either every usage names a command, or the program has exactly one
  command-less usage (UsageMismatchError).

Runtime options
- shell: on errors print the report on stderr and exit(1), on help print
  the help block and exit(0); when False, UsageExit is raised and the help
  path returns a Result with help_requested set.
- colorful: style the error report (see UsageExit).

Quick start
    program = (
        Program("User Manager", "A program to manage user accounts")
        .add_command(["add", "a"], "Add a new user")
        .add_term("username", "STRING", "Username of the user")
        .add_param(["p", "password"], "STRING", "Password for the user")
        .add_usage(["add", "username", "password"])
    )
    result = program.parse()   # sys.argv
    result.command, result.username, result.password
"""
import logging
import os.path
import sys

from rich.console import Console

from .faults import RegistrationClosedError, UsageMismatchError, UsageExit
from .help import format_help
from .matcher import match
from .registry import OptionRegistry, HELP
from .tokenizer import tokenize
from .usage import Usage
from .utils import mirror

logger = logging.getLogger(__name__)

console = Console(highlight=False)


class Program:
    """
    a command-line program described by options and usages.
    """

    name = mirror("name")
    description = mirror("description")
    registry = mirror("registry")
    usages = mirror("usages")
    shell = mirror("shell")
    colorful = mirror("colorful")

    def __init__(self, name, description="", *, shell=True, colorful=True):
        if not isinstance(name, str):
            raise TypeError("program name must be a string")
        elif not (name := name.strip()):
            raise ValueError("program name cannot be empty")
        if not isinstance(description, str):
            raise TypeError("program description must be a string")

        self._name = name
        self._description = description.strip()
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._registry = OptionRegistry()
        self._usages = [Usage(self._registry, [HELP])]
        self._commanded = None

    def _ensure_open(self, kind, /):
        if len(self._usages) > 1:
            raise RegistrationClosedError("cannot add %ss after usages" % kind, kind=kind)

    def add_command(self, aliases, description):
        """
        declare a command word; returns self for chaining.
        """
        self._ensure_open("command")
        self._registry.add_command(aliases, description)
        return self

    def add_term(self, name, type, description, validator=None):
        """
        declare a positional term; returns self for chaining.

        validator, when given, receives the cast value and returns the value
        to bind. it rejects by raising ValueError or TypeError, reported as a
        "rejected" fault; any other exception propagates out of parse().
        """
        self._ensure_open("term")
        self._registry.add_term(name, type, description, validator)
        return self

    def add_flag(self, aliases, description):
        """
        declare a flag; returns self for chaining.
        """
        self._ensure_open("flag")
        self._registry.add_flag(aliases, description)
        return self

    def add_param(self, aliases, type, description, validator=None):
        """
        declare a param; returns self for chaining.

        validator follows the same contract as in add_term().
        """
        self._ensure_open("param")
        self._registry.add_param(aliases, type, description, validator)
        return self

    def add_usage(self, names):
        """
        declare a usage from canonical option names; returns self for chaining.
        """
        usage = Usage(self._registry, names)
        commanded = usage.command is not None

        if self._commanded is not None and not (self._commanded and commanded):
            raise UsageMismatchError("must define command for each usage", usage=usage)

        self._commanded = commanded
        self._usages.append(usage)
        logger.debug("declared %r", usage)
        return self

    def add_usage_all(self):
        """
        declare one usage made of every registered option except help.
        """
        return self.add_usage([name for name in self._registry.get_all_names() if name != HELP])

    def format_help(self, program=None, /):
        """
        the help block; program defaults to the running script's name.
        """
        program = program or os.path.basename(sys.argv[0]) or self._name
        return format_help(self._name, self._description, program, self._usages, self._registry)

    def parse(self, argv=None, /, *, check=True):
        """
        tokenize and match an argument vector (sys.argv by default).

        parameters
        - argv: sequence of str whose first item is the program path.
        - check: apply check_result() before returning.

        returns
        - Result (errors included when check is False).
        """
        tokens = tokenize(sys.argv if argv is None else argv)
        logger.debug("parsing %d marked, %d unmarked, %d literal token(s)",
                      len(tokens.marked), len(tokens.unmarked), len(tokens.literal))

        result = match(tokens, self._registry, self._usages[1:])

        if result.help_requested:
            if self._shell:
                console.print(self.format_help(tokens.program), markup=False, end="")
                sys.exit(0)
            return result

        if check:
            self.check_result(result)
        return result

    def check_result(self, result, /):
        """
        apply the error policy to a Result.

        no faults → return. otherwise a UsageExit is built from the faults and
        triggered: printed with exit(1) in shell mode, raised otherwise.
        """
        if not result.faults:
            return
        logger.info("%d error(s) found in matching usage", len(result.faults))
        UsageExit(
            result.faults,
            program=result.program or self._name,
            command=result.command,
            shell=self._shell,
            colorful=self._colorful,
        ).__trigger__()

    def __rich_repr__(self):
        yield "name", self._name
        yield "description", self._description
        yield "usages", tuple(self._usages)

    def __repr__(self):
        return "program(%s)" % ", ".join("%s=%r" % field for field in self.__rich_repr__())


__all__ = (
    "Program",
)
