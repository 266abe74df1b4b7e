"""
Optparser faults (errors raised while defining a grammar, faults collected
while matching one) and their rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault. Codes are
  grouped by domain so logs and searches stay predictable.
- GrammarError: base for definition-time errors. These are raised at once;
  a broken grammar is a programming error of the host application.
- BadArgumentError / RejectedArgumentError: raised by the value caster when a
  raw string cannot be cast, or when the caller's validator rejects it.
- UsageFault: base for parse-time faults. The matcher never raises them; it
  collects them in the Result so the user sees every problem in one report.
- UsageExit: an exception group bundling the faults of one parse, able to
  render itself with rich and to terminate the process in shell mode.

Integration
- Program.check_result() builds a UsageExit from a failed Result and calls
  its __trigger__(): in shell mode the report is printed on stderr and the
  process exits with status 1, otherwise the group is raised.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - parsing (11xxx)
      • routing: MISSING_COMMAND, NO_MATCHING_USAGE
      • named options: FLAG_ARGUMENT, MISSING_PARAM_VALUE, UNUSED_OPTION
      • positionals: MISSING_TERM, UNUSED_INPUT
      • values: UNCASTABLE_VALUE, REJECTED_VALUE
    - casting (12xxx)
      • BAD_ARGUMENT, REJECTED_ARGUMENT
    - grammar definition (21xxx)
      • aliases: DUPLICATE_ALIAS, MISSING_LONG_NAME, INVALID_ALIAS_FORMAT
      • options: UNSUPPORTED_TYPE, UNKNOWN_OPTION, REGISTRATION_CLOSED
      • usages: MULTIPLE_COMMANDS, USAGE_MISMATCH
      • input: MISSING_PROGRAM_NAME
    """
    # --- routing faults (1110x) ---
    MISSING_COMMAND         = 11101
    NO_MATCHING_USAGE       = 11102

    # --- named option faults (1111x) ---
    FLAG_ARGUMENT           = 11111
    MISSING_PARAM_VALUE     = 11112
    UNUSED_OPTION           = 11113

    # --- positional faults (1112x) ---
    MISSING_TERM            = 11121
    UNUSED_INPUT            = 11122

    # --- value faults (1113x) ---
    UNCASTABLE_VALUE        = 11131
    REJECTED_VALUE          = 11132

    # --- casting errors (12xxx) ---
    BAD_ARGUMENT            = 12101
    REJECTED_ARGUMENT       = 12102

    # --- grammar definition errors (21xxx) ---
    DUPLICATE_ALIAS         = 21101
    MISSING_LONG_NAME       = 21102
    INVALID_ALIAS_FORMAT    = 21103
    UNSUPPORTED_TYPE        = 21111
    UNKNOWN_OPTION          = 21112
    REGISTRATION_CLOSED     = 21113
    MULTIPLE_COMMANDS       = 21121
    USAGE_MISMATCH          = 21122
    MISSING_PROGRAM_NAME    = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class GrammarError(ValueError):
    """
    base class of the errors raised while a grammar is being defined.

    every subclass carries a stable `code`; keyword options (alias, name,
    type, ...) are kept read-only on `options` for callers that want to
    inspect the offending input.
    """
    code = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)


class DuplicateAliasError(GrammarError):
    code = FaultCode.DUPLICATE_ALIAS


class MissingLongNameError(GrammarError):
    code = FaultCode.MISSING_LONG_NAME


class InvalidAliasFormatError(GrammarError):
    code = FaultCode.INVALID_ALIAS_FORMAT


class UnsupportedTypeError(GrammarError):
    code = FaultCode.UNSUPPORTED_TYPE


class UnknownOptionError(GrammarError):
    code = FaultCode.UNKNOWN_OPTION


class RegistrationClosedError(GrammarError):
    code = FaultCode.REGISTRATION_CLOSED


class MultipleCommandsError(GrammarError):
    code = FaultCode.MULTIPLE_COMMANDS


class UsageMismatchError(GrammarError):
    code = FaultCode.USAGE_MISMATCH


class MissingProgramNameError(GrammarError):
    code = FaultCode.MISSING_PROGRAM_NAME


class BadArgumentError(ValueError):
    """
    raised by a basic cast when the raw string does not fit the type.

    the message is a short, lower-case reason ("not a valid email") that the
    matcher appends to the user-facing fault.
    """
    code = FaultCode.BAD_ARGUMENT


class RejectedArgumentError(ValueError):
    """
    raised when a caller-supplied validator rejects an already cast value.

    the validator's own exception is chained as __cause__.
    """
    code = FaultCode.REJECTED_ARGUMENT


class UsageFault(Exception):
    """
    base class of the faults collected while matching a usage.

    faults are values, not control flow: the matcher appends them to the
    Result and keeps going. str(fault) is the user-facing message.
    """
    code = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message


class MissingCommandError(UsageFault):
    code = FaultCode.MISSING_COMMAND


class NoMatchingUsageError(UsageFault):
    code = FaultCode.NO_MATCHING_USAGE


class FlagArgumentError(UsageFault):
    code = FaultCode.FLAG_ARGUMENT


class MissingParamValueError(UsageFault):
    code = FaultCode.MISSING_PARAM_VALUE


class UnusedOptionError(UsageFault):
    code = FaultCode.UNUSED_OPTION


class MissingTermError(UsageFault):
    code = FaultCode.MISSING_TERM


class UnusedInputError(UsageFault):
    code = FaultCode.UNUSED_INPUT


class UncastableValueError(UsageFault):
    code = FaultCode.UNCASTABLE_VALUE


class RejectedValueError(UsageFault):
    code = FaultCode.REJECTED_VALUE


class UsageExit(ExceptionGroup):
    """
    the faults of one parse, bundled for reporting.

    options
    - program: the program name shown in the header (overridden by
      __main__.__prog__ when the host defines it).
    - command: the matched command, if any, appended to the title.
    - shell: print and exit instead of raising.
    - colorful: style the report (styles may be overridden with
      __main__.__styles__).
    """

    def __new__(cls, faults, /, **options):
        return super().__new__(cls, "errors found in matching usage", faults)

    def __init__(self, faults, /, **options):
        super().__init__("errors found in matching usage", tuple(faults))
        self.options = MappingProxyType(options)

    @property
    def title(self):
        title = "Errors found in matching usage"
        if (command := self.options.get("command")) is not None:
            title += ' for command "%s"' % command
        return title

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky title
            "code": "#00E5FF dim",  # neon cyan fault code
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(main, "__prog__", self.options.get("program", ""))
        header = Text.assemble("[ ", text(prog, "prog-name"), " | ", text(self.title, "title"), " ]")

        lines = []
        for fault in self.exceptions:
            lines.append(Text.assemble(
                " * ",
                text(fault, "error-message"),
                " ",
                text("(%s)" % fault.code.normalize(), "code") if fault.code else "",
            ))

        hint = Text.assemble(text(" → ", "hint-arrow"), text("Run again with -h for help.", "hint"))
        return Group(header, *lines, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


__all__ = (
    "FaultCode",
    "GrammarError",
    "DuplicateAliasError",
    "MissingLongNameError",
    "InvalidAliasFormatError",
    "UnsupportedTypeError",
    "UnknownOptionError",
    "RegistrationClosedError",
    "MultipleCommandsError",
    "UsageMismatchError",
    "MissingProgramNameError",
    "BadArgumentError",
    "RejectedArgumentError",
    "UsageFault",
    "MissingCommandError",
    "NoMatchingUsageError",
    "FlagArgumentError",
    "MissingParamValueError",
    "UnusedOptionError",
    "MissingTermError",
    "UnusedInputError",
    "UncastableValueError",
    "RejectedValueError",
    "UsageExit",
)
