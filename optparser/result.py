"""
Result of one parse attempt.

A Result is created fresh for every parse and filled in by the matcher:
- command: the matched command's canonical name, or None.
- values: option name → typed value. Commands and flags bind booleans;
  terms and params bind their cast value. Params that were not given are
  simply absent.
- leftover: literal tokens that followed "--", in order.
- faults / errors: the collected UsageFault objects and their messages, in
  the order they were found.
- help_requested: the help flag was present; nothing else was matched.

Reading values
    >>> result.get("dry-run")      # by canonical name
    >>> result.dry_run             # attribute form, "_" and camelCase map to "-"

The attribute form raises AttributeError for a name with no bound value, and
cannot reach options named like a Result member (values, errors, get, ...);
get() reads any name.
"""
import re

from .faults import UsageFault
from .utils import mirror


def _kebab(name, /):
    """
    "dryRun" / "dry_run" → "dry-run".
    """
    return re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name).replace("_", "-").lower()


class Result:
    """
    mutable accumulator of one match.
    """

    command = mirror("command")
    values = mirror("values")
    leftover = mirror("leftover")
    faults = mirror("faults")
    program = mirror("program")
    help_requested = mirror("help_requested")

    def __init__(self, leftover=(), program=""):
        self._command = None
        self._values = {}
        self._leftover = list(leftover)
        self._faults = []
        self._program = program
        self._help_requested = False

    @property
    def errors(self):
        """
        the error messages, in the order the faults were found.
        """
        return [str(fault) for fault in self._faults]

    def add_error(self, fault, /):
        """
        record a fault; a plain string is wrapped into a generic UsageFault.
        """
        if isinstance(fault, str):
            fault = UsageFault(fault)
        if not isinstance(fault, UsageFault):
            raise TypeError("add_error() argument must be a string or a usage fault")
        self._faults.append(fault)

    def set_command(self, name, /):
        self._command = name
        self._values[name] = True

    def set_value(self, name, value, /):
        self._values[name] = value

    def request_help(self):
        self._help_requested = True

    def get(self, name, default=None, /):
        """
        the value bound to a canonical option name, or default.
        """
        return self._values.get(name, default)

    def __getattr__(self, name):
        if name.startswith("_") or (key := _kebab(name)) not in self._values:
            raise AttributeError("%r has no bound value named %r" % (type(self).__name__, name))
        return self._values[key]

    def __contains__(self, name):
        return name in self._values

    def __rich_repr__(self):
        yield "command", self._command
        yield "values", dict(self._values)
        yield "leftover", tuple(self._leftover)
        yield "errors", tuple(self.errors)

    def __repr__(self):
        return "result(%s)" % ", ".join("%s=%r" % field for field in self.__rich_repr__())


__all__ = (
    "Result",
)
