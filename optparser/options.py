r"""
Option kinds of a grammar.

Overview
- Command: a reserved first positional word selecting one usage ("add").
- Term: a typed positional value, bound by position ("username:STRING").
- Flag: a presence-only named option ("--verbose", "-v").
- Param: a named option carrying a typed value ("--password=STRING").

All four share the same surface: a canonical `name`, extra `aliases`, a
`description`, the `kind` tag, `matches(name)` and `write()` (the token shown
in usage lines). Terms and params add a `type` and an optional `validator`,
and know how to `cast()` a raw string.

Options are read-only once built; the registry is the only place that
creates them in a program.

Validation
- names and aliases must match r"[a-z][a-z0-9]*(-[a-z0-9]+)*" (lower case,
  hyphen-segmented); anything else raises InvalidAliasFormatError.
- type tags must belong to ArgType; anything else raises UnsupportedTypeError.
"""
import enum
import re

from .casting import ArgType, cast_value
from .faults import InvalidAliasFormatError
from .utils import mirror

_ALIAS = re.compile(r"[a-z][a-z0-9]*(-[a-z0-9]+)*")


class OptionKind(enum.StrEnum):
    """
    role of an option inside a usage.
    """
    COMMAND = "command"
    TERM = "term"
    FLAG = "flag"
    PARAM = "param"


def check_alias(alias, /):
    """
    raise InvalidAliasFormatError unless alias is hyphenated lower case.
    """
    if not isinstance(alias, str) or not _ALIAS.fullmatch(alias):
        raise InvalidAliasFormatError("alias is not hyphenated lower case: %r" % (alias,), alias=alias)
    return alias


class Option:
    """
    shared behavior of the four option kinds.
    """
    kind = None

    name = mirror("name")
    aliases = mirror("aliases")
    description = mirror("description")

    def __init__(self, name, description="", aliases=()):
        self._name = check_alias(name)
        self._aliases = [check_alias(alias) for alias in aliases]
        self._description = description

    @staticmethod
    def hyphenate(alias, /):
        """
        "-x" for one-character aliases, "--name" otherwise.
        """
        return ("-" if len(alias) == 1 else "--") + alias

    def matches(self, name, /):
        """
        true when name is the canonical name or one of the aliases.
        """
        return name == self._name or name in self._aliases

    def write(self):
        raise NotImplementedError

    def __rich_repr__(self):
        yield "name", self._name
        yield "aliases", tuple(self._aliases)
        yield "description", self._description

    def __repr__(self):
        return "%s(%s)" % (self.kind, ", ".join("%s=%r" % field for field in self.__rich_repr__()))


class Command(Option):
    kind = OptionKind.COMMAND

    def write(self):
        return self._name


class Flag(Option):
    kind = OptionKind.FLAG

    def write(self):
        return self.hyphenate(self._name)


class TypedOption(Option):
    """
    an option that binds a value: casting goes through the declared type,
    then through the validator when one is attached.
    """

    type = mirror("type")
    validator = mirror("validator")

    def __init__(self, name, description="", aliases=(), type=ArgType.STRING, validator=None):
        super().__init__(name, description, aliases)
        if validator is not None and not callable(validator):
            raise TypeError("%s validator must be callable" % self.kind)
        self._type = ArgType.coerce(type)
        self._validator = validator

    def cast(self, value, /):
        """
        cast a raw string to this option's type and validate it.

        raises BadArgumentError or RejectedArgumentError (see casting).
        """
        return cast_value(self._type, value, self._validator)

    def __rich_repr__(self):
        yield from super().__rich_repr__()
        yield "type", self._type


class Term(TypedOption):
    kind = OptionKind.TERM

    def write(self):
        return "%s:%s" % (self._name, self._type)


class Param(TypedOption):
    kind = OptionKind.PARAM

    def write(self):
        return "%s=%s" % (self.hyphenate(self._name), self._type)


__all__ = (
    "OptionKind",
    "Option",
    "Command",
    "Term",
    "Flag",
    "Param",
)
