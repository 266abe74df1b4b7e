"""
Option registry: the vocabulary of one program.

The registry owns four disjoint buckets (commands, terms, flags, params) and
one alias namespace shared by all of them. Every alias, canonical names
included, is claimed exactly once; a second claim anywhere raises
DuplicateAliasError. Registration is append-only: options are never removed
or replaced.

Canonical names
- the first alias longer than one character wins; the others stay aliases.
- a registration made only of one-character aliases has no canonical name
  and raises MissingLongNameError.

A fresh registry already holds the built-in help flag (help | h).
"""
import logging

from .casting import ArgType
from .faults import DuplicateAliasError, MissingLongNameError, UnknownOptionError
from .options import OptionKind, Command, Term, Flag, Param, check_alias

logger = logging.getLogger(__name__)

HELP = "help"


class OptionRegistry:
    """
    ordered, alias-unique store of options grouped by kind.
    """

    def __init__(self):
        self._aliases = set()
        self._options = {kind: {} for kind in OptionKind}
        self._order = []
        self.add_flag(["h", HELP], "Display program help")

    def _claim(self, aliases, /):
        """
        validate a registration's aliases and reserve them.

        returns (name, others). nothing is reserved when a check fails.
        """
        aliases = [aliases] if isinstance(aliases, str) else list(aliases)
        for alias in aliases:
            check_alias(alias)

        claimed = set()
        for alias in aliases:
            if alias in self._aliases or alias in claimed:
                raise DuplicateAliasError("duplicate alias: %s" % alias, alias=alias)
            claimed.add(alias)

        if (name := next((alias for alias in aliases if len(alias) > 1), None)) is None:
            raise MissingLongNameError("missing required long name in %r" % (aliases,), aliases=tuple(aliases))

        self._aliases |= claimed
        others = aliases[:aliases.index(name)] + aliases[aliases.index(name) + 1:]
        return name, others

    def _store(self, option, /):
        self._options[option.kind][option.name] = option
        self._order.append(option.name)
        logger.debug("registered %s %r (aliases: %s)", option.kind, option.name, ", ".join(option.aliases) or "-")
        return option

    def add_command(self, aliases, description):
        """
        register a command word, e.g. add_command(["add", "a"], "Add a user").
        """
        name, others = self._claim(aliases)
        return self._store(Command(name, description, others))

    def add_term(self, name, type, description, validator=None):
        """
        register a positional term, e.g. add_term("username", "STRING", ...).
        """
        type = ArgType.coerce(type)
        name, _ = self._claim([name])
        return self._store(Term(name, description, (), type, validator))

    def add_flag(self, aliases, description):
        """
        register a presence-only flag, e.g. add_flag(["v", "verbose"], ...).
        """
        name, others = self._claim(aliases)
        return self._store(Flag(name, description, others))

    def add_param(self, aliases, type, description, validator=None):
        """
        register a valued param, e.g. add_param(["p", "password"], "STRING", ...).
        """
        type = ArgType.coerce(type)
        name, others = self._claim(aliases)
        return self._store(Param(name, description, others, type, validator))

    def get_option_type(self, name, /):
        """
        return the OptionKind of a canonical name.

        raises UnknownOptionError when the name is not registered.
        """
        for kind, options in self._options.items():
            if name in options:
                return kind
        raise UnknownOptionError("name not found: %r" % (name,), name=name)

    def get_option(self, name, /):
        """
        return the option registered under a canonical name.

        raises UnknownOptionError when the name is not registered.
        """
        return self._options[self.get_option_type(name)][name]

    def get_all_names(self):
        """
        canonical names in registration order (help flag first).
        """
        return list(self._order)

    def has_option_type(self, kind, /):
        return bool(self._options[OptionKind(kind)])

    def options(self, kind=None, /):
        """
        options of one kind in registration order, or all options when kind is None.
        """
        if kind is None:
            return tuple(map(self.get_option, self._order))
        return tuple(self._options[OptionKind(kind)].values())

    def find(self, token, /):
        """
        the option whose canonical name or alias equals token, or None.
        """
        if token not in self._aliases:
            return None
        return next(option for option in self.options() if option.matches(token))

    @property
    def help(self):
        """
        the built-in help flag.
        """
        return self._options[OptionKind.FLAG][HELP]

    def __contains__(self, name):
        return any(name in options for options in self._options.values())

    def __len__(self):
        return len(self._order)

    def __iter__(self):
        return iter(self.options())


__all__ = (
    "OptionRegistry",
)
