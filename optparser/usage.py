"""
Usages: declared invocation shapes.

A usage partitions option names by role (commands, terms, flags, params).
Term order is significant (terms bind by position); a usage names at most
one command. Usages are immutable once built.
"""
from .faults import MultipleCommandsError
from .options import OptionKind
from .utils import mirror


class Usage:
    """
    one acceptable combination of command, terms, flags and params.

    parameters
    - registry: OptionRegistry resolving every name to its kind.
    - names: iterable of canonical option names, in declaration order.

    raises
    - UnknownOptionError: a name is not registered.
    - MultipleCommandsError: more than one command is named.
    """

    registry = mirror("registry")

    def __init__(self, registry, names, /):
        self._registry = registry
        self._options = {kind: [] for kind in OptionKind}
        for name in ([names] if isinstance(names, str) else names):
            kind = registry.get_option_type(name)
            if kind is OptionKind.COMMAND and self._options[kind]:
                raise MultipleCommandsError(
                    "multiple commands defined in one usage: %s, %s" % (self._options[kind][0], name),
                    names=(self._options[kind][0], name),
                )
            if name not in self._options[kind]:
                self._options[kind].append(name)

    @property
    def command(self):
        """
        the usage's command name, or None for a command-less usage.
        """
        commands = self._options[OptionKind.COMMAND]
        return commands[0] if commands else None

    @property
    def commands(self):
        return tuple(self._options[OptionKind.COMMAND])

    @property
    def terms(self):
        return tuple(self._options[OptionKind.TERM])

    @property
    def flags(self):
        return tuple(self._options[OptionKind.FLAG])

    @property
    def params(self):
        return tuple(self._options[OptionKind.PARAM])

    def get_options(self, kind, /):
        return tuple(self._options[OptionKind(kind)])

    @property
    def names(self):
        """
        every option name of the usage, role by role.
        """
        return tuple(name for names in self._options.values() for name in names)

    def write(self, program, /):
        """
        the usage line: commands and terms bare, flags and params bracketed.

        example
        - "tool add username:STRING [--verbose] [--password=STRING]"
        """
        parts = [program]
        for kind, names in self._options.items():
            for name in names:
                written = self._registry.get_option(name).write()
                parts.append(written if kind in (OptionKind.COMMAND, OptionKind.TERM) else "[%s]" % written)
        return " ".join(parts)

    def __contains__(self, name):
        return any(name in names for names in self._options.values())

    def __repr__(self):
        return "usage(%s)" % ", ".join(self.names)


__all__ = (
    "Usage",
)
