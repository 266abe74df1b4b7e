"""
Plain-text help block of a program.

Layout
    <name>

    <description, wrapped>

    Usage:
      <program> [--help]
      <program> add username:STRING [--password=STRING]

    Commands:
      add | a  Add a new user
    ...

Role blocks (Commands, Terms, Parameters, Flags) appear only when the
registry holds options of that role.
"""
import textwrap

from .options import OptionKind

WIDTH = 75


def _named(option, /):
    names = [option.hyphenate(alias) for alias in (option.name, *option.aliases)]
    return " | ".join(names)


def _command_line(option, /):
    return "  %s  %s" % (" | ".join((option.name, *option.aliases)), option.description)


def _term_line(option, /):
    return "  %s: %s  %s" % (option.name, option.type, option.description)


def _param_line(option, /):
    return "  %s = %s  %s" % (_named(option), option.type, option.description)


def _flag_line(option, /):
    return "  %s  %s" % (_named(option), option.description)


_BLOCKS = (
    (OptionKind.COMMAND, "Commands", _command_line),
    (OptionKind.TERM, "Terms", _term_line),
    (OptionKind.PARAM, "Parameters", _param_line),
    (OptionKind.FLAG, "Flags", _flag_line),
)


def format_options(registry, /):
    """
    the role blocks listing every registered option.
    """
    output = ""
    for kind, title, line in _BLOCKS:
        if not registry.has_option_type(kind):
            continue
        output += title + ":\n"
        output += "".join(line(option) + "\n" for option in registry.options(kind))
        output += "\n"
    return output


def format_help(name, description, program, usages, registry, /):
    """
    the full help block: name, description, usage lines, role blocks.
    """
    output = name + "\n\n"
    if description:
        output += textwrap.fill(description, WIDTH) + "\n\n"
    output += "Usage:\n"
    output += "".join("  " + usage.write(program) + "\n" for usage in usages)
    output += "\n"
    return output + format_options(registry)


__all__ = (
    "format_help",
    "format_options",
)
