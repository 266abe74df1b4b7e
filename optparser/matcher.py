"""
Usage matching: bind tokenizer output to the first eligible usage.

Phases (each appends its own faults to the Result and never stops the
others, so a single report lists every problem of an invocation)
1. help: any marked option naming the help flag short-circuits the match.
2. command: when any usage declares a command, the first unmarked token is
   the command candidate; usages whose command does not match are skipped.
3. terms: unmarked tokens bind to the usage's terms in order; missing and
   surplus tokens are reported.
4. flags: present → True (a value attached to a flag is reported),
   absent → False.
5. params: present values are cast and bound; absent params stay unbound.
6. leftovers: marked options no phase consumed are reported.

Only the first eligible usage is matched; there is no backtracking across
usages. The matcher holds no state: every call works on copies of the
tokenizer output.
"""
import logging
from collections import deque

from .faults import *
from .result import Result

logger = logging.getLogger(__name__)


def _bind(result, option, value, /):
    """
    cast value for a term or param and bind it, or record why it failed.
    """
    try:
        result.set_value(option.name, option.cast(value))
    except BadArgumentError as exception:
        result.add_error(UncastableValueError(
            'Unable to match value of %s "%s": "%s" (%s)' % (option.kind, option.name, value, exception),
            name=option.name,
            value=value,
            reason=str(exception),
        ))
    except RejectedArgumentError as exception:
        result.add_error(RejectedValueError(
            'Value of %s "%s" rejected: "%s" (%s)' % (option.kind, option.name, value, exception),
            name=option.name,
            value=value,
            reason=str(exception),
        ))


def _pop(registry, marked, option, /):
    """
    remove and return the first marked (name, value) entry naming option.
    """
    for name in marked:
        if registry.find(name) is option:
            return name, marked.pop(name)
    return None


def bind_terms(result, registry, usage, unmarked, /):
    for name in usage.terms:
        if not unmarked:
            result.add_error(MissingTermError('Missing term: "%s"' % name, name=name))
            continue
        _bind(result, registry.get_option(name), unmarked.popleft())

    while unmarked:
        token = unmarked.popleft()
        result.add_error(UnusedInputError('Unused input: "%s"' % token, value=token))


def bind_flags(result, registry, usage, marked, /):
    for name in usage.flags:
        found = _pop(registry, marked, registry.get_option(name))
        result.set_value(name, found is not None)
        if found is not None and found[1]:
            result.add_error(FlagArgumentError(
                'Argument passed to flag "%s": "%s"' % (name, found[1]),
                name=name,
                value=found[1],
            ))


def bind_params(result, registry, usage, marked, /):
    for name in usage.params:
        param = registry.get_option(name)
        if (found := _pop(registry, marked, param)) is None:
            continue
        if found[1] is None:
            result.add_error(MissingParamValueError('No value passed to param "%s"' % name, name=name))
            continue
        _bind(result, param, found[1])


def report_unused(result, marked, /):
    for name, value in marked.items():
        if value is None:
            message = 'Unused input for "%s"' % name
        else:
            message = 'Unused input for "%s": "%s"' % (name, value)
        result.add_error(UnusedOptionError(message, name=name, value=value))
    marked.clear()


def match(tokens, registry, usages, /):
    """
    match tokens against usages and return a Result.

    parameters
    - tokens: Tokens from tokenize().
    - registry: OptionRegistry holding every option the usages name.
    - usages: Usage objects in declaration order (the built-in help usage
      excluded).

    returns
    - Result; faults are collected on it, never raised.
    """
    result = Result(tokens.literal, tokens.program)
    marked = dict(tokens.marked)
    unmarked = deque(tokens.unmarked)

    if any(registry.find(name) is registry.help for name in marked):
        logger.debug("help requested")
        result.request_help()
        return result

    candidate = None
    if any(usage.command is not None for usage in usages):
        if not unmarked:
            result.add_error(MissingCommandError("Command name not provided"))
            return result
        candidate = unmarked.popleft()

    for usage in usages:
        if usage.command is not None and not registry.get_option(usage.command).matches(candidate):
            continue

        logger.debug("matching %r", usage)
        if usage.command is not None:
            result.set_command(usage.command)

        bind_terms(result, registry, usage, unmarked)
        bind_flags(result, registry, usage, marked)
        bind_params(result, registry, usage, marked)
        report_unused(result, marked)
        break
    else:
        message = "Matching usage not found"
        if candidate is not None:
            message += ' for command "%s"' % candidate
        result.add_error(NoMatchingUsageError(message, command=candidate))

    logger.debug("matched with %d fault(s)", len(result.faults))
    return result


__all__ = (
    "match",
)
