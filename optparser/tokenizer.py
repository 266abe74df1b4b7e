r"""
GNU-style splitting of a raw argument vector.

Pipeline
- split: everything after the first literal "--" is passed through verbatim
  and never interpreted.
- bundle: "-abc" explodes into "-a", "-b", "-c" (lower-case letters/digits,
  no "=").
- join: "-x value" and "--name value" become "-x=value" and "--name=value"
  when the following token does not itself start with a dash.
- classify: "-x[=value]" and "--name[=value]" land in the marked mapping
  (last occurrence wins); anything else is an unmarked token.

Values in the marked mapping are strings when the token carried "=", and None
when it did not, so "--name=" (empty value) stays distinguishable from
"--name" (no value at all).

Quick example:
    >>> tokenize(["./tool", "add", "-vq", "--role", "admin", "--", "-x"])
    Tokens(marked={'v': None, 'q': None, 'role': 'admin'}, unmarked=['add'], literal=['-x'], program='tool')
"""
import collections
import os.path
import re

from .faults import MissingProgramNameError

# "-abc": two or more short flags bundled behind a single dash
_BUNDLE = re.compile(r"-(?P<chars>[a-z0-9]{2,})")

# "-x" or "--name" with no "=" attached, candidates for joining with the next token
_JOINABLE = re.compile(r"-[a-z0-9]|--[a-z0-9]+(-[a-z0-9]+)*")

# "-x[=value]" / "--name[=value]"; names start with a lower-case letter
_MARKED = re.compile(r"--?(?P<name>[a-z][a-z0-9]*(-[a-z0-9]+)*)(=(?P<value>.*))?", re.DOTALL)

Tokens = collections.namedtuple("Tokens", ("marked", "unmarked", "literal", "program"))
Tokens.__doc__ = """
tokenizer output.

fields
- marked: dict[str, str | None], option name (no dashes) → attached value.
- unmarked: list[str], positional tokens in order.
- literal: list[str], tokens after "--", verbatim.
- program: str, base filename of argv[0].
"""


def split(tokens, /):
    """
    split tokens around the first literal "--" into (options, literal).
    """
    try:
        index = tokens.index("--")
    except ValueError:
        return list(tokens), []
    return tokens[:index], tokens[index + 1:]


def bundle(tokens, /):
    """
    explode short-flag groups ("-abc" → "-a", "-b", "-c"), preserving order.
    """
    exploded = []
    for token in tokens:
        if match := _BUNDLE.fullmatch(token):
            exploded.extend("-" + char for char in match["chars"])
        else:
            exploded.append(token)
    return exploded


def join(tokens, /):
    """
    attach a value to the option token preceding it ("-x v" → "-x=v").

    the next token is only taken when it exists and does not start with a
    dash; both tokens are consumed by a join.
    """
    joined = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        following = index + 1
        if (
            _JOINABLE.fullmatch(token) and
            following < len(tokens) and
            not tokens[following].startswith("-")
        ):
            joined.append(token + "=" + tokens[following])
            index += 2
            continue
        joined.append(token)
        index += 1
    return joined


def classify(tokens, /):
    """
    sort tokens into (marked, unmarked).

    marked maps an option name to the text after "=" (None without "=");
    when a name repeats, the last occurrence wins.
    """
    marked = {}
    unmarked = []
    for token in tokens:
        if match := _MARKED.fullmatch(token):
            marked[match["name"]] = match["value"]
        else:
            unmarked.append(token)
    return marked, unmarked


def tokenize(argv, /):
    """
    turn a process argument vector into Tokens.

    parameters
    - argv: sequence of str; argv[0] is the program path, as in sys.argv.

    raises
    - MissingProgramNameError: argv is empty or argv[0] is empty.
    """
    argv = list(argv)
    if not argv or not argv[0]:
        raise MissingProgramNameError("no program name in argument vector", argv=tuple(argv))

    program = os.path.basename(argv[0])
    options, literal = split(argv[1:])
    marked, unmarked = classify(join(bundle(options)))
    return Tokens(marked, unmarked, literal, program)


__all__ = (
    "Tokens",
    "tokenize",
)
