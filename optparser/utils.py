"""
Optparser utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the registry, the usages and the results.

Overview
- mirror("attr")
  • Read-only property exposing a private backing field (self._attr) as an
    immutable view (tuple, MappingProxyType, frozenset).
- pluralize(word, count)
  • Unit labels for durations and headings ("1 day", "2 days").

Stability and contract
- Names in __all__ are supported; everything else may change without notice.
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" on the instance and wraps containers into
    immutable views so the public surface of options, usages and results
    cannot be mutated from outside:
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - anything else     → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


@functools.cache
def _plural(word, /):
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    if re.search(r"[^aeiou]y$", word):
        return word[:-1] + "ies"
    return word + "s"


def pluralize(word, count, /):
    """
    Render "<count> <word>" with the word pluralized unless count is 1.

    Only the regular English rules are covered (s/sh/ch/x/z → +es,
    consonant+y → -ies, otherwise +s), which is all the unit and heading
    labels of the package need.

    Examples
    - pluralize("day", 2)     -> "2 days"
    - pluralize("minute", 1)  -> "1 minute"
    - pluralize("entry", 3)   -> "3 entries"
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() first argument must be a string")
    return "%d %s" % (count, word if count == 1 else _plural(word))


__all__ = (
    "mirror",
    "pluralize",
)
