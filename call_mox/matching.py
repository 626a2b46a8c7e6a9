"""Single-argument matching rules shared by expectations and comparators.

An expected argument is tried against an actual one in a fixed precedence:

1. identity;
2. loose equality, when neither side is an object;
3. a textual expectation read as a delimited regular expression
   (``"/bar/i"``) and searched in the string form of a scalar, with
   ``None`` read as the empty string;
4. a textual expectation read as a class name (``"\\pkg\\Widget"`` or
   ``"Widget"``) and checked against the MRO of an object;
5. delegation to :meth:`Comparator.match
   <call_mox.comparators.Comparator.match>`.

The first rule that succeeds wins, so one string can act as a literal, a
pattern or a type filter depending on what arrives at call time.
"""

from __future__ import annotations

import functools
import re
import typing as t

from .comparators import Comparator

_SCALAR_TYPES: t.Final = (type(None), bool, int, float, complex, str, bytes)
_CONTAINER_TYPES: t.Final = (list, tuple, dict, set, frozenset)

_BRACKET_DELIMITERS: t.Final[dict[str, str]] = {
    "(": ")",
    "{": "}",
    "[": "]",
    "<": ">",
}
_PATTERN_FLAGS: t.Final[dict[str, int]] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


def is_scalar(value: object) -> bool:
    """Return ``True`` for ``None``, booleans, numbers, strings and bytes."""
    return isinstance(value, _SCALAR_TYPES)


def is_object(value: object) -> bool:
    """Return ``True`` for instances that are neither scalars nor containers."""
    return not isinstance(value, _SCALAR_TYPES + _CONTAINER_TYPES)


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _as_text(value: object) -> str:
    return "" if value is None else str(value)


def loosely_equal(expected: object, actual: object) -> bool:
    """Compare with ``==``, letting numeric strings equal numbers."""
    if expected == actual:
        return True
    if isinstance(expected, str) and _is_number(actual):
        text, number = expected, actual
    elif isinstance(actual, str) and _is_number(expected):
        text, number = actual, expected
    else:
        return False
    try:
        return float(text) == number
    except ValueError:
        return False


@functools.lru_cache(maxsize=256)
def compile_delimited(text: str) -> re.Pattern[str] | None:
    """Compile a delimited pattern such as ``/bar/i``.

    Returns ``None`` when *text* is not delimited, carries unknown
    modifiers, or does not compile.
    """
    if len(text) < 2:
        return None
    opener = text[0]
    if opener.isalnum() or opener.isspace() or opener == "\\":
        return None
    closer = _BRACKET_DELIMITERS.get(opener, opener)
    end = text.rfind(closer)
    if end <= 0:
        return None
    flags = 0
    for modifier in text[end + 1 :]:
        if modifier not in _PATTERN_FLAGS:
            return None
        flags |= _PATTERN_FLAGS[modifier]
    try:
        return re.compile(text[1:end], flags)
    except re.error:
        return None


def names_type(name: str, actual: object) -> bool:
    """Return ``True`` when *name* identifies the type of *actual* or a base."""
    wanted = name.lstrip("\\").replace("\\", ".")
    if not wanted:
        return False
    for cls in type(actual).__mro__:
        candidates = (
            cls.__name__,
            cls.__qualname__,
            f"{cls.__module__}.{cls.__qualname__}",
        )
        if wanted in candidates:
            return True
    return False


def match_arg(expected: object, actual: object) -> bool:
    """Return ``True`` when *actual* satisfies the *expected* argument."""
    if expected is actual:
        return True
    if (
        not is_object(expected)
        and not is_object(actual)
        and loosely_equal(expected, actual)
    ):
        return True
    if isinstance(expected, str) and is_scalar(actual):
        pattern = compile_delimited(expected)
        if pattern is not None and pattern.search(_as_text(actual)):
            return True
    if isinstance(expected, str) and is_object(actual) and names_type(expected, actual):
        return True
    if isinstance(expected, Comparator):
        return expected.match(actual)
    return False


__all__ = [
    "compile_delimited",
    "is_object",
    "is_scalar",
    "loosely_equal",
    "match_arg",
    "names_type",
]
