"""Unit tests for single-argument matching precedence."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as t

import pytest

from call_mox.comparators import Comparator, IsA
from call_mox.matching import (
    compile_delimited,
    is_object,
    is_scalar,
    loosely_equal,
    match_arg,
    names_type,
)


class Widget:
    """Object compared by identity."""


class FancyWidget(Widget):
    """Subclass used for type-name matching."""


class ArrayLike:
    """Object whose equality result has no truth value."""

    def __eq__(self, other: object) -> t.NoReturn:
        msg = "truth value is ambiguous"
        raise ValueError(msg)

    __hash__ = None  # type: ignore[assignment]


@dc.dataclass
class Point:
    """Object defining value equality."""

    x: int
    y: int


class RecordingComparator(Comparator):
    """Comparator remembering what it was asked about."""

    def __init__(self, result: bool) -> None:
        self.result = result
        self.seen: list[object] = []

    def match(self, actual: object) -> bool:
        """Record *actual* and return the canned result."""
        self.seen.append(actual)
        return self.result


def test_identity_matches_objects() -> None:
    """The same object always matches itself."""
    widget = Widget()
    assert match_arg(widget, widget)
    assert not match_arg(widget, Widget())


@pytest.mark.parametrize(
    ("expected", "actual"),
    [
        (1, 1),
        ("1", 1),
        (1, "1"),
        ("2.5", 2.5),
        ([1, 2], [1, 2]),
        ({"a": 1}, {"a": 1}),
        (None, None),
    ],
)
def test_loose_equality_for_values(expected: object, actual: object) -> None:
    """Scalars and containers compare loosely by value."""
    assert match_arg(expected, actual)


@pytest.mark.parametrize(
    ("expected", "actual"),
    [(1, 2), ("1", 2), ("abc", 0), (True, "1"), ([1], [2])],
)
def test_loose_equality_mismatches(expected: object, actual: object) -> None:
    """Values that differ after coercion do not match."""
    assert not match_arg(expected, actual)


def test_objects_are_not_compared_by_value() -> None:
    """Objects only match by identity, even when they define ``__eq__``."""
    point = Point(1, 2)
    assert match_arg(point, point)
    assert not match_arg(Point(1, 2), Point(1, 2))
    assert match_arg(IsA(Point), Point(1, 2))


def test_ambiguous_equality_is_never_invoked() -> None:
    """Matching never evaluates an object's ``__eq__``."""
    assert match_arg("\\ArrayLike", ArrayLike())
    assert not match_arg("Widget", ArrayLike())
    assert not match_arg(ArrayLike(), ArrayLike())


def test_textual_expectation_as_regex() -> None:
    """A delimited string is searched in the string form of a scalar."""
    assert match_arg("/bar/i", "xxBARxx")
    assert match_arg("/^\\d+$/", 12345)
    assert not match_arg("/bar/", "xxBARxx")


def test_none_reads_as_empty_text() -> None:
    """Patterns see ``None`` as an empty string."""
    assert match_arg("/^$/", None)
    assert not match_arg("/None/", None)


@pytest.mark.parametrize("pattern", ["/[unclosed/", "/bar/q", "bar", "/", "-5"])
def test_malformed_or_undelimited_patterns_do_not_match(pattern: str) -> None:
    """Patterns that cannot compile are treated as non-matches."""
    assert not match_arg(pattern, "xxbarxx")


def test_regex_not_applied_to_containers() -> None:
    """Regex matching only considers scalar actual values."""
    assert not match_arg("/bar/", ["bar"])


def test_textual_expectation_as_type_name() -> None:
    """A string names the runtime type of an object or one of its bases."""
    assert match_arg("\\FancyWidget", FancyWidget())
    assert match_arg("Widget", FancyWidget())
    assert match_arg(f"{__name__}.Widget", Widget())
    assert not match_arg("FancyWidget", Widget())
    assert not match_arg("\\", Widget())


def test_namespace_separators_in_type_names() -> None:
    """Backslash separated names resolve like dotted module paths."""
    name = "\\" + __name__.replace(".", "\\") + "\\FancyWidget"
    assert match_arg(name, FancyWidget())


def test_comparator_is_consulted_last() -> None:
    """Comparators see the actual value only after other rules fail."""
    yes = RecordingComparator(result=True)
    no = RecordingComparator(result=False)
    assert match_arg(yes, "value")
    assert not match_arg(no, "value")
    assert yes.seen == ["value"]
    assert no.seen == ["value"]
    assert match_arg(IsA(Widget), FancyWidget())


def test_unrelated_values_do_not_match() -> None:
    """Non-textual literals never act as patterns or type names."""
    assert not match_arg(1, Widget())
    assert not match_arg(Widget(), 1)


def test_helpers() -> None:
    """Classification and compilation helpers behave as documented."""
    assert is_scalar(1)
    assert is_scalar(None)
    assert not is_scalar([])
    assert is_object(Widget())
    assert not is_object({})
    assert loosely_equal("3", 3.0)
    assert not loosely_equal("three", 3)
    compiled = compile_delimited("#a.c#s")
    assert compiled is not None
    assert compiled.flags & re.DOTALL
    bracketed = compile_delimited("{foo}i")
    assert bracketed is not None
    assert bracketed.search("FOO")
    assert names_type("object", Widget())
