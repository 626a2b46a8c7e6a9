"""Comparator objects usable in place of literal expected arguments."""

from __future__ import annotations

import abc
import dataclasses as dc
import re
import typing as t


class Comparator(abc.ABC):
    """Predicate value matched against a single actual argument.

    Instances placed in :meth:`Expectation.with_args
    <call_mox.expectations.Expectation.with_args>` are consulted through
    :meth:`match` once literal and textual matching have failed.
    """

    __slots__ = ()

    @abc.abstractmethod
    def match(self, actual: object) -> bool:
        """Return ``True`` if *actual* satisfies the comparison."""

    def __call__(self, actual: object) -> bool:
        """Alias for :meth:`match`."""
        return self.match(actual)


@dc.dataclass(frozen=True, slots=True)
class Any(Comparator):
    """Match any value."""

    def match(self, actual: object) -> bool:
        """Return ``True`` for any input."""
        return True


@dc.dataclass(frozen=True, slots=True)
class IsA(Comparator):
    """Match instances of ``typ`` or its subclasses."""

    typ: type | tuple[type, ...]

    def match(self, actual: object) -> bool:
        """Return ``True`` when *actual* is an instance of ``typ``."""
        return isinstance(actual, self.typ)


@dc.dataclass(frozen=True, slots=True)
class Regex(Comparator):
    """Match if the string form of a value contains ``pattern``."""

    pattern: str
    flags: int = 0
    _compiled: re.Pattern[str] = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern, self.flags))

    def match(self, actual: object) -> bool:
        """Return ``True`` if the regex matches ``str(actual)``."""
        return self._compiled.search(str(actual)) is not None


@dc.dataclass(frozen=True, slots=True)
class Contains(Comparator):
    """Match if ``item`` is contained in a value."""

    item: object

    def match(self, actual: object) -> bool:
        """Return ``True`` if ``item in actual``; unsized values never match."""
        try:
            return self.item in actual  # type: ignore[operator]
        except TypeError:
            return False


@dc.dataclass(frozen=True, slots=True)
class StartsWith(Comparator):
    """Match strings beginning with ``prefix``."""

    prefix: str

    def match(self, actual: object) -> bool:
        """Return ``True`` if *actual* is a string starting with ``prefix``."""
        return isinstance(actual, str) and actual.startswith(self.prefix)


@dc.dataclass(frozen=True, slots=True)
class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    func: t.Callable[[object], object]

    def match(self, actual: object) -> bool:
        """Return ``True`` if ``func(actual)`` is truthy."""
        return bool(self.func(actual))


@dc.dataclass(frozen=True, slots=True)
class Not(Comparator):
    """Invert another comparator or literal."""

    expected: object

    def match(self, actual: object) -> bool:
        """Return ``True`` when ``expected`` does not match *actual*."""
        from .matching import match_arg

        return not match_arg(self.expected, actual)


@dc.dataclass(frozen=True, slots=True)
class AnyOf(Comparator):
    """Match when any of ``options`` matches."""

    options: tuple[object, ...]

    def __init__(self, *options: object) -> None:
        object.__setattr__(self, "options", options)

    def match(self, actual: object) -> bool:
        """Return ``True`` when at least one option matches *actual*."""
        from .matching import match_arg

        return any(match_arg(option, actual) for option in self.options)


__all__ = [
    "Any",
    "AnyOf",
    "Comparator",
    "Contains",
    "IsA",
    "Not",
    "Predicate",
    "Regex",
    "StartsWith",
]
