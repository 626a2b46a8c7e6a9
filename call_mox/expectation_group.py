"""Dispatch calls for one method name to its registered expectations."""

from __future__ import annotations

import logging
import typing as t

from .comparators import Comparator
from .errors import NoMatchingExpectationError
from .formatting import format_call
from .matching import is_object

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation

logger = logging.getLogger(__name__)


class ExpectationGroup:
    """Ordered collection of the expectations registered for ``name``.

    Explicit expectations are searched before defaults. Within each tier the
    first expectation whose arguments match and whose count constraints still
    have room wins; failing that, the first one whose arguments match is used
    so an over-called expectation reports its own count violation instead of
    the call falling through to "no matching handler".
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.expectations: list[Expectation] = []

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ExpectationGroup({self.name!r})"

    def add(self, expectation: Expectation) -> None:
        """Register *expectation* after those already present."""
        self.expectations.append(expectation)

    @property
    def explicit(self) -> list[Expectation]:
        """Return non-default expectations in registration order."""
        return [exp for exp in self.expectations if not exp.is_default]

    @property
    def defaults(self) -> list[Expectation]:
        """Return default expectations, most recently marked first."""
        return [exp for exp in reversed(self.expectations) if exp.is_default]

    def make_default(self, expectation: Expectation) -> None:
        """Mark *expectation* as a fallback for later explicit expectations."""
        if expectation in self.expectations:
            self.expectations.remove(expectation)
        expectation.is_default = True
        self.expectations.append(expectation)

    def find(self, args: t.Sequence[object]) -> Expectation | None:
        """Return the expectation that should handle a call with *args*."""
        for tier in (self.explicit, self.defaults):
            expectation = self._find_in(tier, args)
            if expectation is not None:
                return expectation
        return None

    @staticmethod
    def _find_in(
        expectations: t.Sequence[Expectation], args: t.Sequence[object]
    ) -> Expectation | None:
        for exp in expectations:
            if exp.match_args(args) and exp.is_eligible():
                return exp
        for exp in expectations:
            if exp.match_args(args):
                logger.debug("No eligible expectation left; falling back to %s", exp)
                return exp
        return None

    def call(self, args: t.Sequence[object]) -> object:
        """Route a call with *args* to the matching expectation."""
        expectation = self.find(args)
        if expectation is None:
            raise NoMatchingExpectationError(
                self.name, args, format_call(self.name, args)
            )
        logger.debug("Dispatching %s to %s", format_call(self.name, args), expectation)
        return expectation.verify_call(args)

    def verify(self) -> None:
        """Verify count constraints, stopping at the first violation.

        A default is skipped once an explicit expectation with the same
        argument rule replaces it; every other expectation is checked.
        """
        explicit = self.explicit
        for exp in self.expectations:
            if exp.is_default and any(_same_rule(exp, e) for e in explicit):
                continue
            exp.verify()


def _same_rule(first: Expectation, second: Expectation) -> bool:
    """Return ``True`` when both expectations accept exactly the same calls."""
    if first.no_args != second.no_args:
        return False
    if len(first.expected_args) != len(second.expected_args):
        return False
    pairs = zip(first.expected_args, second.expected_args, strict=True)
    return all(_same_arg(left, right) for left, right in pairs)


def _same_arg(left: object, right: object) -> bool:
    if left is right:
        return True
    if isinstance(left, Comparator) or not is_object(left):
        return type(left) is type(right) and left == right
    return False


__all__ = ["ExpectationGroup"]
