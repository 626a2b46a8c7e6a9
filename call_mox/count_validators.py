"""Call-count constraints attached to expectations."""

from __future__ import annotations

import enum
import typing as t

from .errors import CountViolationError


class ValidatorKind(enum.StrEnum):
    """Kinds of count constraint selectable by the expectation builder."""

    EXACT = "exactly"
    AT_LEAST = "at least"
    AT_MOST = "at most"


class CountValidator:
    """Judge an invocation count against a single numeric ``limit``.

    ``is_eligible`` is asked at dispatch time, before the call is counted,
    and decides whether the expectation still has room for another call.
    ``validate`` is asked at verification time and raises
    :class:`~call_mox.errors.CountViolationError` when the final count is
    unacceptable.
    """

    kind: t.ClassVar[ValidatorKind]

    def __init__(self, limit: int) -> None:
        self.limit = limit

    def is_eligible(self, count: int) -> bool:
        """Return ``True`` when another call may be accepted at *count*."""
        return count < self.limit

    def is_valid(self, count: int) -> bool:
        """Return ``True`` when *count* satisfies the constraint."""
        raise NotImplementedError

    def validate(self, count: int, label: str) -> None:
        """Raise :class:`CountViolationError` unless *count* is valid."""
        if not self.is_valid(count):
            raise CountViolationError(label, self.kind.value, self.limit, count)

    def check_limit(self, count: int, label: str) -> None:
        """Raise when *count* already overflows an upper bound."""
        if self.kind is not ValidatorKind.AT_LEAST and count > self.limit:
            raise CountViolationError(label, self.kind.value, self.limit, count)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"{type(self).__name__}(limit={self.limit})"


class Exact(CountValidator):
    """Require exactly ``limit`` calls."""

    kind = ValidatorKind.EXACT

    def is_valid(self, count: int) -> bool:
        """Return ``True`` when *count* equals the limit."""
        return count == self.limit


class AtLeast(CountValidator):
    """Require ``limit`` calls or more."""

    kind = ValidatorKind.AT_LEAST

    def is_eligible(self, count: int) -> bool:
        """Always accept further calls."""
        return True

    def is_valid(self, count: int) -> bool:
        """Return ``True`` when *count* reaches the limit."""
        return count >= self.limit


class AtMost(CountValidator):
    """Allow no more than ``limit`` calls."""

    kind = ValidatorKind.AT_MOST

    def is_valid(self, count: int) -> bool:
        """Return ``True`` while *count* stays within the limit."""
        return count <= self.limit


VALIDATORS: t.Final[dict[ValidatorKind, type[CountValidator]]] = {
    ValidatorKind.EXACT: Exact,
    ValidatorKind.AT_LEAST: AtLeast,
    ValidatorKind.AT_MOST: AtMost,
}


def create_validator(kind: ValidatorKind, limit: int) -> CountValidator:
    """Instantiate the validator class registered for *kind*."""
    return VALIDATORS[kind](limit)


__all__ = [
    "VALIDATORS",
    "AtLeast",
    "AtMost",
    "CountValidator",
    "Exact",
    "ValidatorKind",
    "create_validator",
]
