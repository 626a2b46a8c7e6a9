"""Exception hierarchy for call-mox."""

from __future__ import annotations

import typing as t


class CallMoxError(Exception):
    """Base exception for all call-mox errors."""


class ConfigurationError(CallMoxError):
    """Raised when an expectation is configured in an unsupported way."""


class NoMatchingExpectationError(CallMoxError):
    """Raised when a call matches no registered expectation."""

    def __init__(self, method_name: str, args: t.Sequence[object], call: str) -> None:
        self.method_name = method_name
        self.call_args = tuple(args)
        msg = (
            f"No matching handler found for {call}. Either the method was "
            "unexpected or its arguments matched no expected argument list "
            "for this method"
        )
        super().__init__(msg)


class VerificationError(CallMoxError):
    """Base class for count and order verification failures."""


class CountViolationError(VerificationError):
    """Raised when an expectation's call count breaks its constraint."""

    def __init__(self, label: str, constraint: str, limit: int, actual: int) -> None:
        self.label = label
        self.constraint = constraint
        self.limit = limit
        self.actual = actual
        noun = "time" if limit == 1 else "times"
        msg = (
            f"{label} should be called {constraint} {limit} {noun} "
            f"but called {actual} {'time' if actual == 1 else 'times'}"
        )
        super().__init__(msg)


class OrderViolationError(VerificationError):
    """Raised when a call arrives before an earlier-ordered call was seen."""

    def __init__(self, label: str, order: int, current_order: int) -> None:
        self.label = label
        self.order = order
        self.current_order = current_order
        msg = (
            f"Method {label} called out of order: expected order {order}, "
            f"was {current_order}"
        )
        super().__init__(msg)


__all__ = [
    "CallMoxError",
    "ConfigurationError",
    "CountViolationError",
    "NoMatchingExpectationError",
    "OrderViolationError",
    "VerificationError",
]
