"""Expectation matching and call verification for Python test doubles.

Register expectations on a :class:`Double`, route calls through it, and
verify call counts and ordering at the end of a test::

    with CallMox() as mox:
        repo = mox.mock("repo")
        repo.should_receive("get").with_args(1).and_return("one").once()
        assert repo.get(1) == "one"
"""

from __future__ import annotations

from .comparators import (
    Any,
    AnyOf,
    Comparator,
    Contains,
    IsA,
    Not,
    Predicate,
    Regex,
    StartsWith,
)
from .config import ENFORCE_ORDER_ENV
from .container import CallMox
from .count_validators import AtLeast, AtMost, CountValidator, Exact, ValidatorKind
from .double import Double
from .errors import (
    CallMoxError,
    ConfigurationError,
    CountViolationError,
    NoMatchingExpectationError,
    OrderViolationError,
    VerificationError,
)
from .expectation_group import ExpectationGroup
from .expectations import Expectation
from .formatting import format_call
from .placeholders import Undefined

__all__ = [
    "ENFORCE_ORDER_ENV",
    "Any",
    "AnyOf",
    "AtLeast",
    "AtMost",
    "CallMox",
    "CallMoxError",
    "Comparator",
    "ConfigurationError",
    "Contains",
    "CountValidator",
    "CountViolationError",
    "Double",
    "Exact",
    "Expectation",
    "ExpectationGroup",
    "IsA",
    "NoMatchingExpectationError",
    "Not",
    "OrderViolationError",
    "Predicate",
    "Regex",
    "StartsWith",
    "Undefined",
    "ValidatorKind",
    "VerificationError",
    "format_call",
]
