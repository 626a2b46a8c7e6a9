"""Unit tests for call-count validators."""

from __future__ import annotations

import pytest

from call_mox.count_validators import (
    AtLeast,
    AtMost,
    Exact,
    ValidatorKind,
    create_validator,
)
from call_mox.errors import CountViolationError


@pytest.mark.parametrize(
    ("validator", "count", "eligible"),
    [
        (Exact(2), 0, True),
        (Exact(2), 1, True),
        (Exact(2), 2, False),
        (AtLeast(2), 0, True),
        (AtLeast(2), 50, True),
        (AtMost(1), 0, True),
        (AtMost(1), 1, False),
        (Exact(0), 0, False),
    ],
)
def test_eligibility(validator: Exact, count: int, *, eligible: bool) -> None:
    """Eligibility reflects whether another call fits under the limit."""
    assert validator.is_eligible(count) is eligible


@pytest.mark.parametrize(
    ("validator", "good", "bad"),
    [
        (Exact(1), [1], [0, 2]),
        (AtLeast(2), [2, 3, 10], [0, 1]),
        (AtMost(2), [0, 1, 2], [3, 4]),
    ],
)
def test_validate(validator: Exact, good: list[int], bad: list[int]) -> None:
    """Validation raises only for counts breaking the constraint."""
    for count in good:
        validator.validate(count, "foo()")
    for count in bad:
        with pytest.raises(CountViolationError):
            validator.validate(count, "foo()")


def test_violation_carries_details() -> None:
    """The raised error names the call, constraint, limit and actual count."""
    with pytest.raises(CountViolationError) as excinfo:
        Exact(1).validate(3, "foo(1)")
    err = excinfo.value
    assert (err.label, err.constraint, err.limit, err.actual) == (
        "foo(1)",
        "exactly",
        1,
        3,
    )
    assert str(err) == "foo(1) should be called exactly 1 time but called 3 times"


@pytest.mark.parametrize(
    ("validator", "count", "raises"),
    [
        (Exact(1), 0, False),
        (Exact(1), 2, True),
        (AtMost(1), 1, False),
        (AtMost(1), 2, True),
        (AtLeast(5), 0, False),
    ],
)
def test_check_limit_only_rejects_overflow(
    validator: Exact, count: int, *, raises: bool
) -> None:
    """Builder-time checks fail only once an upper bound is already exceeded."""
    if raises:
        with pytest.raises(CountViolationError):
            validator.check_limit(count, "foo()")
    else:
        validator.check_limit(count, "foo()")


def test_create_validator_uses_kind() -> None:
    """Factory maps each kind to its validator class."""
    assert isinstance(create_validator(ValidatorKind.EXACT, 1), Exact)
    assert isinstance(create_validator(ValidatorKind.AT_LEAST, 1), AtLeast)
    made = create_validator(ValidatorKind.AT_MOST, 4)
    assert isinstance(made, AtMost)
    assert made.limit == 4
    assert repr(made) == "AtMost(limit=4)"
