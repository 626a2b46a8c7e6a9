"""Expectation rules for a single stubbed method."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._validators import validate_call_limit
from .config import default_exception_factory
from .count_validators import CountValidator, ValidatorKind, create_validator
from .errors import ConfigurationError
from .formatting import format_call
from .matching import match_arg
from .placeholders import Undefined

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectation_group import ExpectationGroup


class ExpectationOwner(t.Protocol):
    """Services a double provides to the expectations it owns."""

    @property
    def mox_enforces_order(self) -> bool:
        """Return ``True`` when ordered calls are validated."""
        ...

    def mox_lookup_group(self, name: str) -> ExpectationGroup | None:
        """Return the group registered for *name*, if any."""
        ...

    def mox_allocate_order(self, group: str | None = None) -> int:
        """Allocate a local order number."""
        ...

    def mox_allocate_global_order(self, group: str | None = None) -> int:
        """Allocate an order number shared across doubles."""
        ...

    def mox_validate_order(
        self, label: str, local_order: int | None, global_order: int | None = None
    ) -> None:
        """Validate local and global order numbers for one call."""
        ...

    def mox_make_exception(
        self, exc_type: type[BaseException], *args: object
    ) -> BaseException:
        """Build an exception instance from a class."""
        ...


@dc.dataclass(slots=True, eq=False)
class Expectation:
    """One rule describing acceptable calls to ``name`` and their result.

    Builder methods return ``self`` so rules read as a chain::

        double.should_receive("fetch").with_args("/v1/", 3).and_return(1, 2).twice()
    """

    name: str
    double: ExpectationOwner | None = dc.field(default=None, repr=False)
    expected_args: list[object] = dc.field(default_factory=list)
    no_args: bool = False
    return_queue: list[object] = dc.field(default_factory=list)
    closure_queue: list[t.Callable[..., object]] = dc.field(default_factory=list)
    should_throw: bool = False
    count_validators: list[CountValidator] = dc.field(default_factory=list)
    pending_kind: ValidatorKind = dc.field(default=ValidatorKind.EXACT, repr=False)
    local_order: int | None = None
    global_order: int | None = None
    actual_count: int = 0
    is_default: bool = False
    _globally: bool = dc.field(default=False, repr=False)

    def __str__(self) -> str:
        """Return the method name and expected arguments."""
        return format_call(self.name, self.expected_args)

    @property
    def mock(self) -> ExpectationOwner | None:
        """Return the double owning this expectation."""
        return self.double

    # ------------------------------------------------------------------
    # Argument expectations
    # ------------------------------------------------------------------
    def with_args(self, *args: object) -> Expectation:
        """Require calls to supply arguments matching *args*."""
        self.expected_args = list(args)
        self.no_args = False
        return self

    def with_no_args(self) -> Expectation:
        """Require calls to supply no arguments at all."""
        self.expected_args = []
        self.no_args = True
        return self

    def with_any_args(self) -> Expectation:
        """Accept calls with any arguments."""
        self.expected_args = []
        self.no_args = False
        return self

    def match_args(self, args: t.Sequence[object]) -> bool:
        """Return ``True`` if *args* satisfy the expected argument list."""
        if not self.expected_args and not self.no_args:
            return True
        if len(args) != len(self.expected_args):
            return False
        return all(
            match_arg(expected, actual)
            for expected, actual in zip(self.expected_args, args, strict=True)
        )

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def and_return(self, *values: object) -> Expectation:
        """Return *values* on successive calls, repeating the last one.

        Each call replaces the whole queue set by earlier calls.
        """
        self.return_queue = list(values)
        return self

    then_return = and_return

    def and_return_using(self, *funcs: t.Callable[..., object]) -> Expectation:
        """Compute results by calling *funcs* with the call's arguments.

        Functions are used once each in order and the last one is reused for
        every further call. They take precedence over :meth:`and_return`.
        """
        self.closure_queue = list(funcs)
        return self

    then_return_using = and_return_using

    def and_return_undefined(self) -> Expectation:
        """Return a self-returning :class:`~call_mox.placeholders.Undefined`."""
        return self.and_return(Undefined())

    then_return_undefined = and_return_undefined

    def then_throw(
        self, exception: BaseException | type[BaseException], *args: object
    ) -> Expectation:
        """Raise *exception* when called.

        Successive calls queue their exceptions behind any values already set,
        so ``then_throw(A()).then_throw(B())`` raises ``A`` then ``B``. A class
        is turned into an instance with *args* by the owning container's
        exception factory.
        """
        if isinstance(exception, type) and issubclass(exception, BaseException):
            exception = self._make_exception(exception, *args)
        elif not isinstance(exception, BaseException):
            msg = f"then_throw() expects an exception, got {exception!r}"
            raise TypeError(msg)
        self.should_throw = True
        self.return_queue.append(exception)
        return self

    and_throw = then_throw

    def _make_exception(
        self, exc_type: type[BaseException], *args: object
    ) -> BaseException:
        if self.double is None:
            return default_exception_factory(exc_type, *args)
        return self.double.mox_make_exception(exc_type, *args)

    def resolve_return(self, args: t.Sequence[object]) -> object:
        """Produce the configured result for a call with *args*."""
        if len(self.closure_queue) > 1:
            return self.closure_queue.pop(0)(*args)
        if self.closure_queue:
            return self.closure_queue[0](*args)
        if len(self.return_queue) > 1:
            return self.return_queue.pop(0)
        if self.return_queue:
            return self.return_queue[0]
        return None

    def verify_call(self, args: t.Sequence[object]) -> object:
        """Count a call with *args* and return (or raise) its result."""
        if self.double is not None and self.double.mox_enforces_order:
            self.validate_order()
        self.actual_count += 1
        result = self.resolve_return(args)
        if self.should_throw and isinstance(result, BaseException):
            raise result
        return result

    # ------------------------------------------------------------------
    # Call counts
    # ------------------------------------------------------------------
    def is_eligible(self) -> bool:
        """Return ``True`` while every count constraint allows another call."""
        return all(v.is_eligible(self.actual_count) for v in self.count_validators)

    def is_call_count_constrained(self) -> bool:
        """Return ``True`` if any count constraint has been attached."""
        return bool(self.count_validators)

    def verify(self) -> None:
        """Raise :class:`~call_mox.errors.CountViolationError` on a bad count."""
        label = str(self)
        for validator in self.count_validators:
            validator.validate(self.actual_count, label)

    def times(self, limit: int | None = None) -> Expectation:
        """Constrain the call count to *limit* using the pending kind.

        The kind defaults to exact and is switched for a single call by
        :meth:`at_least` or :meth:`at_most`.
        """
        if limit is None:
            return self
        validate_call_limit(limit)
        self.count_validators.append(create_validator(self.pending_kind, limit))
        self.pending_kind = ValidatorKind.EXACT
        label = str(self)
        for validator in self.count_validators:
            validator.check_limit(self.actual_count, label)
        return self

    def never(self) -> Expectation:
        """Expect no calls."""
        return self.times(0)

    def once(self) -> Expectation:
        """Expect a single call."""
        return self.times(1)

    def twice(self) -> Expectation:
        """Expect two calls."""
        return self.times(2)

    def at_least(self) -> Expectation:
        """Make the next count a lower bound."""
        self.pending_kind = ValidatorKind.AT_LEAST
        return self

    def at_most(self) -> Expectation:
        """Make the next count an upper bound."""
        self.pending_kind = ValidatorKind.AT_MOST
        return self

    def between(self, minimum: int, maximum: int) -> Expectation:
        """Expect between *minimum* and *maximum* calls inclusive."""
        return self.at_least().times(minimum).at_most().times(maximum)

    def zero_or_more_times(self) -> Expectation:
        """Accept any number of calls."""
        return self.at_least().never()

    # ------------------------------------------------------------------
    # Ordering and defaults
    # ------------------------------------------------------------------
    def globally(self) -> Expectation:
        """Make the next :meth:`ordered` span every double in the container."""
        self._globally = True
        return self

    def ordered(self, group: str | None = None) -> Expectation:
        """Require this call to follow the previously ordered ones.

        Expectations sharing a *group* name share an order number and may be
        called in any order relative to each other.
        """
        owner = self._require_double("ordered")
        if self._globally:
            self.global_order = owner.mox_allocate_global_order(group)
        else:
            self.local_order = owner.mox_allocate_order(group)
        self._globally = False
        return self

    def validate_order(self) -> None:
        """Check this call against the local and global order scopes."""
        if self.local_order is None and self.global_order is None:
            return
        owner = self._require_double("validate_order")
        owner.mox_validate_order(str(self), self.local_order, self.global_order)

    def by_default(self) -> Expectation:
        """Demote this expectation below explicit ones for the same method."""
        group = self._require_double("by_default").mox_lookup_group(self.name)
        if group is not None:
            group.make_default(self)
        return self

    def _require_double(self, action: str) -> ExpectationOwner:
        if self.double is None:
            msg = f"{action}() requires an expectation registered on a double"
            raise ConfigurationError(msg)
        return self.double


__all__ = ["Expectation", "ExpectationOwner"]
