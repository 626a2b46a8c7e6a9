"""Test double routing named calls into expectation groups."""

from __future__ import annotations

import itertools
import logging
import typing as t

from .config import default_exception_factory, resolve_enforce_order
from .errors import ConfigurationError, NoMatchingExpectationError
from .expectation_group import ExpectationGroup
from .expectations import Expectation
from .formatting import format_call
from .ordering import OrderScope

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .container import CallMox

logger = logging.getLogger(__name__)

_anonymous_ids = itertools.count(1)


class Double:
    """Stand-in object owning one :class:`ExpectationGroup` per method.

    Calls arrive through :meth:`mox_route_call`. For convenience, attribute
    access for a method that has expectations returns a callable forwarding
    positional arguments to it::

        dbl = Double("repo")
        dbl.should_receive("get").with_args(1).and_return("one")
        assert dbl.get(1) == "one"

    Bookkeeping methods carry a ``mox_`` prefix to stay clear of stubbed
    method names.
    """

    def __init__(self, name: str | None = None, container: CallMox | None = None):
        self.mox_name = name or f"double_{next(_anonymous_ids)}"
        self._mox_container = container
        self._mox_groups: dict[str, ExpectationGroup] = {}
        self._mox_order = OrderScope()

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Double({self.mox_name!r})"

    def __getattr__(self, name: str) -> t.Callable[..., object]:
        if name.startswith(("_mox", "__")):
            raise AttributeError(name)
        if name not in self._mox_groups:
            msg = f"{self.mox_name} has no expectations for {name!r}"
            raise AttributeError(msg)

        def routed(*args: object, **kwargs: object) -> object:
            if kwargs:
                msg = f"{name}() received keyword arguments; pass them positionally"
                raise TypeError(msg)
            return self.mox_route_call(name, args)

        routed.__name__ = name
        return routed

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def should_receive(self, name: str) -> Expectation:
        """Register and return a new expectation for method *name*."""
        group = self._mox_groups.get(name)
        if group is None:
            group = ExpectationGroup(name)
            self._mox_groups[name] = group
        expectation = Expectation(name, double=self)
        group.add(expectation)
        return expectation

    @property
    def mox_container(self) -> CallMox | None:
        """Return the container this double belongs to, if any."""
        return self._mox_container

    @property
    def mox_groups(self) -> dict[str, ExpectationGroup]:
        """Return the expectation groups keyed by method name."""
        return dict(self._mox_groups)

    def mox_lookup_group(self, name: str) -> ExpectationGroup | None:
        """Return the group registered for *name*, if any."""
        return self._mox_groups.get(name)

    # ------------------------------------------------------------------
    # Call routing
    # ------------------------------------------------------------------
    def mox_route_call(self, name: str, args: t.Sequence[object] = ()) -> object:
        """Dispatch a call to *name* with *args* and return its result."""
        group = self._mox_groups.get(name)
        if group is None:
            raise NoMatchingExpectationError(name, args, format_call(name, args))
        return group.call(args)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------
    @property
    def mox_enforces_order(self) -> bool:
        """Return ``True`` when ordered expectations are validated at call time."""
        if self._mox_container is not None:
            return self._mox_container.enforce_order
        return resolve_enforce_order()

    def mox_allocate_order(self, group: str | None = None) -> int:
        """Allocate an order number local to this double."""
        return self._mox_order.allocate(group)

    def mox_allocate_global_order(self, group: str | None = None) -> int:
        """Allocate an order number in the container's scope."""
        return self._mox_require_container().mox_allocate_order(group)

    def mox_validate_order(
        self, label: str, local_order: int | None, global_order: int | None = None
    ) -> None:
        """Validate local and global order numbers for one call.

        Both scopes are checked before either records the call, so a
        rejected call leaves every scope unchanged.
        """
        label = f"{self.mox_name}.{label}"
        scopes: list[tuple[OrderScope, int]] = []
        if local_order is not None:
            scopes.append((self._mox_order, local_order))
        if global_order is not None:
            container = self._mox_require_container()
            scopes.append((container.mox_order_scope, global_order))
        for scope, order in scopes:
            scope.check(label, order)
        for scope, order in scopes:
            scope.advance(label, order)

    def _mox_require_container(self) -> CallMox:
        if self._mox_container is None:
            msg = f"{self.mox_name} is not attached to a CallMox container"
            raise ConfigurationError(msg)
        return self._mox_container

    # ------------------------------------------------------------------
    # Exceptions and verification
    # ------------------------------------------------------------------
    def mox_make_exception(
        self, exc_type: type[BaseException], *args: object
    ) -> BaseException:
        """Build an exception using the container's factory."""
        if self._mox_container is not None:
            return self._mox_container.exception_factory(exc_type, *args)
        return default_exception_factory(exc_type, *args)

    def mox_verify(self) -> None:
        """Verify every expectation group, raising on the first violation."""
        logger.debug("Verifying %s", self)
        for group in self._mox_groups.values():
            group.verify()


__all__ = ["Double"]
