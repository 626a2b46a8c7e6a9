"""CallMox container owning doubles and the global ordering scope."""

from __future__ import annotations

import logging
import types  # noqa: TC003
import typing as t

from .config import ExceptionFactory, default_exception_factory, resolve_enforce_order
from .double import Double
from .ordering import OrderScope

logger = logging.getLogger(__name__)


class CallMox:
    """Create doubles for one test and verify them together."""

    def __init__(
        self,
        *,
        enforce_order: bool | None = None,
        verify_on_exit: bool = True,
        exception_factory: ExceptionFactory | None = None,
    ) -> None:
        """Create a new container.

        Parameters
        ----------
        enforce_order:
            Validate ordered expectations as calls happen. When ``None`` the
            ``CALL_MOX_ENFORCE_ORDER`` environment variable decides, and
            ordering is enforced if it is unset.
        verify_on_exit:
            When ``True`` (the default), leaving the ``with`` block without an
            exception calls :meth:`close`, which verifies every double.
        exception_factory:
            Callable building exception instances from a class and arguments
            for :meth:`Expectation.then_throw
            <call_mox.expectations.Expectation.then_throw>`.
        """
        self.enforce_order = resolve_enforce_order(enforce_order)
        self.exception_factory: ExceptionFactory = (
            exception_factory
            if exception_factory is not None
            else default_exception_factory
        )
        self._verify_on_exit = verify_on_exit
        self._doubles: list[Double] = []
        self._order = OrderScope()

    # ------------------------------------------------------------------
    # Context manager protocol
    # ------------------------------------------------------------------
    def __enter__(self) -> CallMox:
        """Enter context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Exit context, verifying only when the block succeeded."""
        if self._verify_on_exit and exc_type is None:
            self.close()
        else:
            self.reset()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def doubles(self) -> list[Double]:
        """Return the doubles created by this container."""
        return list(self._doubles)

    def mock(self, name: str | None = None, /, **returns: object) -> Double:
        """Create a double, optionally stubbing methods from *returns*.

        *name* is positional-only so a method called ``name`` can be stubbed.
        """
        dbl = Double(name, container=self)
        for method, value in returns.items():
            dbl.should_receive(method).and_return(value)
        self._doubles.append(dbl)
        return dbl

    def verify(self) -> None:
        """Verify every double, raising on the first violation."""
        logger.debug("Verifying %d doubles", len(self._doubles))
        for dbl in self._doubles:
            dbl.mox_verify()

    def close(self) -> None:
        """Verify every double, then forget them."""
        try:
            self.verify()
        finally:
            self.reset()

    def reset(self) -> None:
        """Forget every double and the global order state."""
        self._doubles.clear()
        self._order = OrderScope()

    # ------------------------------------------------------------------
    # Global ordering
    # ------------------------------------------------------------------
    def mox_allocate_order(self, group: str | None = None) -> int:
        """Allocate an order number shared by every double."""
        return self._order.allocate(group)

    @property
    def mox_order_scope(self) -> OrderScope:
        """Return the order scope shared by every double."""
        return self._order


__all__ = ["CallMox"]
