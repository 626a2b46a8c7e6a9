"""Order-number allocation and validation for ordered expectations."""

from __future__ import annotations

import dataclasses as dc
import logging

from .errors import OrderViolationError

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class OrderScope:
    """Track order numbers within one double or across a whole container.

    Order numbers are handed out by :meth:`allocate` as expectations are
    marked ``ordered()``. At call time :meth:`validate` requires the numbers
    observed to be non-decreasing. :meth:`check` and :meth:`advance` split it
    for callers validating several scopes at once.
    """

    next_order: int = 0
    current_order: int | None = None
    groups: dict[str, int] = dc.field(default_factory=dict)

    def allocate(self, group: str | None = None) -> int:
        """Return a new order number, shared by every member of *group*."""
        if group is not None and group in self.groups:
            return self.groups[group]
        self.next_order += 1
        if group is not None:
            self.groups[group] = self.next_order
        return self.next_order

    def check(self, label: str, order: int) -> None:
        """Raise :class:`OrderViolationError` if *order* arrives too late."""
        if self.current_order is not None and order < self.current_order:
            raise OrderViolationError(label, order, self.current_order)

    def advance(self, label: str, order: int) -> None:
        """Record *order* as the latest position observed."""
        logger.debug("Ordered call %s accepted at position %d", label, order)
        self.current_order = order

    def validate(self, label: str, order: int) -> None:
        """Check *order* and record it when it is acceptable."""
        self.check(label, order)
        self.advance(label, order)

    def reset(self) -> None:
        """Forget observed calls while keeping allocated numbers."""
        self.current_order = None


__all__ = ["OrderScope"]
