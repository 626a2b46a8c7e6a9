"""Configuration defaults resolved from arguments and the environment."""

from __future__ import annotations

import os
import typing as t

# Set to ``0``/``false``/``no``/``off`` to stop ordered expectations from
# raising on out-of-order calls without touching test code.
ENFORCE_ORDER_ENV: t.Final[str] = "CALL_MOX_ENFORCE_ORDER"

_FALSE_VALUES: t.Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})

ExceptionFactory = t.Callable[..., BaseException]


def resolve_enforce_order(value: bool | None = None) -> bool:
    """Return *value*, falling back to :data:`ENFORCE_ORDER_ENV` then ``True``."""
    if value is not None:
        return value
    raw = os.getenv(ENFORCE_ORDER_ENV)
    if raw is None or not raw.strip():
        return True
    return raw.strip().lower() not in _FALSE_VALUES


def default_exception_factory(
    exc_type: type[BaseException], *args: object
) -> BaseException:
    """Instantiate *exc_type* with *args*."""
    return exc_type(*args)


__all__ = [
    "ENFORCE_ORDER_ENV",
    "ExceptionFactory",
    "default_exception_factory",
    "resolve_enforce_order",
]
