"""Inert placeholder values returned by stubbed methods."""

from __future__ import annotations


class Undefined:
    """Self-returning black hole object.

    Any attribute lookup or call yields the same instance, so chained calls
    on a value returned by :meth:`Expectation.and_return_undefined
    <call_mox.expectations.Expectation.and_return_undefined>` never fail.
    """

    def __getattr__(self, name: str) -> Undefined:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self

    def __call__(self, *args: object, **kwargs: object) -> Undefined:
        return self

    def __repr__(self) -> str:
        return "Undefined()"


__all__ = ["Undefined"]
