"""Render method calls for error messages and expectation labels."""

from __future__ import annotations

import typing as t


def format_arg(arg: object) -> str:
    """Return a compact representation of a single argument."""
    if type(arg).__repr__ is object.__repr__:
        return f"<{type(arg).__qualname__}>"
    return repr(arg)


def format_args(args: t.Sequence[object] | None) -> str:
    """Join the representations of *args* with commas."""
    if not args:
        return ""
    return ", ".join(format_arg(arg) for arg in args)


def format_call(method_name: str, args: t.Sequence[object] | None) -> str:
    """Return ``method_name(arg, ...)``."""
    return f"{method_name}({format_args(args)})"


__all__ = ["format_arg", "format_args", "format_call"]
