"""Shared validation helpers."""

from __future__ import annotations


def validate_call_limit(limit: int) -> None:
    """Ensure *limit* is usable as a call-count threshold."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        msg = "call limit must be an integer"
        raise TypeError(msg)

    if limit < 0:
        msg = "call limit must be >= 0"
        raise ValueError(msg)
