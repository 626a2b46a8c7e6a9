"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

from call_mox.config import ENFORCE_ORDER_ENV

pytest_plugins = ["pytester"]


@pytest.fixture(autouse=True)
def clear_enforce_order_env(
    monkeypatch: pytest.MonkeyPatch,
) -> t.Generator[None, None, None]:
    """Ensure a developer's ``CALL_MOX_ENFORCE_ORDER`` never leaks into tests."""
    monkeypatch.delenv(ENFORCE_ORDER_ENV, raising=False)
    yield
