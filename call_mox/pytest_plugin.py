"""Pytest plugin providing the ``call_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .container import CallMox

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("call_mox")
    group.addoption(
        "--call-mox-enforce-order",
        action="store_true",
        dest="call_mox_enforce_order",
        default=None,
        help=(
            "Raise as soon as an ordered expectation is called out of order. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-call-mox-enforce-order",
        action="store_false",
        dest="call_mox_enforce_order",
        default=None,
        help="Ignore call order for ordered expectations.",
    )
    parser.addini(
        "call_mox_enforce_order",
        "Validate ordered expectations at call time.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "call_mox(enforce_order: bool = True, verify: bool = True): "
            "override call_mox fixture behaviour for a single test."
        ),
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach each phase report to the item so teardown can inspect it."""
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _marker_option(request: pytest.FixtureRequest, key: str) -> bool | None:
    marker = request.node.get_closest_marker("call_mox")
    if marker is None or key not in marker.kwargs:
        return None
    return bool(marker.kwargs[key])


def _enforce_order_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether ordering is enforced; marker > CLI option > INI setting."""
    marker_value = _marker_option(request, "enforce_order")
    if marker_value is not None:
        return marker_value

    config = request.config
    cli_value = config.getoption("call_mox_enforce_order")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("call_mox_enforce_order"))


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)


@pytest.fixture
def call_mox(request: pytest.FixtureRequest) -> t.Generator[CallMox, None, None]:
    """Provide a :class:`CallMox` verified when the test finishes."""
    mox = CallMox(
        enforce_order=_enforce_order_enabled(request),
        verify_on_exit=False,
    )
    verify = _marker_option(request, "verify")
    yield mox
    if verify is False or _call_stage_failed(request.node):
        mox.reset()
        return
    try:
        mox.close()
    except Exception as err:
        logger.exception("Error during call_mox verification")
        pytest.fail(f"{type(err).__name__}: {err}")
