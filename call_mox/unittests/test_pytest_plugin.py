"""Tests for the ``call_mox`` pytest fixture."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from _pytest.pytester import Pytester


def test_fixture_verifies_after_passing_test(pytester: Pytester) -> None:
    """A passing test with unmet expectations errors at teardown."""
    pytester.makepyfile(
        """
        def test_unmet(call_mox):
            call_mox.mock("svc").should_receive("ping").once()

        def test_met(call_mox):
            svc = call_mox.mock("svc")
            svc.should_receive("ping").once()
            svc.ping()
        """
    )
    result = pytester.runpytest_inprocess()
    result.assert_outcomes(passed=2, errors=1)
    result.stdout.fnmatch_lines(["*CountViolationError: ping() should be called*"])


def test_fixture_skips_verification_after_failure(pytester: Pytester) -> None:
    """Verification does not pile errors on top of a failed test."""
    pytester.makepyfile(
        """
        def test_fails(call_mox):
            call_mox.mock("svc").should_receive("ping").once()
            assert False
        """
    )
    result = pytester.runpytest_inprocess()
    result.assert_outcomes(failed=1)


def test_marker_disables_verification(pytester: Pytester) -> None:
    """``@pytest.mark.call_mox(verify=False)`` skips teardown checks."""
    pytester.makepyfile(
        """
        import pytest

        @pytest.mark.call_mox(verify=False)
        def test_unverified(call_mox):
            call_mox.mock("svc").should_receive("ping").once()
        """
    )
    result = pytester.runpytest_inprocess()
    result.assert_outcomes(passed=1)


def test_enforce_order_priority(pytester: Pytester) -> None:
    """Marker beats CLI option, which beats the ini setting."""
    pytester.makeini(
        """
        [pytest]
        call_mox_enforce_order = false
        """
    )
    pytester.makepyfile(
        """
        import pytest

        def test_from_config(call_mox, pytestconfig):
            expected = pytestconfig.getoption("call_mox_enforce_order")
            assert call_mox.enforce_order is (False if expected is None else expected)

        @pytest.mark.call_mox(enforce_order=True)
        def test_marker(call_mox):
            assert call_mox.enforce_order is True
        """
    )
    result = pytester.runpytest_inprocess()
    result.assert_outcomes(passed=2)
    result = pytester.runpytest_inprocess("--call-mox-enforce-order")
    result.assert_outcomes(passed=2)
