# tests/test_waits.py
"""
Tests for bounded polling utilities.
"""

import time

from fakes import FakeNode

from uiauto_appstore.locator import Kind, Locator, SearchSpec
from uiauto_appstore.waits import WaitOutcome, WaitStatus, poll, wait_for


class TestPoll:
    """Tests for poll function."""

    def test_returns_immediately_when_found(self):
        """Should return OK on the first attempt when the probe succeeds."""
        outcome = poll(lambda: "hello", timeout=5)
        assert outcome
        assert outcome.status is WaitStatus.OK
        assert outcome.element == "hello"
        assert outcome.attempts == 1

    def test_waits_for_condition(self):
        """Should keep polling until the probe returns a value."""
        counter = {"value": 0}

        def probe():
            counter["value"] += 1
            return "done" if counter["value"] >= 3 else None

        outcome = poll(probe, timeout=5, interval=0.05)
        assert outcome.found
        assert outcome.attempts == 3
        assert outcome.elapsed >= 0.1

    def test_false_is_not_found(self):
        """False should count as not yet, like None."""
        outcome = poll(lambda: False, timeout=0.1, interval=0.02)
        assert not outcome
        assert outcome.timed_out

    def test_timeout_returns_outcome(self):
        """Should return TIMED_OUT instead of raising when time runs out."""
        start = time.monotonic()
        outcome = poll(lambda: None, timeout=0.2, interval=0.05, description="thing")
        elapsed = time.monotonic() - start

        assert outcome.status is WaitStatus.TIMED_OUT
        assert outcome.description == "thing"
        assert outcome.timeout == 0.2
        assert outcome.attempts >= 2
        assert 0.2 <= elapsed < 1.0

    def test_zero_timeout_is_single_shot(self):
        """A zero timeout should still make exactly one attempt."""
        calls = []
        outcome = poll(lambda: calls.append(1), timeout=0)
        assert outcome.timed_out
        assert len(calls) == 1

    def test_zero_timeout_can_succeed(self):
        """A zero timeout should succeed if the first attempt finds it."""
        assert poll(lambda: 42, timeout=0).element == 42

    def test_preserves_exception(self):
        """Should keep the last probe exception on the outcome."""
        def failing():
            raise ValueError("test error")

        outcome = poll(failing, timeout=0.1, interval=0.02)
        assert outcome.timed_out
        assert isinstance(outcome.error, ValueError)
        assert "test error" in str(outcome.error)

    def test_recovers_after_exception(self):
        """Provider errors should count as not yet, not as failure."""
        counter = {"value": 0}

        def flaky():
            counter["value"] += 1
            if counter["value"] == 1:
                raise RuntimeError("not ready")
            return "ok"

        outcome = poll(flaky, timeout=1, interval=0.01)
        assert outcome.element == "ok"


class TestWaitFor:
    """Tests for wait_for function."""

    def test_finds_below_static_ancestor(self):
        """Should find a descendant of a node ancestor."""
        root = FakeNode(Kind.APPLICATION, [FakeNode(Kind.BUTTON, title="OK")])
        outcome = wait_for(Locator(), root, SearchSpec.of(Kind.BUTTON, title="OK"), timeout=0.1)
        assert outcome.found
        assert outcome.element.attribute("title") == "OK"

    def test_missing_static_ancestor_is_invalid(self):
        """A None ancestor should fail immediately with INVALID."""
        start = time.monotonic()
        outcome = wait_for(Locator(), None, SearchSpec.of(Kind.BUTTON), timeout=5)
        assert outcome.status is WaitStatus.INVALID
        assert not outcome
        assert not outcome.timed_out
        assert outcome.reason
        assert time.monotonic() - start < 1.0

    def test_callable_ancestor_is_reresolved(self):
        """A callable ancestor should be called on every attempt."""
        trees = [
            None,
            FakeNode(Kind.WEB_AREA, [FakeNode(Kind.STATIC_TEXT, value="Loading")]),
            FakeNode(Kind.WEB_AREA, [FakeNode(Kind.BUTTON, description="Open, Xcode")]),
        ]
        calls = []

        def resolve():
            calls.append(1)
            return trees[min(len(calls) - 1, len(trees) - 1)]

        outcome = wait_for(Locator(), resolve, SearchSpec.of(Kind.BUTTON), timeout=1, interval=0.01)
        assert outcome.found
        assert len(calls) == 3

    def test_times_out(self):
        """Should report TIMED_OUT when nothing matches in time."""
        root = FakeNode(Kind.APPLICATION)
        outcome = wait_for(Locator(), root, SearchSpec.of(Kind.SHEET), timeout=0.05, interval=0.01)
        assert outcome.timed_out
        assert outcome.description == "sheet"


class TestWaitOutcome:
    """Tests for WaitOutcome truthiness."""

    def test_only_ok_is_truthy(self):
        """Only OK outcomes should be truthy."""
        assert WaitOutcome(status=WaitStatus.OK)
        assert not WaitOutcome(status=WaitStatus.TIMED_OUT)
        assert not WaitOutcome(status=WaitStatus.INVALID)
