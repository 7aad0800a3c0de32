"""Tests for Debouncer."""
import pytest
import threading
import time

from lexisent.session.debounce import Debouncer


class TestDebouncer:
    """Tests for Debouncer class."""

    @pytest.fixture
    def calls(self) -> list:
        return []

    @pytest.fixture
    def done(self) -> threading.Event:
        return threading.Event()

    @pytest.fixture
    def debouncer(self, calls: list, done: threading.Event) -> Debouncer:
        """Create a debouncer with a short delay."""
        def callback(text: str) -> None:
            calls.append(text)
            done.set()

        d = Debouncer(callback, delay_seconds=0.05)
        yield d
        d.cancel()

    def test_only_last_submission_runs(self, debouncer: Debouncer, calls: list, done: threading.Event):
        """Test that rapid submissions coalesce into one call."""
        debouncer.submit("I")
        debouncer.submit("I love")
        debouncer.submit("I love this")

        assert done.wait(timeout=2.0)
        time.sleep(0.1)
        assert calls == ["I love this"]
        assert debouncer.pending is False

    def test_cancel(self, debouncer: Debouncer, calls: list):
        """Test that cancel drops the pending call."""
        debouncer.submit("hello")
        debouncer.cancel()

        time.sleep(0.15)
        assert calls == []

    def test_flush_runs_immediately(self, debouncer: Debouncer, calls: list):
        """Test that flush runs the pending call synchronously."""
        debouncer.submit("now please")
        debouncer.flush()

        assert calls == ["now please"]
        time.sleep(0.15)
        assert calls == ["now please"]

    def test_flush_without_pending(self, debouncer: Debouncer, calls: list):
        """Test that flush is a no-op with nothing pending."""
        debouncer.flush()
        assert calls == []

    def test_blank_submission_clears(self, calls: list):
        """Test that blank text cancels and fires on_clear."""
        cleared = []
        d = Debouncer(calls.append, delay_seconds=0.05, on_clear=lambda: cleared.append(True))

        d.submit("text")
        d.submit("   ")
        time.sleep(0.15)

        assert calls == []
        assert cleared == [True]

    def test_callback_error_logged_with_traceback(
        self, done: threading.Event, caplog: pytest.LogCaptureFixture
    ):
        """Test that callback errors are logged with their traceback, not raised."""
        def boom(text: str) -> None:
            done.set()
            raise RuntimeError("boom")

        with caplog.at_level("WARNING", logger="debounce"):
            d = Debouncer(boom, delay_seconds=0.01)
            d.submit("x")
            assert done.wait(timeout=2.0)
            time.sleep(0.1)

        errors = [r for r in caplog.records if r.name == "debounce"]
        assert len(errors) == 1
        assert errors[0].levelname == "ERROR"
        assert errors[0].exc_info is not None
        assert "boom" in errors[0].getMessage()

    def test_negative_delay_rejected(self):
        """Test that negative delays are invalid."""
        with pytest.raises(ValueError, match="must be >= 0"):
            Debouncer(lambda text: None, delay_seconds=-1)
