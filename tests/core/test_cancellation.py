"""Tests for cooperative cancellation."""

import threading

import pytest
from unittest.mock import Mock

from progress_provider.core import CancellationSource
from progress_provider.foundations.types import OperationCancelledError


class TestCancellationSource:
    """Test the cancellation signal."""

    def setup_method(self):
        self.source = CancellationSource()

    def test_initial_state(self):
        assert not self.source.is_cancellation_requested
        assert not self.source.is_closed
        self.source.raise_if_cancellation_requested()

    def test_cancel_sets_flag(self):
        self.source.cancel()

        assert self.source.is_cancellation_requested
        with pytest.raises(OperationCancelledError):
            self.source.raise_if_cancellation_requested()

    def test_callbacks_run_once(self):
        callback = Mock()
        self.source.register(callback)

        self.source.cancel()
        self.source.cancel()

        callback.assert_called_once_with()

    def test_register_after_cancel_runs_immediately(self):
        self.source.cancel()
        callback = Mock()

        self.source.register(callback)

        callback.assert_called_once_with()

    def test_failing_callback_does_not_stop_others(self):
        failing = Mock(side_effect=RuntimeError("boom"))
        working = Mock()
        self.source.register(failing)
        self.source.register(working)

        self.source.cancel()

        working.assert_called_once_with()

    def test_close_drops_callbacks(self):
        callback = Mock()
        self.source.register(callback)

        self.source.close()
        self.source.close()
        self.source.cancel()

        callback.assert_not_called()
        assert self.source.is_closed

    def test_wait_returns_when_cancelled(self):
        worker_saw_cancel = []

        def worker():
            worker_saw_cancel.append(self.source.wait(timeout=5.0))

        thread = threading.Thread(target=worker)
        thread.start()
        self.source.cancel()
        thread.join(timeout=5.0)

        assert worker_saw_cancel == [True]

    def test_wait_times_out(self):
        assert self.source.wait(timeout=0.01) is False
