import threading
import time
from unittest.mock import Mock, patch

import pytest
from selenium.common.exceptions import StaleElementReferenceException, WebDriverException

from mcp_jitsi_call.utils.retry import RetryTask, retry_op, retry_until_true


class TestRetryOp:

    @patch("mcp_jitsi_call.utils.retry.time.sleep")
    def test_retries_transient_driver_errors(self, mock_sleep):
        fn = Mock(side_effect=[WebDriverException("session not created"), StaleElementReferenceException(), "driver"])
        assert retry_op(fn, retries=2) == "driver"
        assert fn.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("mcp_jitsi_call.utils.retry.time.sleep")
    def test_raises_last_error(self, mock_sleep):
        fn = Mock(side_effect=WebDriverException("chrome not reachable"))
        with pytest.raises(WebDriverException):
            retry_op(fn, retries=1)
        assert fn.call_count == 2

    def test_other_errors_are_not_retried(self):
        fn = Mock(side_effect=ValueError("bad option"))
        with pytest.raises(ValueError):
            retry_op(fn)
        assert fn.call_count == 1


class TestRetryUntilTrue:

    @patch("mcp_jitsi_call.utils.retry.time.sleep")
    def test_sleeps_between_attempts_only(self, mock_sleep):
        fn = Mock(return_value=False)
        assert retry_until_true(fn, attempts=5, delay=2.0) is False
        assert fn.call_count == 5
        assert mock_sleep.call_count == 4
        mock_sleep.assert_called_with(2.0)

    def test_stops_at_first_success(self):
        fn = Mock(side_effect=[False, True, False])
        attempts = []
        assert retry_until_true(fn, attempts=5, delay=0, on_attempt=attempts.append) is True
        assert attempts == [1, 2]

    def test_stop_event_set_before_start(self):
        stop = threading.Event()
        stop.set()
        fn = Mock(return_value=True)
        assert retry_until_true(fn, attempts=5, delay=0, stop_event=stop) is False
        fn.assert_not_called()

    def test_zero_attempts(self):
        fn = Mock(return_value=True)
        assert retry_until_true(fn, attempts=0, delay=0) is False
        fn.assert_not_called()


class TestRetryTask:

    def test_result_times_out_while_running(self):
        release = threading.Event()
        task = RetryTask(lambda: release.wait(2), attempts=1, delay=0, name="slow").start()
        with pytest.raises(TimeoutError):
            task.result(timeout=0.01)
        release.set()
        assert task.result(timeout=2) is True
        assert "succeeded" in repr(task)

    def test_runs_on_daemon_thread(self):
        seen = {}

        def fn():
            seen["thread"] = threading.current_thread()
            return True

        task = RetryTask(fn, attempts=1, delay=0, name="send-endpoint-message").start()
        assert task.result(timeout=2) is True
        assert seen["thread"] is not threading.main_thread()
        assert seen["thread"].daemon is True
        assert seen["thread"].name == "send-endpoint-message"

    def test_cancel_interrupts_delay(self):
        task = RetryTask(lambda: False, attempts=3, delay=30, name="never").start()
        deadline = time.monotonic() + 2
        while task.attempts_made < 1 and time.monotonic() < deadline:
            time.sleep(0.01)
        task.cancel()
        assert task.wait(2) is True
        assert task.attempts_made == 1
        assert "failed" in repr(task)
