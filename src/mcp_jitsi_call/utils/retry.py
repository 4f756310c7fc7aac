"""Retry logic and background retry tasks."""

import time
import random
import threading
from typing import Callable, Optional
from selenium.common.exceptions import WebDriverException

import logging
logger = logging.getLogger(__name__)


def retry_op(fn: Callable, retries: int = 2, base_delay: float = 0.15):
    """
    Retry a function call that may fail due to transient Selenium exceptions.

    Args:
        fn: The function to call
        retries: Number of retry attempts (default: 2)
        base_delay: Base delay between retries in seconds (default: 0.15)

    Returns:
        The result of the function call

    Raises:
        The last exception if all retries fail
    """
    for attempt in range(retries + 1):
        try:
            return fn()
        except WebDriverException:
            if attempt == retries:
                raise
            time.sleep(base_delay * (1.0 + random.random()))


def retry_until_true(
    fn: Callable[[], bool],
    attempts: int,
    delay: float,
    stop_event: Optional[threading.Event] = None,
    on_attempt: Optional[Callable[[int], None]] = None,
) -> bool:
    """
    Call fn until it returns a truthy value, at most `attempts` times.

    Waits `delay` seconds between two attempts (not after the last one).
    Setting stop_event stops before the next attempt and interrupts the wait.

    Returns:
        True if an attempt succeeded, False otherwise
    """
    for attempt in range(attempts):
        if stop_event is not None and stop_event.is_set():
            return False
        if on_attempt is not None:
            on_attempt(attempt + 1)
        if fn():
            return True
        if attempt == attempts - 1:
            break
        if stop_event is not None:
            if stop_event.wait(delay):
                return False
        elif delay > 0:
            time.sleep(delay)
    return False


class RetryTask:
    """
    Runs retry_until_true on a daemon thread so the caller does not block.

    The outcome stays observable: done(), wait(), result(), succeeded,
    attempts_made and error. cancel() stops further attempts.
    """

    def __init__(self, fn: Callable[[], bool], attempts: int, delay: float, name: Optional[str] = None):
        self._fn = fn
        self._attempts = attempts
        self._delay = delay
        self._cancel = threading.Event()
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name or "retry-task", daemon=True)
        self.succeeded = False
        self.attempts_made = 0
        self.error: Optional[BaseException] = None

    def _count_attempt(self, n: int) -> None:
        self.attempts_made = n

    def _run(self) -> None:
        try:
            self.succeeded = retry_until_true(
                self._fn,
                self._attempts,
                self._delay,
                stop_event=self._cancel,
                on_attempt=self._count_attempt,
            )
            if not self.succeeded and not self.cancelled():
                logger.error(f"{self._thread.name} gave up after {self.attempts_made} attempt(s)")
        except Exception as e:
            logger.exception(f"{self._thread.name} failed after {self.attempts_made} attempt(s)")
            self.error = e
        finally:
            self._done.set()

    def start(self) -> "RetryTask":
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._cancel.set()

    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the task finishes. Returns False if it is still running."""
        return self._done.wait(timeout)

    def result(self, timeout: Optional[float] = None) -> bool:
        if not self.wait(timeout):
            raise TimeoutError(f"{self._thread.name} still running after {timeout}s")
        return self.succeeded

    def __repr__(self) -> str:
        state = "running"
        if self.done():
            state = "succeeded" if self.succeeded else "failed"
        return f"<RetryTask {self._thread.name} {state} attempts={self.attempts_made}>"


__all__ = ["retry_op", "retry_until_true", "RetryTask"]
