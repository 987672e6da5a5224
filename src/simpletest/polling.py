"""Retry-until-success-or-timeout assertion primitive.

``await_at_most`` runs an action on a background thread, retrying it every
``interval_ms`` until one call returns without raising. The calling thread
waits for that with a deadline, so a slow or hanging action never keeps the
deadline from firing.

When the deadline wins, the background thread is abandoned, not killed.
With ``cancel_on_timeout`` (the default) it stops retrying once its
in-flight attempt returns; without it the thread keeps retrying and its
outcome is discarded. An action that never returns leaks its thread for the
life of the process. The thread is a daemon so it never blocks exit.
"""

import logging
import threading
import time
import traceback
from typing import Any, Callable, Optional

from simpletest.errors import AwaitTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 10

_default_interval_ms = DEFAULT_INTERVAL_MS


def set_default_interval(interval_ms: int) -> None:
    """Set the process-wide delay between attempts."""
    global _default_interval_ms
    if interval_ms < 1:
        raise ValueError("Polling interval must be at least 1ms")
    _default_interval_ms = interval_ms


def get_default_interval() -> int:
    return _default_interval_ms


class _RetryLoop:
    """State shared between the retry thread and the waiting caller."""

    def __init__(self, action: Callable[[], Any], interval_ms: int):
        self.action = action
        self.interval = interval_ms / 1000
        self.done = threading.Event()
        self.cancelled = threading.Event()
        self.attempts = 0
        self._lock = threading.Lock()
        self._last_exception: Optional[Exception] = None
        self._fault: Optional[BaseException] = None

    @property
    def last_exception(self) -> Optional[Exception]:
        with self._lock:
            return self._last_exception

    @property
    def fault(self) -> Optional[BaseException]:
        with self._lock:
            return self._fault

    def run(self) -> None:
        try:
            while not self.cancelled.is_set():
                self.attempts += 1
                try:
                    self.action()
                    break
                except Exception as e:
                    with self._lock:
                        self._last_exception = e
                    logger.debug("Attempt %d failed: %s", self.attempts, e)
                self.cancelled.wait(self.interval)
        except BaseException as e:
            with self._lock:
                self._fault = e
        finally:
            self.done.set()


def await_at_most(
    timeout_ms: int,
    action: Callable[[], Any],
    interval_ms: Optional[int] = None,
    cancel_on_timeout: bool = True,
) -> None:
    """Retry an action until it succeeds once or the timeout elapses.

    Args:
        timeout_ms: Deadline in milliseconds
        action: Callable taking no arguments; raising means "not yet"
        interval_ms: Delay between attempts (default: the process default, 10ms)
        cancel_on_timeout: Stop retrying after the deadline once the in-flight
            attempt returns

    Raises:
        AwaitTimeoutError: If no attempt succeeded in time. The message holds
            the last failure's summary and traceback.
        BaseException: Any non-``Exception`` fault raised by the action is
            re-raised as is.
        ValueError: If the timeout is negative or the interval is below 1ms
    """
    if timeout_ms < 0:
        raise ValueError("Timeout must not be negative")

    if interval_ms is None:
        interval_ms = _default_interval_ms
    elif interval_ms < 1:
        raise ValueError("Polling interval must be at least 1ms")

    loop = _RetryLoop(action, interval_ms)
    worker = threading.Thread(
        target=loop.run,
        name=f"simpletest-await-{getattr(action, '__name__', 'action')}",
        daemon=True,
    )

    start = time.perf_counter()
    worker.start()

    if not loop.done.wait(timeout_ms / 1000):
        if cancel_on_timeout:
            loop.cancelled.set()
        last = loop.last_exception
        logger.debug(
            "Timed out after %dms and %d attempts",
            int((time.perf_counter() - start) * 1000),
            loop.attempts,
        )
        trace = ""
        if last is not None:
            trace = "".join(traceback.format_tb(last.__traceback__)).rstrip("\n")
        raise AwaitTimeoutError(timeout_ms, last, trace) from last

    fault = loop.fault
    if fault is not None:
        raise fault
