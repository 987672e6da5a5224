"""Exception types raised by simpletest."""

from typing import Optional


class SimpleTestError(Exception):
    """Base class for all simpletest errors."""

    pass


class UnknownClassError(SimpleTestError):
    """Raised when a requested test class is not registered."""

    def __init__(self, class_name: str):
        super().__init__(f"Unknown test class: '{class_name}'")
        self.class_name = class_name


class UnknownMethodError(SimpleTestError):
    """Raised when a requested test method does not exist on a test class."""

    def __init__(self, class_name: str, method_name: str):
        super().__init__(
            f"Unknown test method: '{method_name}' in class '{class_name}'"
        )
        self.class_name = class_name
        self.method_name = method_name


class SelectionUsageError(SimpleTestError):
    """Raised when the selectors form an invalid combination."""

    pass


class RegistrationError(SimpleTestError):
    """Raised when a test container is declared incorrectly."""

    pass


class LifecycleHookFailure(SimpleTestError):
    """Wraps an exception raised by a lifecycle hook.

    Hook failures are not isolated per method: they abort the remainder of
    the class run and become the class failure reason.
    """

    def __init__(self, stage: str, hook_name: str, cause: BaseException):
        summary = summarize_exception(cause)
        super().__init__(f"{stage} hook '{hook_name}' failed: {summary}")
        self.stage = stage
        self.hook_name = hook_name
        self.cause = cause


class AssertionFailure(SimpleTestError, AssertionError):
    """Raised by the assertion helpers when a check does not hold."""

    pass


class AwaitTimeoutError(SimpleTestError, TimeoutError):
    """Raised when a polled action does not succeed before its deadline."""

    def __init__(
        self,
        timeout_ms: int,
        last_exception: Optional[BaseException] = None,
        trace: str = "",
    ):
        reason = (
            summarize_exception(last_exception)
            if last_exception is not None
            else "No exception, timed out."
        )
        message = f"Assertion was not passed in time: {timeout_ms}ms. Reason: {reason}"
        if trace:
            message = f"{message}\n{trace}"
        super().__init__(message)
        self.timeout_ms = timeout_ms
        self.last_exception = last_exception


def summarize_exception(exc: BaseException) -> str:
    """Return a one-line ``Type: message`` summary of an exception."""
    lines = str(exc).strip().splitlines()
    if lines:
        return f"{type(exc).__name__}: {lines[0]}"
    return type(exc).__name__
