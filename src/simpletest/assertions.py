"""Assertion helpers for test methods.

Every helper raises ``AssertionFailure`` when its check does not hold and
appends the optional ``message`` to the failure text.
"""

from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from simpletest.errors import AssertionFailure
from simpletest.polling import await_at_most

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


def _fail(text: str, message: str) -> None:
    raise AssertionFailure(f"{text} {message}".rstrip())


def assert_true(value: Any, message: str = "") -> None:
    if not value:
        _fail("Value is false, but expected true.", message)


def assert_false(value: Any, message: str = "") -> None:
    if value:
        _fail("Value is true, but expected false.", message)


def assert_none(value: Any, message: str = "") -> None:
    if value is not None:
        _fail(f"Value should be None, but is: '{value!r}'.", message)


def assert_not_none(value: Any, message: str = "") -> None:
    if value is None:
        _fail("Value cannot be None.", message)


def assert_equal(expected: Any, actual: Any, message: str = "") -> None:
    """Check that ``actual == expected``."""
    if expected != actual:
        _fail(f"Value is not equal, is: '{actual!r}', but should be: '{expected!r}'.", message)


def assert_not_equal(unexpected: Any, actual: Any, message: str = "") -> None:
    if unexpected == actual:
        _fail(f"Value is equal to: '{unexpected!r}'.", message)


def assert_less_than(value: T, max_value: T, message: str = "") -> None:
    if not value < max_value:
        _fail(f"Value '{value!r}' is not less than '{max_value!r}'.", message)


def assert_more_than(value: T, min_value: T, message: str = "") -> None:
    if not value > min_value:
        _fail(f"Value '{value!r}' is not larger than '{min_value!r}'.", message)


def assert_equal_or_less_than(value: T, max_value: T, message: str = "") -> None:
    if value > max_value:
        _fail(f"Value '{value!r}' is greater than '{max_value!r}'.", message)


def assert_equal_or_more_than(value: T, min_value: T, message: str = "") -> None:
    if value < min_value:
        _fail(f"Value '{value!r}' is less than '{min_value!r}'.", message)


def assert_in_range(value: T, min_value: T, max_value: T, message: str = "") -> None:
    """Check that ``min_value <= value <= max_value``."""
    if value < min_value or value > max_value:
        _fail(f"Value '{value!r}' is not in range: [{min_value!r}-{max_value!r}].", message)


def assert_not_in_range(value: T, min_value: T, max_value: T, message: str = "") -> None:
    """Check that ``value`` lies outside the inclusive range."""
    if min_value <= value <= max_value:
        _fail(f"Value '{value!r}' is in range: [{min_value!r}-{max_value!r}].", message)


def assert_file_exists(path: Path | str, message: str = "") -> None:
    if not Path(path).is_file():
        _fail(f"File doesn't exist: {path}", message)


def assert_directory_exists(path: Path | str, message: str = "") -> None:
    if not Path(path).is_dir():
        _fail(f"Directory doesn't exist: {path}", message)


def assert_throws(
    expected: type[E], action: Callable[[], Any], message: str = ""
) -> E:
    """Check that calling ``action`` raises ``expected`` (or a subclass).

    Returns:
        The caught exception, for further checks
    """
    try:
        action()
    except expected as e:
        return e
    except Exception as e:
        raise AssertionFailure(
            f"Expected exception of type '{expected.__name__}', "
            f"but got '{type(e).__name__}' instead. {message}".rstrip()
        ) from e

    raise AssertionFailure(
        f"Expected exception of type '{expected.__name__}' was not thrown. {message}".rstrip()
    )


def assert_await_at_most(
    timeout_ms: int, action: Callable[[], Any], interval_ms: Optional[int] = None
) -> None:
    """Pass if ``action`` succeeds at least once within ``timeout_ms``."""
    await_at_most(timeout_ms, action, interval_ms=interval_ms)
