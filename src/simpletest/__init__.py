"""
simpletest - a minimal test-execution framework.

This package provides tools to:
- Mark classes as test containers and their methods as tests or lifecycle hooks
- Run every container, one container, or one method with its hooks
- Assert on values, files and conditions that become true over time
- Report per-method and per-class outcomes to the console
"""

__version__ = "0.1.0"
__author__ = "SimpleTest Team"

from simpletest.assertions import (
    assert_await_at_most,
    assert_directory_exists,
    assert_equal,
    assert_equal_or_less_than,
    assert_equal_or_more_than,
    assert_false,
    assert_file_exists,
    assert_in_range,
    assert_less_than,
    assert_more_than,
    assert_none,
    assert_not_equal,
    assert_not_in_range,
    assert_not_none,
    assert_throws,
    assert_true,
)
from simpletest.core.models import ClassResult, MethodResult, Outcome, RunSummary
from simpletest.core.runner import SimpleTestRunner
from simpletest.errors import (
    AssertionFailure,
    AwaitTimeoutError,
    LifecycleHookFailure,
    RegistrationError,
    SelectionUsageError,
    SimpleTestError,
    UnknownClassError,
    UnknownMethodError,
)
from simpletest.helpers import TestDirectory, verify_equals
from simpletest.markers import (
    simple_after_all,
    simple_after_each,
    simple_before_all,
    simple_before_each,
    simple_test_class,
    simple_test_method,
)
from simpletest.polling import await_at_most

__all__ = [
    "AssertionFailure",
    "AwaitTimeoutError",
    "ClassResult",
    "LifecycleHookFailure",
    "MethodResult",
    "Outcome",
    "RegistrationError",
    "RunSummary",
    "SelectionUsageError",
    "SimpleTestError",
    "SimpleTestRunner",
    "TestDirectory",
    "UnknownClassError",
    "UnknownMethodError",
    "assert_await_at_most",
    "assert_directory_exists",
    "assert_equal",
    "assert_equal_or_less_than",
    "assert_equal_or_more_than",
    "assert_false",
    "assert_file_exists",
    "assert_in_range",
    "assert_less_than",
    "assert_more_than",
    "assert_none",
    "assert_not_equal",
    "assert_not_in_range",
    "assert_not_none",
    "assert_throws",
    "assert_true",
    "await_at_most",
    "simple_after_all",
    "simple_after_each",
    "simple_before_all",
    "simple_before_each",
    "simple_test_class",
    "simple_test_method",
    "verify_equals",
]
