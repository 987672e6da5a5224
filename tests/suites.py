"""Test modules written to disk by the loader and CLI tests."""

import textwrap
from pathlib import Path

SAMPLE_SUITE = '''
from simpletest import (
    assert_await_at_most,
    assert_equal,
    assert_throws,
    simple_after_all,
    simple_before_all,
    simple_test_class,
    simple_test_method,
)


@simple_test_class
class Tests:
    @simple_before_all
    def before_all(self):
        self.ready = True

    @simple_test_method
    def assertion_tests_pass(self):
        assert_equal(0, 0)

    @simple_test_method
    def assertion_tests_fail(self):
        assert_equal(0, 1)

    @simple_after_all
    def after_all(self):
        pass


@simple_test_class
class Tests2:
    @simple_test_method
    def lambda_assertion_pass(self):
        assert_throws(ZeroDivisionError, lambda: 1 / 0)
        assert_await_at_most(1000, lambda: None)

    @simple_test_method
    def lambda_assertion_pass_fail(self):
        def endless():
            raise ValueError("Example endless exception.")

        assert_await_at_most(50, endless)
'''

PASSING_SUITE = '''
from simpletest import assert_true, simple_test_class, simple_test_method


@simple_test_class
class Green:
    @simple_test_method
    def passes(self):
        assert_true(True)
'''


def write_suite(directory: Path, filename: str, source: str) -> Path:
    """Write a test module into a directory."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(textwrap.dedent(source))
    return path
