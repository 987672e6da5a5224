"""Tests for the selection layer."""

from unittest.mock import Mock

import pytest

from simpletest.core.models import Outcome
from simpletest.core.registry import UnitRegistry
from simpletest.core.runner import SimpleTestRunner
from simpletest.core.selection import Selection, SelectionMode, run_selected, run_selection
from simpletest.errors import SelectionUsageError, UnknownClassError, UnknownMethodError
from simpletest.markers import simple_test_class, simple_test_method


@pytest.fixture
def runner():
    """Create a runner over two registered containers."""
    registry = UnitRegistry()

    @simple_test_class(registry=registry)
    class Tests:
        @simple_test_method
        def assertion_tests_fail(self):
            raise AssertionError("0 != 1")

    @simple_test_class(registry=registry)
    class Tests2:
        @simple_test_method
        def lambda_assertion_pass(self):
            pass

        @simple_test_method
        def lambda_assertion_pass_fail(self):
            raise TimeoutError("too slow")

    return SimpleTestRunner(registry)


class TestSelection:
    """Tests for Selection."""

    def test_modes(self):
        """Test each selector combination maps to its mode."""
        assert Selection().mode == SelectionMode.ALL
        assert Selection("Tests").mode == SelectionMode.CLASS
        assert Selection("Tests", "method").mode == SelectionMode.METHOD

    def test_method_without_class(self):
        """Test a method selector alone is a usage error."""
        with pytest.raises(SelectionUsageError):
            Selection(method_name="lambda_assertion_pass")


class TestRunSelection:
    """Tests for run_selection and run_selected."""

    def test_dispatch(self):
        """Test each mode calls the matching runner operation."""
        mock_runner = Mock()

        run_selection(mock_runner, Selection())
        run_selection(mock_runner, Selection("Tests2"))
        run_selection(mock_runner, Selection("Tests2", "lambda_assertion_pass"))

        mock_runner.run_all.assert_called_once_with()
        mock_runner.run_class.assert_called_once_with("Tests2")
        mock_runner.run_method.assert_called_once_with("Tests2", "lambda_assertion_pass")

    def test_run_everything(self, runner):
        """Test no selectors runs every class."""
        results = run_selected(runner)

        assert {r.name for r in results} == {"Tests", "Tests2"}

    def test_run_one_class(self, runner):
        """Test a class selector runs only that class."""
        results = run_selected(runner, "Tests2")

        assert [r.name for r in results] == ["Tests2"]
        assert len(results[0].method_results) == 2

    def test_run_one_method(self, runner):
        """Test class and method selectors run exactly one method."""
        results = run_selected(runner, "Tests2", "lambda_assertion_pass")

        assert len(results) == 1
        assert [m.name for m in results[0].method_results] == ["lambda_assertion_pass"]
        assert results[0].outcome == Outcome.SUCCESS

    def test_unknown_selectors(self, runner):
        """Test unknown names surface as lookup errors."""
        with pytest.raises(UnknownClassError):
            run_selected(runner, "NoSuchClass")
        with pytest.raises(UnknownMethodError):
            run_selected(runner, "Tests", "NoSuchMethod")

    def test_usage_error_runs_nothing(self):
        """Test an invalid combination never reaches the runner."""
        mock_runner = Mock()

        with pytest.raises(SelectionUsageError):
            run_selected(mock_runner, method_name="lambda_assertion_pass")

        mock_runner.run_all.assert_not_called()
        mock_runner.run_method.assert_not_called()
