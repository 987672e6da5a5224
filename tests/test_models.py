"""Tests for the result models."""

import dataclasses

import pytest

from simpletest.core.models import (
    ClassResult,
    MethodResult,
    Outcome,
    RunSummary,
    TestClassDescriptor,
    TestUnit,
    UnitKind,
)


class TestOutcome:
    """Tests for Outcome enum."""

    def test_outcome_values(self):
        """Test that both outcomes exist."""
        assert Outcome.SUCCESS.value == "success"
        assert Outcome.FAIL.value == "fail"


class TestUnitKind:
    """Tests for UnitKind enum."""

    def test_is_hook(self):
        """Test only the lifecycle kinds are hooks."""
        assert not UnitKind.TEST_METHOD.is_hook
        assert UnitKind.BEFORE_ALL.is_hook
        assert UnitKind.AFTER_EACH.is_hook


class TestTestUnit:
    """Tests for TestUnit model."""

    def test_full_name(self):
        """Test the Class.method name."""
        unit = TestUnit(class_name="Tests", method_name="check")
        assert unit.full_name == "Tests.check"

    def test_invoke(self):
        """Test invoke calls the stored function with the instance."""
        unit = TestUnit("Tests", "check", func=lambda self: self * 2)
        assert unit.invoke(21) == 42

    def test_immutable(self):
        """Test units cannot be modified after creation."""
        unit = TestUnit("Tests", "check")
        with pytest.raises(dataclasses.FrozenInstanceError):
            unit.method_name = "other"


class TestTestClassDescriptor:
    """Tests for TestClassDescriptor model."""

    def test_hooks_skip_missing(self):
        """Test hooks only lists declared hooks."""

        class Container:
            pass

        hook = TestUnit("Container", "setup", kind=UnitKind.AFTER_ALL)
        descriptor = TestClassDescriptor(name="Container", cls=Container, after_all=hook)

        assert descriptor.hooks == {UnitKind.AFTER_ALL: hook}
        assert descriptor.qualified_name.endswith("Container")


class TestMethodResult:
    """Tests for MethodResult model."""

    def test_default_values(self):
        """Test default values."""
        result = MethodResult(name="check", outcome=Outcome.SUCCESS)
        assert result.messages == ()
        assert result.elapsed_ms == 0
        assert result.passed

    def test_equality_ignores_timing(self):
        """Test results differing only in elapsed time are equal."""
        first = MethodResult("check", Outcome.FAIL, ("boom",), elapsed_ms=3)
        second = MethodResult("check", Outcome.FAIL, ("boom",), elapsed_ms=70)
        assert first == second

    def test_to_dict(self):
        """Test converting to dictionary."""
        result = MethodResult("check", Outcome.FAIL, ("ValueError: x", "trace"), 12)

        d = result.to_dict()
        assert d["name"] == "check"
        assert d["outcome"] == "fail"
        assert d["messages"] == ["ValueError: x", "trace"]
        assert d["elapsed_ms"] == 12


class TestClassResultModel:
    """Tests for ClassResult model."""

    def test_to_dict(self):
        """Test converting to dictionary."""
        result = ClassResult(
            name="Tests",
            outcome=Outcome.SUCCESS,
            method_results=(MethodResult("check", Outcome.SUCCESS),),
            elapsed_ms=5,
        )

        d = result.to_dict()
        assert d["name"] == "Tests"
        assert d["outcome"] == "success"
        assert d["method_results"][0]["name"] == "check"
        assert d["messages"] == []

    def test_immutable(self):
        """Test class results cannot be modified after creation."""
        result = ClassResult(name="Tests", outcome=Outcome.SUCCESS)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.outcome = Outcome.FAIL


class TestRunSummary:
    """Tests for RunSummary."""

    def test_empty(self):
        """Test an empty run counts as a success."""
        summary = RunSummary.from_results([])
        assert summary.classes_total == 0
        assert summary.success

    def test_counts(self):
        """Test counting at class and method granularity."""
        results = [
            ClassResult(
                name="Tests",
                outcome=Outcome.FAIL,
                method_results=(
                    MethodResult("a", Outcome.SUCCESS),
                    MethodResult("b", Outcome.FAIL),
                ),
            ),
            ClassResult(
                name="Tests2",
                outcome=Outcome.SUCCESS,
                method_results=(MethodResult("c", Outcome.SUCCESS),),
            ),
        ]

        summary = RunSummary.from_results(results)

        assert summary.classes_passed == 1
        assert summary.classes_total == 2
        assert summary.methods_passed == 2
        assert summary.methods_total == 3
        assert not summary.success
        assert summary.to_dict()["success"] is False
