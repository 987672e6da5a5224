"""Data models for discovered test units and their results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


CLASS_FAILURE_FALLBACK = "At least one of the methods has failed"


class Outcome(str, Enum):
    """Outcome of a test method or class run."""

    SUCCESS = "success"
    FAIL = "fail"


class UnitKind(str, Enum):
    """Role of a marked method inside a test container."""

    TEST_METHOD = "test_method"
    BEFORE_ALL = "before_all"
    AFTER_ALL = "after_all"
    BEFORE_EACH = "before_each"
    AFTER_EACH = "after_each"

    @property
    def is_hook(self) -> bool:
        return self is not UnitKind.TEST_METHOD


@dataclass(frozen=True)
class TestUnit:
    """A marked method of a test container, bound to its callable."""

    __test__ = False

    class_name: str
    method_name: str
    kind: UnitKind = UnitKind.TEST_METHOD
    func: Optional[Callable[[Any], Any]] = field(default=None, compare=False, repr=False)

    @property
    def full_name(self) -> str:
        """Get the ``Class.method`` name of the unit."""
        return f"{self.class_name}.{self.method_name}"

    def invoke(self, instance: Any) -> Any:
        """Call the unit on a container instance."""
        return self.func(instance)


@dataclass(frozen=True)
class TestClassDescriptor:
    """A registered test container with its hooks and test methods."""

    __test__ = False

    name: str
    cls: type = field(compare=False, repr=False)
    methods: tuple[TestUnit, ...] = ()
    before_all: Optional[TestUnit] = None
    after_all: Optional[TestUnit] = None
    before_each: Optional[TestUnit] = None
    after_each: Optional[TestUnit] = None

    @property
    def qualified_name(self) -> str:
        """Get the module-qualified name of the container class."""
        return f"{self.cls.__module__}.{self.cls.__qualname__}"

    @property
    def hooks(self) -> dict[UnitKind, TestUnit]:
        """Get the declared hooks keyed by kind."""
        hooks = {
            UnitKind.BEFORE_ALL: self.before_all,
            UnitKind.AFTER_ALL: self.after_all,
            UnitKind.BEFORE_EACH: self.before_each,
            UnitKind.AFTER_EACH: self.after_each,
        }
        return {kind: unit for kind, unit in hooks.items() if unit is not None}

    @property
    def method_names(self) -> list[str]:
        return [unit.method_name for unit in self.methods]


@dataclass(frozen=True)
class MethodResult:
    """Result of a single test method execution.

    ``messages`` is empty on success. On failure the first line is a short
    ``ExceptionType: message`` summary, followed by the traceback lines.
    """

    name: str
    outcome: Outcome
    messages: tuple[str, ...] = ()
    elapsed_ms: int = field(default=0, compare=False)

    @property
    def passed(self) -> bool:
        return self.outcome == Outcome.SUCCESS

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "outcome": self.outcome.value,
            "messages": list(self.messages),
            "elapsed_ms": self.elapsed_ms,
        }


@dataclass(frozen=True)
class ClassResult:
    """Result of a test class run.

    Timing fields do not take part in equality, so two runs of the same class
    compare equal when they produced the same outcomes and messages.
    """

    name: str
    outcome: Outcome
    method_results: tuple[MethodResult, ...] = ()
    elapsed_ms: int = field(default=0, compare=False)
    messages: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return self.outcome == Outcome.SUCCESS

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "outcome": self.outcome.value,
            "method_results": [r.to_dict() for r in self.method_results],
            "elapsed_ms": self.elapsed_ms,
            "messages": list(self.messages),
        }


@dataclass
class RunSummary:
    """Pass/total counts at class and method granularity."""

    classes_passed: int = 0
    classes_total: int = 0
    methods_passed: int = 0
    methods_total: int = 0

    @property
    def success(self) -> bool:
        """A run succeeds when every class succeeded."""
        return self.classes_passed == self.classes_total

    @classmethod
    def from_results(cls, results: list[ClassResult]) -> "RunSummary":
        """Count outcomes over a sequence of class results."""
        summary = cls()
        for class_result in results:
            summary.classes_total += 1
            if class_result.passed:
                summary.classes_passed += 1
            for method_result in class_result.method_results:
                summary.methods_total += 1
                if method_result.passed:
                    summary.methods_passed += 1
        return summary

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "classes_passed": self.classes_passed,
            "classes_total": self.classes_total,
            "methods_passed": self.methods_passed,
            "methods_total": self.methods_total,
            "success": self.success,
        }
