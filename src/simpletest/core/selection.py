"""Narrowing a run to one class or one method."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from simpletest.core.models import ClassResult
from simpletest.core.runner import SimpleTestRunner
from simpletest.errors import SelectionUsageError


class SelectionMode(str, Enum):
    """Which runner operation a selection maps to."""

    ALL = "all"
    CLASS = "class"
    METHOD = "method"


@dataclass(frozen=True)
class Selection:
    """A validated pair of optional class and method selectors."""

    class_name: Optional[str] = None
    method_name: Optional[str] = None

    def __post_init__(self):
        if self.method_name and not self.class_name:
            raise SelectionUsageError(
                "A test method can only be selected together with its test class"
            )

    @property
    def mode(self) -> SelectionMode:
        if not self.class_name:
            return SelectionMode.ALL
        if not self.method_name:
            return SelectionMode.CLASS
        return SelectionMode.METHOD


def run_selection(runner: SimpleTestRunner, selection: Selection) -> list[ClassResult]:
    """Run whatever the selection asks for.

    Raises:
        UnknownClassError: If the selected class is not registered
        UnknownMethodError: If the selected method does not exist
    """
    if selection.mode == SelectionMode.ALL:
        return runner.run_all()
    if selection.mode == SelectionMode.CLASS:
        return [runner.run_class(selection.class_name)]
    return [runner.run_method(selection.class_name, selection.method_name)]


def run_selected(
    runner: SimpleTestRunner,
    class_name: Optional[str] = None,
    method_name: Optional[str] = None,
) -> list[ClassResult]:
    """Validate the selectors and run them.

    Raises:
        SelectionUsageError: If a method is given without its class
    """
    return run_selection(runner, Selection(class_name, method_name))
