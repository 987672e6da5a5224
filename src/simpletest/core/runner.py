"""Test execution orchestration."""

import logging
import time
import traceback
from pathlib import Path
from types import TracebackType
from typing import Any, Callable, Optional, Sequence

from simpletest.core.models import (
    CLASS_FAILURE_FALLBACK,
    ClassResult,
    MethodResult,
    Outcome,
    TestClassDescriptor,
    TestUnit,
)
from simpletest.core.registry import UnitRegistry, get_default_registry
from simpletest.errors import LifecycleHookFailure, summarize_exception

logger = logging.getLogger(__name__)

ClassBeginCallback = Callable[[str], None]
MethodResultCallback = Callable[[MethodResult], None]
ClassEndCallback = Callable[[ClassResult], None]

_CORE_DIR = Path(__file__).resolve().parent


class SimpleTestRunner:
    """Runs registered test containers through their lifecycle.

    Classes and methods run strictly one after another on the calling
    thread. Results are streamed to the optional callbacks as they are
    produced, and every run builds a fresh result tree.
    """

    def __init__(
        self,
        registry: Optional[UnitRegistry] = None,
        on_class_begin: Optional[ClassBeginCallback] = None,
        on_method_result: Optional[MethodResultCallback] = None,
        on_class_end: Optional[ClassEndCallback] = None,
    ):
        """Initialize the runner.

        Args:
            registry: Registry to run from (default: the process-wide registry)
            on_class_begin: Called with the class name before a class runs
            on_method_result: Called with each method result as soon as it exists
            on_class_end: Called with the class result after a class finishes
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.on_class_begin = on_class_begin
        self.on_method_result = on_method_result
        self.on_class_end = on_class_end

    def run_all(self) -> list[ClassResult]:
        """Run every registered test class."""
        return [self.run_descriptor(d) for d in self.registry.discover_all()]

    def run_class(self, name: str) -> ClassResult:
        """Run all test methods of one class.

        Raises:
            UnknownClassError: If the class is not registered
        """
        return self.run_descriptor(self.registry.find_class(name))

    def run_method(self, class_name: str, method_name: str) -> ClassResult:
        """Run a single test method, still wrapped in all of its class hooks.

        Raises:
            UnknownClassError: If the class is not registered
            UnknownMethodError: If the class has no such test method
        """
        descriptor = self.registry.find_class(class_name)
        unit = self.registry.find_method(descriptor, method_name)
        return self.run_descriptor(descriptor, units=[unit])

    def run_descriptor(
        self,
        descriptor: TestClassDescriptor,
        units: Optional[Sequence[TestUnit]] = None,
    ) -> ClassResult:
        """Run a container's lifecycle over the given units (default: all)."""
        if units is None:
            units = descriptor.methods

        if self.on_class_begin:
            self.on_class_begin(descriptor.name)
        logger.debug("Running test class %s (%d methods)", descriptor.name, len(units))

        method_results: list[MethodResult] = []
        hook_messages: list[str] = []
        class_start = time.perf_counter()

        try:
            instance = self._instantiate(descriptor)
            self._run_hook(descriptor.before_all, instance)

            for unit in units:
                self._run_hook(descriptor.before_each, instance)

                method_result = self._run_unit(unit, instance)
                method_results.append(method_result)
                if self.on_method_result:
                    self.on_method_result(method_result)

                self._run_hook(descriptor.after_each, instance)

            self._run_hook(descriptor.after_all, instance)
        except LifecycleHookFailure as e:
            logger.warning("Test class %s aborted: %s", descriptor.name, e)
            hook_messages = [str(e)] + format_exception_lines(e.cause)[1:]

        elapsed_ms = _elapsed_ms(class_start)

        if hook_messages:
            outcome = Outcome.FAIL
            messages = hook_messages
        elif any(not r.passed for r in method_results):
            outcome = Outcome.FAIL
            messages = [CLASS_FAILURE_FALLBACK]
        else:
            outcome = Outcome.SUCCESS
            messages = []

        class_result = ClassResult(
            name=descriptor.name,
            outcome=outcome,
            method_results=tuple(method_results),
            elapsed_ms=elapsed_ms,
            messages=tuple(messages),
        )
        logger.debug(
            "Finished test class %s: %s in %dms",
            descriptor.name,
            outcome.value,
            elapsed_ms,
        )

        if self.on_class_end:
            self.on_class_end(class_result)

        return class_result

    def _instantiate(self, descriptor: TestClassDescriptor) -> Any:
        """Create the one container instance used for a class run."""
        try:
            return descriptor.cls()
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            raise LifecycleHookFailure("constructor", "__init__", e) from e

    def _run_hook(self, hook: Optional[TestUnit], instance: Any) -> None:
        """Invoke a lifecycle hook, wrapping any failure."""
        if hook is None:
            return
        try:
            hook.invoke(instance)
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            raise LifecycleHookFailure(hook.kind.value, hook.method_name, e) from e

    def _run_unit(self, unit: TestUnit, instance: Any) -> MethodResult:
        """Invoke a test method, isolating any failure into its result."""
        logger.debug("Running test method %s", unit.full_name)
        start = time.perf_counter()
        try:
            unit.invoke(instance)
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            elapsed_ms = _elapsed_ms(start)
            logger.debug("Test method %s failed: %s", unit.full_name, e)
            return MethodResult(
                name=unit.method_name,
                outcome=Outcome.FAIL,
                messages=tuple(format_exception_lines(e)),
                elapsed_ms=elapsed_ms,
            )

        return MethodResult(
            name=unit.method_name,
            outcome=Outcome.SUCCESS,
            elapsed_ms=_elapsed_ms(start),
        )


def format_exception_lines(exc: BaseException) -> list[str]:
    """Format an exception as diagnostic lines.

    The first line is the ``Type: message`` summary. The traceback that
    follows starts at the first frame outside the runner, so the lines point
    at the test code rather than at the machinery that called it.
    """
    summary = summarize_exception(exc)
    tb = _trim_runner_frames(exc.__traceback__)
    text = "".join(traceback.format_exception(type(exc), exc, tb))
    return [summary] + text.rstrip("\n").splitlines()


def _trim_runner_frames(tb: Optional[TracebackType]) -> Optional[TracebackType]:
    while tb is not None and tb.tb_next is not None:
        filename = Path(tb.tb_frame.f_code.co_filename).resolve()
        if filename.parent != _CORE_DIR:
            break
        tb = tb.tb_next
    return tb


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
