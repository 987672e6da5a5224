"""Console output of test results using rich."""

import time
from typing import Optional

from rich.console import Console
from rich.text import Text

from simpletest.config import OutputConfig
from simpletest.core.models import ClassResult, MethodResult, RunSummary

PREFIX_RUN = "[RUN]"
PREFIX_OK = "[OK ]"
PREFIX_ERROR = "[ERR]"
SEPARATOR = "-" * 22


class ConsolePrinter:
    """Streams results to the console as the runner produces them.

    The ``on_*`` methods match the runner's callbacks, so a printer can be
    wired straight into ``SimpleTestRunner``.
    """

    def __init__(self, console: Optional[Console] = None, config: Optional[OutputConfig] = None):
        """Initialize the printer.

        Args:
            console: Console to print to (default: a new stdout console)
            config: Output configuration
        """
        self.config = config or OutputConfig()
        self.console = console or Console(
            no_color=not self.config.color, highlight=False, soft_wrap=True
        )
        self._start: Optional[float] = None

    def on_class_begin(self, name: str) -> None:
        if self._start is None:
            self._start = time.perf_counter()
        self.console.print(Text.assemble((PREFIX_RUN, "blue"), " ", name))

    def on_method_result(self, result: MethodResult) -> None:
        if result.passed:
            self.console.print(Text.assemble("-> ", (PREFIX_OK, "green"), " ", result.name))
            return

        self.console.print(Text.assemble("-> ", (PREFIX_ERROR, "red"), " ", result.name))
        self.console.print(Text("\n".join(self.format_messages(result.messages))))

    def on_class_end(self, result: ClassResult) -> None:
        took = (format_time(result.elapsed_ms), "dim")
        if result.passed:
            self.console.print(Text.assemble((PREFIX_OK, "green"), " ", result.name, " ", took))
            return

        self.console.print(Text.assemble((PREFIX_ERROR, "red"), " ", result.name, " ", took))
        self.console.print(Text("\n".join(self.format_messages(result.messages))))

    def print_summary(self, results: list[ClassResult], elapsed_ms: Optional[int] = None) -> bool:
        """Print the pass/total counts of a run.

        Returns:
            True if every class passed
        """
        summary = RunSummary.from_results(results)
        if elapsed_ms is None:
            elapsed_ms = self._elapsed_ms()

        verdict = ("PASS", "green") if summary.success else ("FAIL", "red")
        self.console.print(SEPARATOR)
        self.console.print(
            Text.assemble(
                verdict,
                f" Classes: {summary.classes_passed}/{summary.classes_total}",
                f" Methods: {summary.methods_passed}/{summary.methods_total}",
            )
        )
        self.console.print(f"Took {format_time(elapsed_ms)}")
        self.console.print(SEPARATOR)
        return summary.success

    def format_messages(self, messages: tuple[str, ...]) -> list[str]:
        """Shorten a failure diagnostic unless full tracebacks are enabled.

        The short form keeps the summary line and the innermost frame.
        """
        if self.config.full_traceback or len(messages) <= 1:
            return list(messages)

        lines = [messages[0]]
        frame_indexes = [i for i, line in enumerate(messages) if line.lstrip().startswith('File "')]
        if frame_indexes:
            last = frame_indexes[-1]
            lines.append(messages[last])
            if last + 1 < len(messages) and messages[last + 1].startswith("    "):
                lines.append(messages[last + 1])
        return lines

    def _elapsed_ms(self) -> int:
        if self._start is None:
            return 0
        return int((time.perf_counter() - self._start) * 1000)


def format_time(ms: int) -> str:
    """Format milliseconds as seconds, e.g. ``1.234s``."""
    return f"{ms / 1000:.3f}s"
