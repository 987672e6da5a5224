"""Console reporting of test results."""

from simpletest.report.printer import ConsolePrinter

__all__ = ["ConsolePrinter"]
