"""Core test discovery and execution functionality."""

from simpletest.core.registry import UnitRegistry, get_default_registry
from simpletest.core.runner import SimpleTestRunner
from simpletest.core.selection import Selection, run_selected, run_selection

__all__ = [
    "UnitRegistry",
    "get_default_registry",
    "SimpleTestRunner",
    "Selection",
    "run_selected",
    "run_selection",
]
