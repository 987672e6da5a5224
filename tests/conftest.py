"""Shared fixtures."""

import sys
from pathlib import Path

import pytest

from simpletest.core.registry import get_default_registry
from simpletest.polling import DEFAULT_INTERVAL_MS, set_default_interval
from suites import SAMPLE_SUITE, write_suite


@pytest.fixture
def clean_registry(tmp_path):
    """Isolate the process-wide registry and the test modules imported from tmp_path."""
    registry = get_default_registry()
    saved = registry.discover_all()
    registry.clear()

    yield registry

    registry.clear()
    for descriptor in saved:
        registry.register(descriptor.cls)
    for name, module in list(sys.modules.items()):
        module_file = getattr(module, "__file__", None)
        if module_file and Path(module_file).resolve().is_relative_to(tmp_path.resolve()):
            del sys.modules[name]
    set_default_interval(DEFAULT_INTERVAL_MS)


@pytest.fixture
def sample_project(tmp_path, clean_registry):
    """Create a project whose tests/ directory holds the sample suite."""
    write_suite(tmp_path / "tests", "test_sample_suite.py", SAMPLE_SUITE)
    return tmp_path
