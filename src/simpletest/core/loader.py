"""Loading of test modules.

Test containers register themselves when their module is imported, so
loading the test modules is what populates the registry.
"""

import importlib
import importlib.util
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Optional

from simpletest.config import SimpleTestConfig

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Result of loading test modules."""

    modules: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if every module was imported."""
        return not self.errors


class TestModuleLoader:
    """Imports the test modules of a project."""

    __test__ = False

    def __init__(
        self,
        config: SimpleTestConfig,
        base_dir: Path,
        extra_modules: Optional[list[str]] = None,
    ):
        """Initialize the loader.

        Args:
            config: simpletest configuration
            base_dir: Directory the configured paths are relative to
            extra_modules: Module names to import on top of the configured ones
        """
        self.config = config
        self.base_dir = base_dir
        self.test_dir = config.get_absolute_paths(base_dir)["test_directory"]
        self.extra_modules = extra_modules or []

    def load(self) -> LoadResult:
        """Import every configured test module."""
        result = LoadResult()

        # Test modules commonly import siblings relative to the project root
        base = str(self.base_dir.resolve())
        if base not in sys.path:
            sys.path.insert(0, base)

        for path in self.get_test_files():
            self._import(path.name, lambda p=path: self._import_file(p), result)

        for name in [*self.config.discovery.modules, *self.extra_modules]:
            self._import(name, lambda n=name: importlib.import_module(n), result)

        return result

    def get_test_files(self) -> list[Path]:
        """Get the test files matching the configured patterns, sorted."""
        if not self.test_dir.is_dir():
            return []

        files: set[Path] = set()
        for pattern in self.config.discovery.patterns:
            files.update(self.test_dir.rglob(pattern))
        return sorted(files)

    def _import(self, label: str, do_import, result: LoadResult) -> None:
        try:
            module = do_import()
        except Exception as e:
            logger.warning("Failed to import test module %s: %s", label, e)
            result.errors.append(f"{label}: {type(e).__name__}: {e}")
            return
        result.modules.append(module.__name__)
        logger.debug("Imported test module %s", module.__name__)

    def _import_file(self, path: Path) -> ModuleType:
        """Import a file under a dotted name derived from its location."""
        try:
            relative = path.resolve().relative_to(self.base_dir.resolve())
            module_name = ".".join(relative.with_suffix("").parts)
        except ValueError:
            module_name = path.stem

        existing = sys.modules.get(module_name)
        if existing is not None and _same_file(existing, path):
            return existing

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            del sys.modules[module_name]
            raise
        return module


def _same_file(module: ModuleType, path: Path) -> bool:
    module_file = getattr(module, "__file__", None)
    return module_file is not None and Path(module_file).resolve() == path.resolve()
