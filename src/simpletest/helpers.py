"""Helpers for writing tests: scratch directories and equality checks."""

import shutil
from pathlib import Path
from typing import Any

from simpletest.assertions import assert_equal, assert_not_equal

DEFAULT_TEST_DIRECTORY = "./TEMPORARY_TEST_FOLDER"


class TestDirectory:
    """A scratch directory that exists for the lifetime of a ``with`` block.

    The directory is created on construction and removed with everything in
    it on exit.
    """

    __test__ = False

    def __init__(self, path: Path | str = DEFAULT_TEST_DIRECTORY):
        self.absolute_path = Path(path).resolve()
        self._create()

    def __enter__(self) -> "TestDirectory":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.delete()

    def get_relative_path(self, path: Path | str) -> Path:
        """Get the absolute path of an entry inside the directory."""
        return self.absolute_path / path

    def clean(self) -> None:
        """Remove all contents, keeping the directory itself."""
        self.delete()
        self._create()

    def delete(self) -> None:
        if self.absolute_path.exists():
            shutil.rmtree(self.absolute_path)

    def _create(self) -> None:
        self.absolute_path.mkdir(parents=True, exist_ok=True)


def verify_equals(obj: Any, equal: Any, not_equal: Any, message: str = "") -> None:
    """Check the equality and hash contract of a value type.

    ``obj`` must equal ``equal`` and share its hash, and must differ from
    ``not_equal`` in both value and hash.
    """
    assert_equal(obj, equal, message)
    assert_not_equal(obj, not_equal, message)
    assert_equal(hash(obj), hash(equal), message)
    assert_not_equal(hash(obj), hash(not_equal), message)
