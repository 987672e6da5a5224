"""Tests for test module loading."""

from simpletest.config import DiscoveryConfig, SimpleTestConfig, get_default_config
from simpletest.core.loader import LoadResult, TestModuleLoader
from suites import PASSING_SUITE, SAMPLE_SUITE, write_suite


class TestTestModuleLoader:
    """Tests for TestModuleLoader."""

    def test_load_registers_containers(self, sample_project, clean_registry):
        """Test importing the test modules registers their containers."""
        loader = TestModuleLoader(get_default_config(), sample_project)

        result = loader.load()

        assert result.success
        assert result.modules == ["tests.test_sample_suite"]
        assert {d.name for d in clean_registry.discover_all()} == {"Tests", "Tests2"}

    def test_get_test_files_patterns(self, tmp_path, clean_registry):
        """Test only files matching the patterns are picked, in sorted order."""
        tests_dir = tmp_path / "tests"
        write_suite(tests_dir, "test_b.py", "")
        write_suite(tests_dir, "a_test.py", "")
        write_suite(tests_dir / "nested", "test_c.py", "")
        write_suite(tests_dir, "helpers.py", "")

        loader = TestModuleLoader(get_default_config(), tmp_path)
        names = [p.relative_to(tests_dir).as_posix() for p in loader.get_test_files()]

        assert names == ["a_test.py", "nested/test_c.py", "test_b.py"]

    def test_missing_test_directory(self, tmp_path, clean_registry):
        """Test a missing test directory loads nothing without errors."""
        loader = TestModuleLoader(get_default_config(), tmp_path)

        result = loader.load()

        assert result.success
        assert result.modules == []

    def test_import_error_is_recorded(self, tmp_path, clean_registry):
        """Test a broken module is reported instead of raised."""
        write_suite(tmp_path / "tests", "test_broken.py", "raise RuntimeError('cannot import')\n")
        write_suite(tmp_path / "tests", "test_green.py", PASSING_SUITE)

        result = TestModuleLoader(get_default_config(), tmp_path).load()

        assert not result.success
        assert len(result.errors) == 1
        assert "cannot import" in result.errors[0]
        assert "Green" in clean_registry

    def test_extra_modules(self, tmp_path, clean_registry, monkeypatch):
        """Test configured and extra module names are imported."""
        write_suite(tmp_path / "pkg", "__init__.py", "")
        write_suite(tmp_path / "pkg", "suite.py", SAMPLE_SUITE)
        monkeypatch.syspath_prepend(str(tmp_path))
        config = SimpleTestConfig(discovery=DiscoveryConfig(test_directory="none"))

        result = TestModuleLoader(config, tmp_path, extra_modules=["pkg.suite"]).load()

        assert result.modules == ["pkg.suite"]
        assert "Tests2" in clean_registry

    def test_unknown_module(self, tmp_path, clean_registry):
        """Test an unknown module name is reported as an error."""
        config = SimpleTestConfig(discovery=DiscoveryConfig(modules=["no_such_module_xyz"]))

        result = TestModuleLoader(config, tmp_path).load()

        assert result.errors
        assert "no_such_module_xyz" in result.errors[0]

    def test_reload_is_idempotent(self, sample_project, clean_registry):
        """Test loading twice keeps one registration per container."""
        loader = TestModuleLoader(get_default_config(), sample_project)

        loader.load()
        loader.load()

        assert len(clean_registry) == 2


    def test_test_directory_is_absolute(self, tmp_path):
        """Test the configured test directory is resolved against the base directory."""
        config = SimpleTestConfig(discovery=DiscoveryConfig(test_directory="suites/../checks"))

        loader = TestModuleLoader(config, tmp_path)

        assert loader.test_dir == (tmp_path / "checks").resolve()


class TestLoadResult:
    """Tests for LoadResult."""

    def test_success(self):
        """Test success reflects the absence of errors."""
        assert LoadResult().success
        assert not LoadResult(errors=["x"]).success
