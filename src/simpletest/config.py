"""Configuration management for simpletest."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from simpletest.polling import DEFAULT_INTERVAL_MS

CONFIG_NAMES = ["simpletest.json", ".simpletest.json"]


class DiscoveryConfig(BaseModel):
    """Where to find the modules that declare test containers."""

    test_directory: str = Field(default="tests", description="Directory searched for test modules")
    patterns: list[str] = Field(
        default_factory=lambda: ["test_*.py", "*_test.py"],
        description="File name patterns of test modules",
    )
    modules: list[str] = Field(
        default_factory=list, description="Extra importable modules declaring test containers"
    )

    @field_validator("patterns")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one test file pattern is required")
        return v


class OutputConfig(BaseModel):
    """Console output configuration."""

    full_traceback: bool = Field(default=False, description="Print full tracebacks of failures")
    color: bool = Field(default=True, description="Colorize console output")


class PollingConfig(BaseModel):
    """Defaults for the await_at_most assertion."""

    interval_ms: int = Field(default=DEFAULT_INTERVAL_MS, description="Delay between attempts")

    @field_validator("interval_ms")
    @classmethod
    def validate_interval(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Polling interval must be at least 1ms")
        return v


class SimpleTestConfig(BaseModel):
    """Main configuration for simpletest."""

    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "SimpleTestConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)

    def get_absolute_paths(self, base_dir: Path | str | None = None) -> dict[str, Path]:
        """Get absolute paths for various config paths."""
        if base_dir is None:
            base_dir = Path.cwd()
        else:
            base_dir = Path(base_dir)

        return {
            "test_directory": (base_dir / self.discovery.test_directory).resolve(),
        }


def find_config_file(start_dir: Path) -> Path | None:
    """Search from ``start_dir`` up to the filesystem root for a config file."""
    current = start_dir.resolve()
    while True:
        for name in CONFIG_NAMES:
            config_path = current / name
            if config_path.exists():
                return config_path
        if current == current.parent:
            return None
        current = current.parent


def get_default_config() -> SimpleTestConfig:
    """Return a default configuration."""
    return SimpleTestConfig()


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.to_file(output_path)
    return output_path
