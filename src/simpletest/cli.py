"""Command-line interface for simpletest."""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from simpletest import __version__
from simpletest.config import SimpleTestConfig, create_example_config, find_config_file
from simpletest.core.loader import TestModuleLoader
from simpletest.core.registry import get_default_registry
from simpletest.core.runner import SimpleTestRunner
from simpletest.core.selection import Selection, run_selection
from simpletest.errors import SelectionUsageError, UnknownClassError, UnknownMethodError
from simpletest.polling import set_default_interval
from simpletest.report.printer import ConsolePrinter

logger = logging.getLogger(__name__)

console = Console(highlight=False, soft_wrap=True)


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(version=__version__, prog_name="simpletest")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: simpletest.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """simpletest - a minimal test-execution framework.

    Runs test classes marked with @simple_test_class, with their lifecycle
    hooks, and reports per-method and per-class outcomes.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    configure_logging(verbose)


@main.command()
@click.option("--test-class", "test_class", help="Run only this test class")
@click.option(
    "--test-method",
    "test_method",
    help="Run only this method of the selected test class",
)
@click.option(
    "--module",
    "-m",
    "modules",
    multiple=True,
    help="Import an extra module declaring test classes (repeatable)",
)
@click.option(
    "--full-trace/--short-trace",
    "full_trace",
    default=None,
    help="Print full tracebacks of failures",
)
@click.pass_context
def run(
    ctx: click.Context,
    test_class: Optional[str],
    test_method: Optional[str],
    modules: tuple[str, ...],
    full_trace: Optional[bool],
) -> None:
    """Run test classes, optionally narrowed to one class or method."""
    try:
        selection = Selection(test_class, test_method)
    except SelectionUsageError as e:
        raise click.UsageError(str(e), ctx=ctx)

    config, base_dir = _load_config(ctx)
    if full_trace is not None:
        config.output.full_traceback = full_trace
    set_default_interval(config.polling.interval_ms)

    _load_modules(config, base_dir, list(modules))

    run_console = Console(highlight=False, soft_wrap=True, no_color=not config.output.color)
    printer = ConsolePrinter(run_console, config.output)
    runner = SimpleTestRunner(
        registry=get_default_registry(),
        on_class_begin=printer.on_class_begin,
        on_method_result=printer.on_method_result,
        on_class_end=printer.on_class_end,
    )

    start = time.perf_counter()
    try:
        results = run_selection(runner, selection)
    except (UnknownClassError, UnknownMethodError) as e:
        raise click.UsageError(str(e), ctx=ctx)
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    success = printer.print_summary(results, elapsed_ms)
    if not success:
        sys.exit(1)


@main.command(name="list")
@click.option(
    "--module",
    "-m",
    "modules",
    multiple=True,
    help="Import an extra module declaring test classes (repeatable)",
)
@click.pass_context
def list_tests(ctx: click.Context, modules: tuple[str, ...]) -> None:
    """List the discovered test classes and their methods."""
    config, base_dir = _load_config(ctx)
    _load_modules(config, base_dir, list(modules))

    descriptors = get_default_registry().discover_all()
    if not descriptors:
        console.print("[yellow]No test classes found[/yellow]")
        return

    table = Table(title="Test Classes")
    table.add_column("Class", style="cyan")
    table.add_column("Hooks", style="dim")
    table.add_column("Methods")

    for descriptor in descriptors:
        hooks = "\n".join(
            f"{kind.value}: {unit.method_name}" for kind, unit in descriptor.hooks.items()
        )
        table.add_row(
            descriptor.name,
            hooks or "-",
            "\n".join(descriptor.method_names) or "-",
        )

    console.print(table)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="simpletest.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new simpletest configuration file."""
    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(
            f"[yellow]Configuration file already exists:[/yellow] {output_path}"
        )
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        create_example_config(output_path)
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(1)
    console.print(f"[green]Created configuration file:[/green] {output_path}")


def _load_config(ctx: click.Context) -> tuple[SimpleTestConfig, Path]:
    """Load the configuration and the directory its paths are relative to.

    Without ``--config`` the nearest config file is used, or the defaults
    when there is none.
    """
    config_path = ctx.obj.get("config_path")
    if config_path is None:
        config_path = find_config_file(Path.cwd())
        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            return SimpleTestConfig(), Path.cwd()

    try:
        config = SimpleTestConfig.from_file(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    logger.debug("Loaded configuration from %s", config_path)
    return config, Path(config_path).resolve().parent


def _load_modules(config: SimpleTestConfig, base_dir: Path, modules: list[str]) -> None:
    loader = TestModuleLoader(config, base_dir, extra_modules=modules)
    result = loader.load()
    if not result.success:
        for error in result.errors:
            console.print(f"[red]Error importing[/red] {escape(error)}")
        sys.exit(1)
    logger.debug("Imported %d test modules", len(result.modules))


if __name__ == "__main__":
    main()
