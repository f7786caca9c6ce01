#!/usr/bin/env python3
"""
tapline CLI - run a TAP test script

Usage:
    tapline run <script.py> [OPTIONS]
    tapline validate <tapline.yaml>
    tapline --version

TAP output goes to the configured sink (stdout by default). Everything
meant for humans goes to stderr so the TAP stream stays parseable.
"""

import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import FileMode, ReporterConfig, SinkConfig, SinkType, load_config
from .reporting import TapReporter, UsagePanic

app = typer.Typer(
    name="tapline",
    help="tapline - Test Anything Protocol assertions for the command line",
    add_completion=False,
)
console = Console(stderr=True)

EXIT_OK = 0
EXIT_TEST_FAILURE = 1
EXIT_USAGE_ERROR = 2


def version_callback(value: bool):
    if value:
        console.print(f"tapline v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    tapline - Test Anything Protocol assertions for the command line

    Run test scripts that report through a TapReporter.
    """
    pass


def setup_logging(verbose: bool) -> logging.Logger:
    """
    Configure the tapline logger.

    With verbose=True, debug output goes to stderr with timestamps.
    Otherwise only warnings and errors are shown.
    """
    logger = logging.getLogger("tapline")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    ))
    logger.addHandler(handler)
    return logger


def load_script(path: Path) -> ModuleType:
    """
    Import a single Python file as a module.

    Raises:
        ImportError: If the file cannot be loaded as Python
    """
    module_name = f"tapline_script_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {path} as a Python module")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    return module


def resolve_config(config_file: Optional[Path], out: Optional[Path]) -> ReporterConfig:
    """Load the config file (if any) and apply command line overrides."""
    if config_file is None:
        config = ReporterConfig()
    else:
        config, validation = load_config(config_file)
        if not validation.is_valid:
            console.print(f"\n[red]✗ Invalid config:[/red] {config_file}")
            console.print(str(validation), markup=False)
            raise typer.Exit(code=EXIT_USAGE_ERROR)

    if out is not None:
        config.sink = SinkConfig(type=SinkType.FILE, path=str(out), mode=FileMode.WRITE)
    return config


@app.command()
def run(
    script: Path = typer.Argument(
        ...,
        help="Python file defining the entry function",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to a tapline YAML config file",
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o",
        help="Write TAP to this file instead of the configured sink",
    ),
    entry: str = typer.Option(
        "run", "--entry", "-e",
        help="Name of the function that receives the reporter",
    ),
    no_finish: bool = typer.Option(
        False, "--no-finish",
        help="Skip the end-of-run plan check",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show debug logging on stderr",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only show errors",
    ),
):
    """
    Run one test script.

    The script is imported and its entry function is called with a
    TapReporter. The exit code is 0 when every assertion passed and the
    plan was met, 1 on test failures, 2 on usage errors.
    """
    logger = setup_logging(verbose)
    config = resolve_config(config_file, out)

    try:
        module = load_script(script)
    except Exception as e:
        console.print(f"[red]✗ Could not load {script.name}:[/red] {type(e).__name__}: {e}")
        raise typer.Exit(code=EXIT_USAGE_ERROR)

    entry_point = getattr(module, entry, None)
    if not callable(entry_point):
        console.print(f"[red]✗ {script.name} has no callable '{entry}'[/red]")
        raise typer.Exit(code=EXIT_USAGE_ERROR)

    logger.debug(f"Running {script}:{entry}")
    with TapReporter.from_config(config) as reporter:
        try:
            entry_point(reporter)
        except UsagePanic as e:
            console.print(f"[red]✗ Usage error:[/red] {e}")
            raise typer.Exit(code=EXIT_USAGE_ERROR)
        except Exception as e:
            logger.exception(f"{script} died")
            reporter.diag(f"{script.name} died with [{type(e).__name__}: {e}]")
            if not quiet:
                console.print(f"[red]✗ {script.name} died:[/red] {type(e).__name__}: {e}")
            if reporter.session.is_planned and config.finish.enabled and not no_finish:
                reporter.finish()
            raise typer.Exit(code=EXIT_TEST_FAILURE)

        if not reporter.session.is_planned:
            console.print(f"[red]✗ {script.name} never set a plan[/red]")
            raise typer.Exit(code=EXIT_USAGE_ERROR)

        if config.finish.enabled and not no_finish:
            success = reporter.finish()
        else:
            success = reporter.session.all_passed

    if not quiet:
        icon = "[green]✓[/green]" if success else "[red]✗[/red]"
        console.print(f"{icon} {script.name}: {reporter.session.summary()}")

    raise typer.Exit(code=EXIT_OK if success else EXIT_TEST_FAILURE)


@app.command()
def validate(
    config_file: Path = typer.Argument(
        ...,
        help="Path to the tapline YAML config file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a config file.

    Check the schema and show the resolved settings.
    """
    config, validation = load_config(config_file)

    if not validation.is_valid:
        console.print(f"\n[red]✗ Validation failed:[/red] {config_file}")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    console.print(f"\n[green]✓ Valid config:[/green] {config_file}")

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("version", str(config.version))
    table.add_row("sink.type", config.sink.type.value)
    if config.sink.type == SinkType.FILE:
        table.add_row("sink.path", str(config.sink.path))
        table.add_row("sink.mode", config.sink.mode.value)
    else:
        table.add_row("sink.flush", str(config.sink.flush).lower())
    table.add_row("diagnostics.pound_token", config.diagnostics.pound_token)
    table.add_row("finish.enabled", str(config.finish.enabled).lower())

    console.print()
    console.print(table)
    raise typer.Exit(code=0)


@app.command()
def info():
    """
    Show information about tapline.
    """
    console.print(f"""
[bold]tapline[/bold] v{__version__}

Test Anything Protocol assertions for the command line

[bold]Assertions:[/bold]
  • plan, ok, is_, like, unlike, pass_, fail
  • can_ok for callable members
  • throws_ok, dies_ok, lives_ok for exceptions
  • diag for '#' comments

[bold]Quick Start:[/bold]
  tapline run tests/check_math.py
  tapline run tests/check_math.py --out results.tap
  tapline validate tapline.yaml
""")


if __name__ == "__main__":
    app()
