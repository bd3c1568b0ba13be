from __future__ import annotations

import json
from pathlib import Path

import typer

from litest.config import LogLevelName, ReporterType
from litest.models import SuiteMode

app = typer.Typer(name="litest", help="Run litest suites and report the results")


@app.command()
def run(
    target: str | None = typer.Argument(
        None, help="Suite to run, as path/to/file.py[:name] (name defaults to 'suite')"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to a litest.yaml run config"
    ),
    reporter: ReporterType | None = typer.Option(None, help="Output format"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Write the report to this file"
    ),
    mode: SuiteMode | None = typer.Option(
        None, help="'throw' stops the run at the first failed assertion"
    ),
    only: list[int] | None = typer.Option(
        None, "--only", help="0-based position of a test to run (repeatable)"
    ),
    log_level: LogLevelName | None = typer.Option(
        None, "--log-level", help="Markdown detail level"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Append debug output to this file"
    ),
):
    """Run a suite. Exits non-zero if any assertion failed or any test aborted."""
    from litest.config import RunConfig, build_reporter_factory, load_config
    from litest.errors import AssertionFailure
    from litest.loader import load_suite
    from litest.metrics import summarize
    from litest.verbose import setup_logger

    overrides = {
        "suite": target,
        "reporter": reporter,
        "output": output,
        "mode": mode,
        "tests": only or None,
        "log_level": log_level,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}

    try:
        if config is not None:
            config_path = Path(config)
            if not config_path.exists():
                typer.echo(f"Error: config file not found: {config}", err=True)
                raise typer.Exit(1)
            data = load_config(config_path).model_dump()
            data.update(overrides)
            run_config = RunConfig(**data)
        elif target is None:
            typer.echo("Error: give a suite file or --config", err=True)
            raise typer.Exit(1)
        else:
            run_config = RunConfig(**overrides)

        logger = setup_logger(
            Path(debug_log) if debug_log else None, verbose=verbose, logger_name="litest"
        )
        suite = load_suite(run_config.suite)
        reporter_factory = build_reporter_factory(run_config)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    indices = (
        run_config.tests if run_config.tests is not None else range(len(suite.tests))
    )
    logger.debug(f"Running suite '{suite.name}' with {run_config.reporter.value} reporter")

    try:
        suite.run_some(reporter_factory, indices, run_config.mode)
    except AssertionFailure as e:
        typer.echo(f"Assertion failure: {e}", err=True)
        raise typer.Exit(1)

    if run_config.output:
        typer.echo(f"Report: {run_config.output}", err=True)

    summary = summarize(suite)
    if not summary.all_passed:
        raise typer.Exit(1)


EXAMPLE_CONFIG = """\
suite: tests/example_suite.py:suite
reporter: markdown
mode: continue
log_level: everything
"""

EXAMPLE_SUITE = '''\
from litest import TestSuite

suite = TestSuite("Example suite")


@suite.test()
def arithmetic(t):
    t.check(lambda: 1 + 1 == 2, "1 + 1 == 2")
    t.equal(42, lambda: 2 * 21, "2 * 21")


@suite.test()
def lookups(t):
    items = {"a": 1}
    t.message("Looking up a missing key")
    t.raises(KeyError, lambda: items["b"], 'items["b"]')
    t.print_expr("items", items)
'''


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to initialize in"),
):
    """Write an example litest.yaml and suite file."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    config_path = project_dir / "litest.yaml"
    if config_path.exists():
        typer.echo(f"litest.yaml already exists in {dir}, skipping.")
        return

    suite_path = project_dir / "tests" / "example_suite.py"
    suite_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(EXAMPLE_CONFIG)
    if not suite_path.exists():
        suite_path.write_text(EXAMPLE_SUITE)

    typer.echo(f"Initialized litest project in {dir}:")
    typer.echo("  litest.yaml              - run config")
    typer.echo("  tests/example_suite.py   - example suite")


@app.command()
def schema(
    out: str = typer.Option(
        "litest.schema.json", help="Output path for the litest.yaml JSON Schema"
    ),
):
    """Write the JSON Schema of the run config file."""
    from litest.config import RunConfig

    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(RunConfig.model_json_schema(), indent=2) + "\n")
    typer.echo(f"Wrote schema: {out_path}")
