"""llmassert run CLI command -- evaluate one response against a suite.

Exit codes: 0 when the report passes, 1 when it fails, 2 when the
suite or response cannot be loaded.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from llmassert.cli.output import configure_logging, output_json, render_report
from llmassert.evaluation.engine import evaluate_sync
from llmassert.loader import SuiteLoadError, format_load_error, load_suite_config
from llmassert.models.config import load_project_config

EXIT_FAILED = 1
EXIT_LOAD_ERROR = 2


def _read_response(response_file: Path | None) -> str:
    """Read the response text from a file, or stdin when no file is given."""
    if response_file is None:
        return sys.stdin.read()
    try:
        return response_file.read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"Error: cannot read response file {response_file}: {exc}", err=True)
        raise typer.Exit(code=EXIT_LOAD_ERROR) from exc


def run(
    suite: Path = typer.Argument(..., help="Suite YAML file describing the evaluators"),
    response_file: Optional[Path] = typer.Argument(
        None, help="File holding the response to evaluate (default: stdin)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    stop_on_first_failure: Optional[bool] = typer.Option(
        None,
        "--stop-on-first-failure/--no-stop-on-first-failure",
        help="Halt after the first failing error-severity evaluator",
    ),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise error output"),
    verbose: bool = typer.Option(False, "--verbose", help="Log each evaluator run"),
) -> None:
    """Evaluate a response against a suite and print the report.

    Exits with code 0 if the report passes, 1 if it fails, 2 if the
    suite or response cannot be loaded.
    """
    configure_logging(verbose)
    project = load_project_config()

    if stop_on_first_failure is None:
        stop_on_first_failure = project.stop_on_first_failure

    try:
        config = load_suite_config(suite, stop_on_first_failure=stop_on_first_failure)
    except SuiteLoadError as exc:
        ci_mode = True if (ci or project.ci_mode) else None
        typer.echo(format_load_error(exc, ci_mode=ci_mode), err=True)
        raise typer.Exit(code=EXIT_LOAD_ERROR) from None

    response = _read_response(response_file)
    report = evaluate_sync(response, config)

    if json_output or project.output_format == "json":
        output_json(report)
    else:
        render_report(report, Console())

    if not report.overall_pass:
        raise typer.Exit(code=EXIT_FAILED)
