"""llmassert validate CLI command for suite file validation.

Loads suite files and builds their evaluators without running them,
reporting all problems at once with human or CI-friendly formatting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from llmassert.loader import ErrorFormatter, SuiteLoadError, load_suite_config
from llmassert.models.config import find_project_root, load_project_config


def _discover_suites(suites_dir: Path) -> list[Path]:
    if not suites_dir.is_dir():
        return []
    return sorted(list(suites_dir.glob("**/*.yaml")) + list(suites_dir.glob("**/*.yml")))


def validate(
    suites: Optional[list[Path]] = typer.Argument(
        None, help="Suite files to validate (default: all in the project suites dir)"
    ),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise output"),
) -> None:
    """Validate suite YAML files and the evaluators they describe.

    Exits with code 0 if all suites are valid, 1 if any has problems.
    """
    project = load_project_config()
    formatter = ErrorFormatter(ci_mode=True if (ci or project.ci_mode) else None)

    files: list[Path] = []
    if suites:
        for path in suites:
            if not path.exists():
                typer.echo(f"Error: File not found: {path}", err=True)
                raise typer.Exit(code=1)
            files.append(path)
    else:
        files = _discover_suites(find_project_root() / project.suites_dir)
        if not files:
            typer.echo(
                f"No suite files found. Specify files or create a {project.suites_dir}/ directory."
            )
            raise typer.Exit(code=1)

    valid_count = 0
    for path in files:
        try:
            config = load_suite_config(path)
        except SuiteLoadError as exc:
            typer.echo(formatter.format_error(exc), err=not formatter.ci_mode)
            continue
        valid_count += 1
        typer.echo(f"ok  {path} ({len(config.evaluators)} evaluators)")

    typer.echo(f"\n{valid_count}/{len(files)} suites valid")

    if valid_count < len(files):
        raise typer.Exit(code=1)
