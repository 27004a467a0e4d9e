"""llmassert CLI entry point."""

import inspect

import typer

from llmassert import __version__
from llmassert.cli.run_cmd import run
from llmassert.cli.validate_cmd import validate
from llmassert.evaluation.evaluators import EVALUATOR_REGISTRY

app = typer.Typer(
    name="llmassert",
    help="Property assertions for non-deterministic LLM output",
    no_args_is_help=True,
)

# Register subcommands
app.command()(run)
app.command()(validate)


@app.command()
def evaluators() -> None:
    """List the builtin evaluator types usable in suite files."""
    for type_name, factory in sorted(EVALUATOR_REGISTRY.items()):
        doc = inspect.getdoc(factory) or ""
        summary = doc.splitlines()[0] if doc else ""
        typer.echo(f"{type_name:<22} {summary}".rstrip())


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"llmassert {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Property assertions for non-deterministic LLM output."""
