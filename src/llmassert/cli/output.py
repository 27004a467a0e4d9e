"""Rich terminal output layer for evaluation reports.

Prints the plain-text table from llmassert.evaluation.formatting with
per-row styling, and writes JSON for CI pipeline consumption.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from llmassert.evaluation.formatting import (
    RULE,
    format_result_row,
    format_summary_line,
)

if TYPE_CHECKING:
    from llmassert.models.result import EvaluationReport, EvaluationResult


def _row_style(result: EvaluationResult) -> str:
    """Green on pass, red on error failure, yellow on warning/info failure."""
    if result.passed:
        return "green"
    if result.severity == "error":
        return "bold red"
    return "yellow"


def render_report(report: EvaluationReport, console: Console) -> None:
    """Render a report as a styled fixed-width table.

    Text is identical to format_report(); styling is only added when
    the console supports color.

    Args:
        report: The EvaluationReport to display.
        console: Rich Console for output.
    """
    console.print(Text(report.test_name, style="bold"))
    console.print(Text(RULE, style="dim"))
    for result in report.results:
        console.print(
            Text(format_result_row(result), style=_row_style(result)), soft_wrap=True
        )
    console.print(Text(RULE, style="dim"))

    summary_style = "bold green" if report.overall_pass else "bold red"
    console.print(Text(format_summary_line(report), style=summary_style))


def output_json(report: EvaluationReport) -> None:
    """Write the report as pure JSON to stdout.

    No Rich markup, no color, no extra text. Suitable for CI pipeline
    consumption and machine parsing.
    """
    sys.stdout.write(report.model_dump_json(indent=2))
    sys.stdout.write("\n")


def configure_logging(verbose: bool = False) -> None:
    """Send llmassert log records to stderr through Rich.

    WARNING and above by default; DEBUG with *verbose*.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logger = logging.getLogger("llmassert")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
