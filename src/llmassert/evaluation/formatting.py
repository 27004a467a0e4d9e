"""Plain-text console report: one fixed-width row per result.

Format::

    <test_name>
    ────────────────────────────────────────
    ✓ max_length                      1.00  structural
    ✗ no_personal_data                0.00  guardrail   Detected 1 PII ...
    ────────────────────────────────────────
    Overall: FAIL | Score: 0.50 | 1/2 passed

Details are shown only for failing rows. Output is plain text with no
Rich markup so it is stable across terminals and CI logs.
"""

from __future__ import annotations

from llmassert.models.result import EvaluationReport, EvaluationResult

RULE = "─" * 72
PASS_MARKER = "✓"
FAIL_MARKER = "✗"

NAME_WIDTH = 30
SCORE_WIDTH = 5
CATEGORY_WIDTH = 11


def format_result_row(result: EvaluationResult) -> str:
    """Format one result as a table row (details only when failed)."""
    marker = PASS_MARKER if result.passed else FAIL_MARKER
    row = (
        f"{marker} {result.name:<{NAME_WIDTH}} "
        f"{result.score:>{SCORE_WIDTH}.2f}  "
        f"{result.category:<{CATEGORY_WIDTH}}"
    )
    if not result.passed and result.details:
        row += f" {result.details}"
    return row.rstrip()


def format_summary_line(report: EvaluationReport) -> str:
    """Format the trailing ``Overall: ...`` line."""
    verdict = "PASS" if report.overall_pass else "FAIL"
    return (
        f"Overall: {verdict} | Score: {report.overall_score:.2f} | "
        f"{report.summary.passed}/{report.summary.total} passed"
    )


def format_report(report: EvaluationReport) -> str:
    """Format a full report for console output.

    Returns:
        Multi-line string (plain text, no trailing newline).
    """
    lines = [report.test_name, RULE]
    lines.extend(format_result_row(result) for result in report.results)
    lines.append(RULE)
    lines.append(format_summary_line(report))
    return "\n".join(lines)
