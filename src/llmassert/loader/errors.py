"""Error formatter with dual-mode output (human and CI concise).

Human mode lists each problem under an ``error:`` header with the
file location; CI mode prints one ``file:line -- field: message`` line
per problem for log parsers. Typo suggestions are appended in both.
"""

from __future__ import annotations

import os

from llmassert.loader.suite import LoadProblem, SuiteLoadError


def detect_ci_mode() -> bool:
    """True when the CI environment variable is set to a truthy value."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


class ErrorFormatter:
    """Formats suite load errors for human or CI consumption.

    Args:
        ci_mode: If True, use CI-friendly concise output. If None,
            auto-detect from the CI environment variable.
    """

    def __init__(self, ci_mode: bool | None = None) -> None:
        self.ci_mode = detect_ci_mode() if ci_mode is None else ci_mode

    def format_problem(self, problem: LoadProblem, filename: str) -> str:
        """Format a single problem."""
        location = f"{filename}:{problem.line}" if problem.line is not None else filename
        if self.ci_mode:
            suffix = f" ({problem.suggestion})" if problem.suggestion else ""
            return f"{location} -- {problem.field}: {problem.message}{suffix}"

        lines = [
            f"error: {problem.message}",
            f"  --> {location}",
            f"   = field: {problem.field}",
        ]
        if problem.suggestion:
            lines.append(f"   = help: {problem.suggestion}")
        return "\n".join(lines)

    def format_error(self, error: SuiteLoadError) -> str:
        """Format every problem of a load error, separated for readability."""
        separator = "\n" if self.ci_mode else "\n\n"
        body = separator.join(
            self.format_problem(problem, error.filename) for problem in error.problems
        )
        if self.ci_mode:
            return body
        count = len(error.problems)
        return f"{body}\n\n{count} problem(s) in {error.filename}"


def format_load_error(error: SuiteLoadError, ci_mode: bool | None = None) -> str:
    """Convenience wrapper around ErrorFormatter.format_error()."""
    return ErrorFormatter(ci_mode=ci_mode).format_error(error)
