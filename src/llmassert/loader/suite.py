"""Suite file loading: YAML -> validated Suite -> EvaluationConfig.

Two-stage validation: first parse YAML, then validate against the
Suite pydantic model and build every evaluator. Problems from all
stages are collected and raised together as a SuiteLoadError.
"""

from __future__ import annotations

import difflib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from llmassert.evaluation.evaluators import (
    EVALUATOR_REGISTRY,
    build_evaluator,
    import_dotted_path,
)
from llmassert.evaluation.evaluators.base import Evaluator
from llmassert.models.config import EvaluationConfig
from llmassert.models.context import EvaluationContext

# Factory options that name Python objects; string values are imported.
DOTTED_PATH_OPTIONS = frozenset({"schema", "scorer", "verifier"})


@dataclass
class LoadProblem:
    """A single problem found while loading a suite.

    Attributes:
        field: Dotted path of the offending field, or '<yaml>'.
        message: Human-readable description.
        line: 1-indexed source line, when known.
        suggestion: 'Did you mean X?' hint for typos, or None.
    """

    field: str
    message: str
    line: int | None = None
    suggestion: str | None = None


class SuiteLoadError(Exception):
    """Raised when a suite file cannot be turned into an EvaluationConfig.

    Attributes:
        problems: Every problem found, in discovery order.
        filename: Name of the suite file, or '<string>'.
    """

    def __init__(self, problems: list[LoadProblem], filename: str = "<string>") -> None:
        self.problems = problems
        self.filename = filename
        summary = "; ".join(f"{p.field}: {p.message}" for p in problems)
        super().__init__(f"{filename}: {summary}")


class EvaluatorEntry(BaseModel):
    """One evaluator in a suite: a type plus factory keyword options."""

    model_config = {"extra": "allow"}

    type: str

    @property
    def options(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class Suite(BaseModel):
    """A suite definition loaded from YAML."""

    model_config = {"extra": "forbid"}

    name: str
    description: str = ""
    stop_on_first_failure: bool = False
    context: EvaluationContext | None = None
    evaluators: list[EvaluatorEntry] = Field(default_factory=list)


def _get_suggestion(name: str, choices: Iterable[str]) -> str | None:
    """Get a 'did you mean?' suggestion for a mistyped name."""
    matches = difflib.get_close_matches(name, list(choices), n=1, cutoff=0.6)
    if matches:
        return f"Did you mean '{matches[0]}'?"
    return None


def _field_choices(loc: tuple[str | int, ...]) -> list[str]:
    """Valid keys at the level of an unknown key."""
    if len(loc) > 1 and loc[0] == "context":
        return list(EvaluationContext.model_fields)
    return list(Suite.model_fields)


def _resolve_options(options: dict[str, Any]) -> dict[str, Any]:
    """Import dotted-path strings for options that expect Python objects."""
    resolved = dict(options)
    for key in DOTTED_PATH_OPTIONS & resolved.keys():
        value = resolved[key]
        if isinstance(value, str):
            resolved[key] = import_dotted_path(value)
    return resolved


def parse_suite(raw: Any, filename: str = "<string>") -> Suite:
    """Validate parsed YAML data against the Suite model.

    Raises:
        SuiteLoadError: With one problem per pydantic error.
    """
    if raw is None:
        raise SuiteLoadError(
            [LoadProblem("<yaml>", "File is empty or contains only comments")], filename
        )
    try:
        return Suite.model_validate(raw)
    except ValidationError as exc:
        problems: list[LoadProblem] = []
        for err in exc.errors():
            loc = err.get("loc", ())
            suggestion = None
            if err.get("type") == "extra_forbidden" and loc:
                suggestion = _get_suggestion(str(loc[-1]), _field_choices(loc))
            problems.append(
                LoadProblem(
                    field=".".join(str(part) for part in loc) or "<root>",
                    message=err.get("msg", "Validation error"),
                    suggestion=suggestion,
                )
            )
        raise SuiteLoadError(problems, filename) from exc


def build_evaluators(suite: Suite, filename: str = "<string>") -> list[Evaluator]:
    """Instantiate every evaluator of a suite, collecting all failures.

    Raises:
        SuiteLoadError: If any entry cannot be built.
    """
    evaluators: list[Evaluator] = []
    problems: list[LoadProblem] = []

    for index, entry in enumerate(suite.evaluators):
        try:
            evaluators.append(build_evaluator(entry.type, _resolve_options(entry.options)))
        except (ValueError, TypeError, ImportError) as exc:
            suggestion = None
            if "." not in entry.type and entry.type not in EVALUATOR_REGISTRY:
                suggestion = _get_suggestion(entry.type, EVALUATOR_REGISTRY)
            problems.append(
                LoadProblem(f"evaluators.{index}", f"{entry.type}: {exc}", suggestion=suggestion)
            )

    if problems:
        raise SuiteLoadError(problems, filename)
    return evaluators


def suite_to_config(
    suite: Suite,
    filename: str = "<string>",
    stop_on_first_failure: bool | None = None,
) -> EvaluationConfig:
    """Build the EvaluationConfig for a validated suite.

    Args:
        suite: The validated suite.
        filename: Used in error messages.
        stop_on_first_failure: Overrides the suite's own setting when not None.
    """
    return EvaluationConfig(
        test_name=suite.name,
        evaluators=build_evaluators(suite, filename),
        context=suite.context,
        stop_on_first_failure=(
            suite.stop_on_first_failure
            if stop_on_first_failure is None
            else stop_on_first_failure
        ),
    )


def load_suite_string(source: str, filename: str = "<string>") -> Suite:
    """Parse and validate a suite from a YAML string.

    Raises:
        SuiteLoadError: On YAML syntax errors or schema violations.
    """
    try:
        raw = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 1 if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc)
        raise SuiteLoadError([LoadProblem("<yaml>", problem, line=line)], filename) from exc
    return parse_suite(raw, filename)


def load_suite(path: Path) -> Suite:
    """Read, parse and validate a suite file.

    Raises:
        SuiteLoadError: On unreadable files, YAML errors or schema violations.
    """
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SuiteLoadError([LoadProblem("<file>", str(exc))], str(path)) from exc
    return load_suite_string(source, filename=str(path))


def load_suite_config(
    path: Path, stop_on_first_failure: bool | None = None
) -> EvaluationConfig:
    """Load a suite file straight into a runnable EvaluationConfig."""
    suite = load_suite(path)
    return suite_to_config(suite, str(path), stop_on_first_failure=stop_on_first_failure)
