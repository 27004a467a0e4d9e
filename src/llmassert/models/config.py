"""Configuration models for llmassert.

EvaluationConfig describes a single run (what to check and how);
ProjectConfig captures llmassert.yaml fields with sensible defaults
for project-level settings like suite location and output format.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from llmassert.models.context import EvaluationContext

PROJECT_CONFIG_FILENAME = "llmassert.yaml"


class EvaluationConfig(BaseModel):
    """Input to ``evaluate()``: the evaluators to run and their context.

    Evaluators run in list order. Any callable accepting
    ``(response, context)`` and returning an EvaluationResult (or an
    awaitable of one) is accepted.
    """

    model_config = {"extra": "forbid"}

    test_name: str
    evaluators: list[Callable[..., Any]] = Field(default_factory=list)
    context: EvaluationContext | None = None
    stop_on_first_failure: bool = False


class ProjectConfig(BaseModel):
    """Settings read from llmassert.yaml; every field has a default.

    ``stop_on_first_failure`` overrides the suite value when set.
    """

    model_config = {"extra": "forbid"}

    suites_dir: str = "suites"
    ci_mode: bool = False
    output_format: Literal["table", "json"] = "table"
    stop_on_first_failure: bool | None = None


def find_project_root(start: Path | None = None) -> Path:
    """Nearest directory at or above *start* holding PROJECT_CONFIG_FILENAME.

    A file *start* is searched from its parent. Falls back to the current
    working directory when no ancestor has one.
    """
    origin = (start or Path.cwd()).resolve()
    if origin.is_file():
        origin = origin.parent
    for directory in (origin, *origin.parents):
        if (directory / PROJECT_CONFIG_FILENAME).is_file():
            return directory
    return Path.cwd()


def load_project_config(project_root: Path | None = None) -> ProjectConfig:
    """Read PROJECT_CONFIG_FILENAME from *project_root* (discovered when None).

    A missing or empty file yields the defaults; invalid settings raise
    pydantic's ValidationError.
    """
    config_path = (project_root or find_project_root()) / PROJECT_CONFIG_FILENAME
    if not config_path.is_file():
        return ProjectConfig()
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    return ProjectConfig.model_validate(raw or {})
