"""llmassert data models - re-exports all public model classes."""

from llmassert.models.config import EvaluationConfig, ProjectConfig
from llmassert.models.context import EvaluationContext
from llmassert.models.result import (
    Category,
    EvaluationReport,
    EvaluationResult,
    EvaluationSummary,
    Severity,
)

__all__ = [
    "Category",
    "EvaluationConfig",
    "EvaluationContext",
    "EvaluationReport",
    "EvaluationResult",
    "EvaluationSummary",
    "ProjectConfig",
    "Severity",
]
