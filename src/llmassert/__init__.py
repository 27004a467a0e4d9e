"""llmassert -- property assertions for non-deterministic LLM output."""

from llmassert.evaluation import evaluate, evaluate_many, evaluate_sync, guardrails, structural
from llmassert.models import (
    EvaluationConfig,
    EvaluationContext,
    EvaluationReport,
    EvaluationResult,
)

__version__ = "0.1.0"

__all__ = [
    "EvaluationConfig",
    "EvaluationContext",
    "EvaluationReport",
    "EvaluationResult",
    "__version__",
    "evaluate",
    "evaluate_many",
    "evaluate_sync",
    "guardrails",
    "structural",
]
