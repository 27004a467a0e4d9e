"""Evaluation package for response scoring and aggregation.

Provides the evaluator contract, the built-in structural and
guardrail evaluators, and the engine that reduces their results to a
single EvaluationReport.
"""

from __future__ import annotations

from llmassert.evaluation import guardrails, structural
from llmassert.evaluation.engine import (
    evaluate,
    evaluate_many,
    evaluate_sync,
    run_evaluators,
    summarize,
)
from llmassert.evaluation.evaluators import build_evaluator, get_evaluator_factory
from llmassert.evaluation.evaluators.base import BaseEvaluator, CallbackEvaluator, Evaluator
from llmassert.evaluation.formatting import format_report

__all__ = [
    "BaseEvaluator",
    "CallbackEvaluator",
    "Evaluator",
    "build_evaluator",
    "evaluate",
    "evaluate_many",
    "evaluate_sync",
    "format_report",
    "get_evaluator_factory",
    "guardrails",
    "run_evaluators",
    "structural",
    "summarize",
]
