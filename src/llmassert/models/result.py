"""Result data models for llmassert evaluation runs.

These models encode the evaluation output contract: one
EvaluationResult per evaluator invocation, aggregated into an
EvaluationReport that reporters and CI tooling consume.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

Category = Literal["structural", "guardrail", "semantic", "consistency"]
Severity = Literal["error", "warning", "info"]

SEVERITIES: tuple[Severity, ...] = ("error", "warning", "info")


class EvaluationResult(BaseModel):
    """Verdict of a single evaluator against one response.

    ``threshold`` is the evaluator's own comparison point and is not
    always compared to ``score`` directly (toxicity reports both
    inverted).
    """

    model_config = {"extra": "forbid", "frozen": True}

    name: str
    passed: bool
    score: float = Field(ge=0.0, le=1.0)
    threshold: float
    category: Category
    severity: Severity
    details: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_critical_failure(self) -> bool:
        """True when this result fails the whole run."""
        return self.severity == "error" and not self.passed


class EvaluationSummary(BaseModel):
    """Counts over the results of one report."""

    model_config = {"extra": "forbid", "frozen": True}

    total: int = 0
    passed: int = 0
    failed: int = 0
    by_severity: dict[Severity, int] = Field(
        default_factory=lambda: {severity: 0 for severity in SEVERITIES}
    )


class EvaluationReport(BaseModel):
    """Aggregated outcome of running a set of evaluators on one response.

    Designed for JSON serialization via ``model_dump_json()``; field
    names are part of the stable reporting contract.
    """

    model_config = {"extra": "forbid", "frozen": True}

    test_name: str
    timestamp: datetime
    overall_pass: bool
    overall_score: float
    results: list[EvaluationResult] = Field(default_factory=list)
    summary: EvaluationSummary = Field(default_factory=EvaluationSummary)
