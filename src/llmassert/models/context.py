"""Evaluation context passed unchanged to every evaluator in a run."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EvaluationContext(BaseModel):
    """Auxiliary ground-truth data for one run.

    Specific constraints (a length limit, a schema) belong to the
    evaluator factory, not here. Evaluators needing a field that is
    absent must handle that themselves.
    """

    model_config = {"extra": "forbid", "frozen": True}

    prompt: str | None = None
    reference_response: str | None = None
    retrieved_documents: list[str] = Field(default_factory=list)
    history: list[str] = Field(default_factory=list)
