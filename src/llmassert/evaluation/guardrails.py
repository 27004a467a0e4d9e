"""Guardrail evaluators: PII, topic relevance, hallucinated URLs, toxicity."""

from __future__ import annotations

from llmassert.evaluation.evaluators.hallucinated_urls import (
    NoHallucinatedUrlsEvaluator,
    no_hallucinated_urls,
)
from llmassert.evaluation.evaluators.on_topic import OnTopicEvaluator, on_topic
from llmassert.evaluation.evaluators.personal_data import (
    NoPersonalDataEvaluator,
    no_personal_data,
)
from llmassert.evaluation.evaluators.toxicity import ToxicityEvaluator, toxicity

__all__ = [
    "NoHallucinatedUrlsEvaluator",
    "NoPersonalDataEvaluator",
    "OnTopicEvaluator",
    "ToxicityEvaluator",
    "no_hallucinated_urls",
    "no_personal_data",
    "on_topic",
    "toxicity",
]
