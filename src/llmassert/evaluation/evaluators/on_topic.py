"""On-topic evaluator -- checks a response stays relevant to a topic.

Default scoring is keyword overlap. Pass a ``scorer`` to plug in
embedding similarity or an LLM judge.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from typing import Union

from llmassert.evaluation.evaluators.base import (
    CallbackEvaluator,
    clamp_unit,
    resolve_awaitable,
)
from llmassert.models.context import EvaluationContext
from llmassert.models.result import EvaluationResult, Severity

TopicScorer = Callable[[str, str], Union[float, Awaitable[float]]]

_NON_WORD = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation, split on whitespace, drop words of <= 2 chars."""
    cleaned = _NON_WORD.sub("", text.lower())
    return [word for word in cleaned.split() if len(word) > 2]


def keyword_score(response: str, topic: str) -> float:
    """Fraction of distinct topic keywords that appear in the response.

    An empty topic (no keywords after tokenizing) scores 1.0.
    """
    topic_tokens = set(tokenize(topic))
    if not topic_tokens:
        return 1.0

    response_tokens = set(tokenize(response))
    return len(topic_tokens & response_tokens) / len(topic_tokens)


class OnTopicEvaluator(CallbackEvaluator):
    """Passes when the relevance score reaches the threshold."""

    name = "on_topic"
    category = "guardrail"

    def __init__(
        self,
        topic: str,
        severity: Severity = "warning",
        threshold: float = 0.3,
        scorer: TopicScorer | None = None,
    ) -> None:
        super().__init__(severity)
        self.topic = topic
        self.threshold = threshold
        self.scorer = scorer

    async def evaluate_async(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        if self.scorer is not None:
            raw = await resolve_awaitable(self.scorer(response, self.topic))
        else:
            raw = keyword_score(response, self.topic)

        score = clamp_unit(raw)
        passed = score >= self.threshold

        if passed:
            details = f'Response is on-topic (score: {score:.2f}, topic: "{self.topic}")'
        else:
            details = (
                f"Response appears off-topic (score: {score:.2f}, "
                f'required: {self.threshold}, topic: "{self.topic}")'
            )

        return self._result(
            passed=passed,
            score=score,
            threshold=self.threshold,
            details=details,
            metadata={
                "topic": self.topic,
                "scoring_method": "custom" if self.scorer is not None else "keyword",
            },
        )


def on_topic(
    topic: str,
    *,
    severity: Severity = "warning",
    threshold: float = 0.3,
    scorer: TopicScorer | None = None,
) -> OnTopicEvaluator:
    """Create an evaluator checking the response stays on *topic*.

    Topic drift is a warning by default, not a run failure.

    Args:
        topic: Free-text description of the expected subject.
        severity: Severity of a failure.
        threshold: Minimum relevance score (0.0 to 1.0) to pass.
        scorer: Optional ``(response, topic) -> float`` replacing keyword
            scoring; may be sync or async. Output is clamped to [0, 1].
    """
    return OnTopicEvaluator(topic, severity=severity, threshold=threshold, scorer=scorer)
