"""Length evaluators -- bound the character count of a response."""

from __future__ import annotations

from llmassert.evaluation.evaluators.base import BaseEvaluator
from llmassert.models.context import EvaluationContext
from llmassert.models.result import EvaluationResult, Severity


class MaxLengthEvaluator(BaseEvaluator):
    """Passes when the response is at most ``limit`` characters.

    Over the limit the score falls linearly and reaches 0 once the
    overage equals the limit itself.
    """

    name = "max_length"
    category = "structural"

    def __init__(self, limit: int, severity: Severity = "error") -> None:
        if limit < 0:
            raise ValueError(f"max_length limit must be >= 0, got {limit}")
        super().__init__(severity)
        self.limit = limit

    def evaluate(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        length = len(response)
        passed = length <= self.limit

        if passed:
            score = 1.0
            details = f"Response length {length} is within limit of {self.limit}"
        else:
            # limit == 0 with any content is a full overage
            score = max(0.0, 1 - (length - self.limit) / self.limit) if self.limit else 0.0
            details = (
                f"Response length {length} exceeds limit of {self.limit} "
                f"by {length - self.limit} characters"
            )

        return self._result(
            passed=passed,
            score=score,
            threshold=1.0,
            details=details,
            metadata={"length": length, "limit": self.limit},
        )


class MinLengthEvaluator(BaseEvaluator):
    """Passes when the response is at least ``minimum`` characters."""

    name = "min_length"
    category = "structural"

    def __init__(self, minimum: int, severity: Severity = "error") -> None:
        if minimum < 0:
            raise ValueError(f"min_length minimum must be >= 0, got {minimum}")
        super().__init__(severity)
        self.minimum = minimum

    def evaluate(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        length = len(response)
        passed = length >= self.minimum
        score = min(1.0, length / self.minimum) if self.minimum > 0 else 1.0

        if passed:
            details = f"Response length {length} meets minimum of {self.minimum}"
        else:
            details = (
                f"Response length {length} is below minimum of {self.minimum} "
                f"by {self.minimum - length} characters"
            )

        return self._result(
            passed=passed,
            score=score,
            threshold=1.0,
            details=details,
            metadata={"length": length, "minimum": self.minimum},
        )


def max_length(limit: int, *, severity: Severity = "error") -> MaxLengthEvaluator:
    """Create an evaluator failing responses longer than *limit* characters."""
    return MaxLengthEvaluator(limit, severity=severity)


def min_length(minimum: int, *, severity: Severity = "error") -> MinLengthEvaluator:
    """Create an evaluator failing responses shorter than *minimum* characters."""
    return MinLengthEvaluator(minimum, severity=severity)
