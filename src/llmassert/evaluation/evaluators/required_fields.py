"""Required fields evaluator -- checks top-level keys of a JSON object."""

from __future__ import annotations

from collections.abc import Sequence

from llmassert.evaluation.evaluators.base import BaseEvaluator, load_json
from llmassert.models.context import EvaluationContext
from llmassert.models.result import EvaluationResult, Severity


class RequiredFieldsEvaluator(BaseEvaluator):
    """Evaluates whether a JSON response carries every required key.

    Presence is key membership: a key mapped to null, 0, false or ""
    still counts as present. Score is the fraction of fields found.
    """

    name = "required_fields"
    category = "structural"

    def __init__(self, fields: Sequence[str], severity: Severity = "error") -> None:
        if isinstance(fields, str):
            raise ValueError(
                f"required_fields expects a list of field names, got the string {fields!r}"
            )
        super().__init__(severity)
        self.fields = list(fields)

    def _not_an_object(self, details: str) -> EvaluationResult:
        return self._result(
            passed=False,
            score=0.0,
            threshold=1.0,
            details=details,
            metadata={"required_fields": list(self.fields), "found_fields": []},
        )

    def evaluate(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        if not self.fields:
            return self._result(
                passed=True,
                score=1.0,
                threshold=1.0,
                details="No required fields configured",
                metadata={"required_fields": [], "found_fields": [], "missing_fields": []},
            )

        try:
            parsed = load_json(response)
        except ValueError:
            return self._not_an_object("Response is not valid JSON")

        if not isinstance(parsed, dict):
            return self._not_an_object("Response is not a JSON object")

        found = [f for f in self.fields if f in parsed]
        missing = [f for f in self.fields if f not in parsed]
        score = len(found) / len(self.fields) if self.fields else 1.0

        if missing:
            details = f"Missing fields: {', '.join(missing)}"
        else:
            details = f"All {len(self.fields)} required fields present"

        return self._result(
            passed=not missing,
            score=score,
            threshold=1.0,
            details=details,
            metadata={
                "required_fields": list(self.fields),
                "found_fields": found,
                "missing_fields": missing,
            },
        )


def required_fields(
    fields: Sequence[str], *, severity: Severity = "error"
) -> RequiredFieldsEvaluator:
    """Create an evaluator checking a JSON response contains all *fields*."""
    return RequiredFieldsEvaluator(fields, severity=severity)
