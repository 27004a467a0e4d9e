"""JSON schema evaluator -- validates a JSON response with pydantic.

The schema is any type pydantic can validate against: a BaseModel
subclass, a TypedDict, ``list[int]``, ``str``, an ``Annotated`` type
with constraints, and so on. Validation is strict: a JSON value of the
wrong type (``"0.9"`` for a float) is a violation, never coerced.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from llmassert.evaluation.evaluators.base import BaseEvaluator, load_json
from llmassert.models.context import EvaluationContext
from llmassert.models.result import EvaluationResult, Severity


def _loc_to_path(loc: tuple[str | int, ...]) -> str:
    """Convert a pydantic error loc tuple to a dotted path."""
    if not loc:
        return "<root>"
    return ".".join(str(part) for part in loc)


class JsonSchemaEvaluator(BaseEvaluator):
    """Evaluates whether a JSON response conforms to a schema.

    Binary score: 1.0 when valid, 0.0 when invalid or unparseable.
    On failure every violation is listed as ``path: message``.
    """

    name = "json_schema"
    category = "structural"

    def __init__(self, schema: Any, severity: Severity = "error") -> None:
        super().__init__(severity)
        self.schema = schema
        self._adapter: TypeAdapter[Any] = TypeAdapter(schema)

    def evaluate(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        try:
            parsed = load_json(response)
        except ValueError:
            return self._result(
                passed=False,
                score=0.0,
                threshold=1.0,
                details="Response is not valid JSON",
                metadata={"errors": ["Failed to parse JSON"]},
            )

        try:
            validated = self._adapter.validate_python(parsed, strict=True)
        except ValidationError as exc:
            issues = exc.errors()
            errors = [
                f"{_loc_to_path(issue.get('loc', ()))}: {issue.get('msg', 'Validation error')}"
                for issue in issues
            ]
            return self._result(
                passed=False,
                score=0.0,
                threshold=1.0,
                details=f"Schema validation failed: {'; '.join(errors)}",
                metadata={"errors": errors, "issue_count": len(issues)},
            )

        return self._result(
            passed=True,
            score=1.0,
            threshold=1.0,
            details="Response conforms to the expected schema",
            metadata={
                "validated_data": self._adapter.dump_python(validated, mode="json")
            },
        )


def json_schema(schema: Any, *, severity: Severity = "error") -> JsonSchemaEvaluator:
    """Create an evaluator validating a JSON response against *schema*."""
    return JsonSchemaEvaluator(schema, severity=severity)
