"""Structural evaluators: length bounds, required fields, JSON schema.

Usage::

    from llmassert import structural

    evaluators = [structural.max_length(500), structural.required_fields(["answer"])]
"""

from __future__ import annotations

from llmassert.evaluation.evaluators.json_schema import JsonSchemaEvaluator, json_schema
from llmassert.evaluation.evaluators.length import (
    MaxLengthEvaluator,
    MinLengthEvaluator,
    max_length,
    min_length,
)
from llmassert.evaluation.evaluators.required_fields import (
    RequiredFieldsEvaluator,
    required_fields,
)

__all__ = [
    "JsonSchemaEvaluator",
    "MaxLengthEvaluator",
    "MinLengthEvaluator",
    "RequiredFieldsEvaluator",
    "json_schema",
    "max_length",
    "min_length",
    "required_fields",
]
