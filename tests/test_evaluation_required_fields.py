"""Tests for the required_fields evaluator."""

from __future__ import annotations

import json

import pytest

from llmassert.evaluation.structural import required_fields


class TestRequiredFields:
    """Tests for required_fields scoring and edge cases."""

    def test_all_fields_present_passes(self):
        response = json.dumps({"name": "Alice", "age": 30, "extra": True})
        result = required_fields(["name", "age"]).evaluate(response)
        assert result.passed is True
        assert result.score == 1.0
        assert result.name == "required_fields"
        assert result.category == "structural"

    def test_missing_fields_fail_with_partial_score(self):
        response = json.dumps({"name": "Alice"})
        result = required_fields(["name", "age", "email"]).evaluate(response)
        assert result.passed is False
        assert result.score == pytest.approx(1 / 3)
        assert "age" in result.details
        assert "email" in result.details

    def test_proportional_score(self):
        result = required_fields(["a", "b", "c", "d"]).evaluate(json.dumps({"a": 1, "b": 2}))
        assert result.score == pytest.approx(0.5)

    def test_invalid_json_fails_fast(self):
        result = required_fields(["name"]).evaluate("not json at all")
        assert result.passed is False
        assert result.score == 0.0
        assert "not valid JSON" in result.details

    def test_json_array_is_not_an_object(self):
        result = required_fields(["name"]).evaluate("[1, 2, 3]")
        assert result.passed is False
        assert result.score == 0.0
        assert "not a JSON object" in result.details

    def test_json_primitive_is_not_an_object(self):
        result = required_fields(["name"]).evaluate('"just a string"')
        assert result.passed is False
        assert result.score == 0.0

    def test_json_null_is_not_an_object(self):
        result = required_fields(["name"]).evaluate("null")
        assert result.passed is False

    @pytest.mark.parametrize("response", ["{}", "not json", "[1]", '{"a": 1}', ""])
    def test_empty_field_list_always_passes(self, response):
        result = required_fields([]).evaluate(response)
        assert result.passed is True
        assert result.score == 1.0

    def test_falsy_values_count_as_present(self):
        response = json.dumps({"count": 0, "name": "", "active": False})
        result = required_fields(["count", "name", "active"]).evaluate(response)
        assert result.passed is True
        assert result.score == 1.0

    def test_null_value_counts_as_present(self):
        result = required_fields(["name"]).evaluate(json.dumps({"name": None}))
        assert result.passed is True

    def test_metadata_lists_found_and_missing(self):
        result = required_fields(["a", "b", "c"]).evaluate(json.dumps({"a": 1, "c": 3}))
        assert result.metadata == {
            "required_fields": ["a", "b", "c"],
            "found_fields": ["a", "c"],
            "missing_fields": ["b"],
        }

    def test_single_string_rejected(self):
        with pytest.raises(ValueError, match="list of field names"):
            required_fields("name")

    def test_severity_override(self):
        result = required_fields(["name"], severity="warning").evaluate("{}")
        assert result.severity == "warning"

    @pytest.mark.parametrize("response", ['{"a": NaN}', '{"a": Infinity}', "-Infinity"])
    def test_non_standard_constants_are_invalid_json(self, response):
        result = required_fields(["a"]).evaluate(response)
        assert result.passed is False
        assert result.details == "Response is not valid JSON"
