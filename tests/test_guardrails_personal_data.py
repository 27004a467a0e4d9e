"""Tests for the no_personal_data guardrail."""

from __future__ import annotations

import re

import pytest

from llmassert.evaluation.guardrails import no_personal_data


def _detections(result) -> dict[str, int]:
    return {d["type"]: d["count"] for d in result.metadata["detections"]}


class TestBuiltinPatterns:
    """Detection of each built-in PII category."""

    def test_clean_text_passes(self):
        result = no_personal_data().evaluate(
            "The weather today is sunny with a high of 25 degrees."
        )
        assert result.passed is True
        assert result.score == 1.0
        assert result.name == "no_personal_data"
        assert result.category == "guardrail"
        assert result.metadata["detections"] == []

    def test_email(self):
        result = no_personal_data().evaluate("Contact john@example.com")
        assert result.passed is False
        assert result.score == 0.0
        assert result.metadata["detections"] == [{"type": "email", "count": 1}]
        assert "email" in result.details

    def test_multiple_emails_counted(self):
        result = no_personal_data().evaluate("Email alice@test.com or bob@test.com")
        assert _detections(result)["email"] == 2

    def test_us_phone(self):
        result = no_personal_data().evaluate("Call me at (555) 123-4567.")
        assert result.passed is False
        assert "phone" in _detections(result)

    def test_international_phone(self):
        result = no_personal_data().evaluate("Reach us at +1-555-123-4567.")
        assert "phone" in _detections(result)

    def test_ssn(self):
        result = no_personal_data().evaluate("SSN: 123-45-6789")
        assert result.passed is False
        assert "ssn" in result.details

    def test_credit_card(self):
        result = no_personal_data().evaluate("Card number: 4111 1111 1111 1111")
        assert "credit_card" in _detections(result)

    def test_ip_address(self):
        result = no_personal_data().evaluate("Server is at 192.168.1.100")
        assert "ip_address" in _detections(result)

    def test_multiple_categories(self):
        result = no_personal_data().evaluate("Email: test@test.com, Phone: 555-123-4567")
        assert len(result.metadata["detections"]) >= 2
        assert "across" in result.details


class TestOptions:
    """Exclusion, custom patterns, severity and metadata."""

    def test_exclude_category(self):
        result = no_personal_data(exclude=["email"]).evaluate("Contact john@example.com")
        assert result.passed is True
        assert result.score == 1.0

    def test_exclude_keeps_other_categories(self):
        result = no_personal_data(exclude=["email"]).evaluate(
            "Contact john@example.com, SSN: 123-45-6789"
        )
        assert result.passed is False
        assert "ssn" in result.details
        assert "email" not in result.details

    def test_unknown_exclude_rejected(self):
        with pytest.raises(ValueError, match="Unknown PII categories"):
            no_personal_data(exclude=["passport"])

    def test_custom_pattern_string(self):
        evaluator = no_personal_data(custom_patterns={"employee_id": r"\bEMP-\d{5}\b"})
        result = evaluator.evaluate("Assigned to EMP-12345 today.")
        assert result.passed is False
        assert _detections(result) == {"employee_id": 1}

    def test_custom_compiled_pattern_keeps_flags(self):
        postcode = re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}\b", re.IGNORECASE)
        evaluator = no_personal_data(custom_patterns={"uk_postcode": postcode})
        result = evaluator.evaluate("Office is at sw1a 1aa in London.")
        assert "uk_postcode" in result.details

    def test_custom_string_pattern_is_case_sensitive(self):
        evaluator = no_personal_data(custom_patterns={"code": r"SECRET"})
        assert evaluator.evaluate("the secret is out").passed is True

    def test_invalid_custom_pattern_rejected(self):
        with pytest.raises(ValueError, match="Invalid custom PII pattern"):
            no_personal_data(custom_patterns={"bad": "(unclosed"})

    def test_patterns_checked_default(self):
        result = no_personal_data().evaluate("Clean response")
        assert result.metadata["patterns_checked"] == 5

    def test_patterns_checked_with_exclude_and_custom(self):
        evaluator = no_personal_data(
            exclude=["email", "phone"], custom_patterns={"x": r"xyz"}
        )
        assert evaluator.evaluate("Clean").metadata["patterns_checked"] == 4

    def test_severity_default_and_override(self):
        assert no_personal_data().evaluate("ok").severity == "error"
        assert no_personal_data(severity="warning").evaluate("ok").severity == "warning"
