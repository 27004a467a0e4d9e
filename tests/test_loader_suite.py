"""Tests for llmassert.loader.suite - YAML suite parsing and evaluator building."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import BaseModel

from llmassert.evaluation.evaluators.json_schema import JsonSchemaEvaluator
from llmassert.evaluation.evaluators.length import MaxLengthEvaluator
from llmassert.evaluation.evaluators.on_topic import OnTopicEvaluator
from llmassert.loader import SuiteLoadError, load_suite, load_suite_config, load_suite_string
from llmassert.loader.suite import build_evaluators, suite_to_config


class Answer(BaseModel):
    summary: str


def fixed_relevance(response, topic):
    return 0.42


def no_apologies(response, context=None):
    return None


VALID_SUITE = """\
name: refund answer
description: Support bot answers about refunds
stop_on_first_failure: true
context:
  prompt: What is the refund window?
evaluators:
  - type: max_length
    limit: 500
  - type: no_personal_data
    exclude: [email]
  - type: on_topic
    topic: refunds returns
    severity: info
"""


class TestLoadSuiteString:
    """Tests for parsing and validating suite YAML."""

    def test_valid_suite(self):
        suite = load_suite_string(VALID_SUITE)
        assert suite.name == "refund answer"
        assert suite.stop_on_first_failure is True
        assert suite.context.prompt == "What is the refund window?"
        assert [e.type for e in suite.evaluators] == [
            "max_length",
            "no_personal_data",
            "on_topic",
        ]
        assert suite.evaluators[0].options == {"limit": 500}

    def test_minimal_suite(self):
        suite = load_suite_string("name: minimal\n")
        assert suite.evaluators == []
        assert suite.context is None

    def test_empty_file(self):
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite_string("# just a comment\n")
        assert exc_info.value.problems[0].field == "<yaml>"
        assert "empty" in exc_info.value.problems[0].message

    def test_yaml_syntax_error_has_line(self):
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite_string("name: x\nevaluators:\n  - type: [unclosed\n")
        problem = exc_info.value.problems[0]
        assert problem.field == "<yaml>"
        assert problem.line is not None

    def test_missing_name(self):
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite_string("evaluators: []\n")
        assert [p.field for p in exc_info.value.problems] == ["name"]

    def test_unknown_top_level_key(self):
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite_string("name: x\nevaluator: []\n")
        assert "evaluator" in [p.field for p in exc_info.value.problems]

    def test_unknown_key_suggestion(self):
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite_string("name: x\nevaluator: []\n")
        assert exc_info.value.problems[0].suggestion == "Did you mean 'evaluators'?"

    def test_unknown_context_key_suggestion(self):
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite_string("name: x\ncontext:\n  promt: hi\n")
        problem = exc_info.value.problems[0]
        assert problem.field == "context.promt"
        assert problem.suggestion == "Did you mean 'prompt'?"

    def test_evaluator_without_type(self):
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite_string("name: x\nevaluators:\n  - limit: 5\n")
        assert exc_info.value.problems[0].field == "evaluators.0.type"

    def test_unknown_context_field(self):
        with pytest.raises(SuiteLoadError):
            load_suite_string("name: x\ncontext:\n  user: bob\n")

    def test_error_message_names_file(self):
        with pytest.raises(SuiteLoadError, match="suite.yaml"):
            load_suite_string("evaluators: []\n", filename="suite.yaml")


class TestBuildEvaluators:
    """Tests for turning suite entries into evaluator instances."""

    def test_builtin_options_applied(self):
        evaluators = build_evaluators(load_suite_string(VALID_SUITE))
        assert isinstance(evaluators[0], MaxLengthEvaluator)
        assert evaluators[0].limit == 500
        assert evaluators[1].exclude == {"email"}
        assert isinstance(evaluators[2], OnTopicEvaluator)
        assert evaluators[2].severity == "info"

    def test_schema_option_imported(self):
        suite = load_suite_string(
            f"name: x\nevaluators:\n  - type: json_schema\n    schema: {__name__}.Answer\n"
        )
        (evaluator,) = build_evaluators(suite)
        assert isinstance(evaluator, JsonSchemaEvaluator)
        assert evaluator.evaluate('{"summary": "ok"}').passed is True

    def test_scorer_option_imported(self):
        suite = load_suite_string(
            "name: x\nevaluators:\n"
            f"  - type: on_topic\n    topic: refunds\n    scorer: {__name__}.fixed_relevance\n"
        )
        (evaluator,) = build_evaluators(suite)
        assert evaluator.scorer is fixed_relevance

    def test_custom_dotted_evaluator(self):
        suite = load_suite_string(
            f"name: x\nevaluators:\n  - type: {__name__}.no_apologies\n"
        )
        assert build_evaluators(suite) == [no_apologies]

    def test_all_problems_collected(self):
        suite = load_suite_string(
            "name: x\nevaluators:\n"
            "  - type: max_length\n    limit: 10\n"
            "  - type: nonexistent\n"
            "  - type: max_length\n    bogus: 1\n"
            "  - type: no_such_module_xyz.check\n"
        )
        with pytest.raises(SuiteLoadError) as exc_info:
            build_evaluators(suite, "suite.yaml")
        problems = exc_info.value.problems
        assert [p.field for p in problems] == [
            "evaluators.1",
            "evaluators.2",
            "evaluators.3",
        ]
        assert problems[0].message.startswith("nonexistent: Unknown evaluator type")
        assert problems[2].suggestion is None
        assert exc_info.value.filename == "suite.yaml"

    def test_mistyped_type_suggestion(self):
        suite = load_suite_string("name: x\nevaluators:\n  - type: toxicty\n")
        with pytest.raises(SuiteLoadError) as exc_info:
            build_evaluators(suite)
        assert exc_info.value.problems[0].suggestion == "Did you mean 'toxicity'?"

    def test_invalid_option_value(self):
        suite = load_suite_string(
            "name: x\nevaluators:\n  - type: max_length\n    limit: -1\n"
        )
        with pytest.raises(SuiteLoadError, match="limit must be >= 0"):
            build_evaluators(suite)


class TestSuiteToConfig:
    def test_config_fields(self):
        config = suite_to_config(load_suite_string(VALID_SUITE))
        assert config.test_name == "refund answer"
        assert config.stop_on_first_failure is True
        assert config.context.prompt == "What is the refund window?"
        assert len(config.evaluators) == 3

    def test_stop_override(self):
        config = suite_to_config(load_suite_string(VALID_SUITE), stop_on_first_failure=False)
        assert config.stop_on_first_failure is False


class TestLoadSuiteFile:
    def test_load_from_path(self, tmp_path: Path):
        path = tmp_path / "refunds.yaml"
        path.write_text(VALID_SUITE)
        assert load_suite(path).name == "refund answer"

    def test_missing_file(self, tmp_path: Path):
        missing = tmp_path / "missing.yaml"
        with pytest.raises(SuiteLoadError) as exc_info:
            load_suite(missing)
        assert exc_info.value.problems[0].field == "<file>"
        assert exc_info.value.filename == str(missing)

    def test_load_suite_config(self, tmp_path: Path):
        path = tmp_path / "refunds.yaml"
        path.write_text(VALID_SUITE)
        config = load_suite_config(path, stop_on_first_failure=False)
        assert config.test_name == "refund answer"
        assert config.stop_on_first_failure is False
