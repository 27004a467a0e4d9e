"""Tests for the suite load error formatter."""

from llmassert.loader.errors import ErrorFormatter, detect_ci_mode, format_load_error
from llmassert.loader.suite import LoadProblem, SuiteLoadError


def _error() -> SuiteLoadError:
    return SuiteLoadError(
        [
            LoadProblem(
                "evaluator",
                "Extra inputs are not permitted",
                suggestion="Did you mean 'evaluators'?",
            ),
            LoadProblem("<yaml>", "found unexpected end of stream", line=4),
        ],
        "suites/refunds.yaml",
    )


class TestHumanMode:
    """Tests for human-readable error formatting."""

    def test_problem_layout(self):
        problem = LoadProblem("name", "Field required")
        text = ErrorFormatter(ci_mode=False).format_problem(problem, "a.yaml")
        assert text == "error: Field required\n  --> a.yaml\n   = field: name"

    def test_line_in_location(self):
        problem = LoadProblem("<yaml>", "bad indent", line=3)
        text = ErrorFormatter(ci_mode=False).format_problem(problem, "a.yaml")
        assert "  --> a.yaml:3" in text

    def test_suggestion_as_help(self):
        text = ErrorFormatter(ci_mode=False).format_error(_error())
        assert "   = help: Did you mean 'evaluators'?" in text

    def test_footer_counts_problems(self):
        text = ErrorFormatter(ci_mode=False).format_error(_error())
        assert text.endswith("2 problem(s) in suites/refunds.yaml")
        assert "\n\nerror: found unexpected end of stream" in text


class TestCIMode:
    """Tests for CI-friendly concise error formatting."""

    def test_one_line_per_problem(self):
        text = ErrorFormatter(ci_mode=True).format_error(_error())
        assert text.splitlines() == [
            "suites/refunds.yaml -- evaluator: Extra inputs are not permitted "
            "(Did you mean 'evaluators'?)",
            "suites/refunds.yaml:4 -- <yaml>: found unexpected end of stream",
        ]

    def test_wrapper(self):
        assert format_load_error(_error(), ci_mode=True).startswith("suites/refunds.yaml --")


class TestDetectCIMode:
    def test_truthy_values(self, monkeypatch):
        for value in ("true", "1", "yes", "TRUE"):
            monkeypatch.setenv("CI", value)
            assert detect_ci_mode() is True

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("CI", raising=False)
        assert detect_ci_mode() is False
        assert ErrorFormatter().ci_mode is False

    def test_formatter_auto_detects(self, monkeypatch):
        monkeypatch.setenv("CI", "true")
        assert ErrorFormatter().ci_mode is True

    def test_explicit_flag_wins(self, monkeypatch):
        monkeypatch.setenv("CI", "true")
        assert ErrorFormatter(ci_mode=False).ci_mode is False
