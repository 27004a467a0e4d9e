"""Evaluation engine -- runs evaluators and reduces them to one report.

Evaluators run strictly sequentially in list order. A failing
evaluator never aborts the run: its exception becomes a synthetic
error-severity result. Only error-severity failures flip the overall
verdict; warnings and info are reported but never fatal.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from llmassert.evaluation.evaluators.base import evaluator_name, resolve_awaitable
from llmassert.models.config import EvaluationConfig
from llmassert.models.result import (
    SEVERITIES,
    EvaluationReport,
    EvaluationResult,
    EvaluationSummary,
)

logger = logging.getLogger(__name__)

RUNTIME_ERROR_PREFIX = "Runtime Error: "


def runtime_error_result(evaluator: object, exc: BaseException) -> EvaluationResult:
    """Synthesize the failing result recorded for an evaluator that raised."""
    return EvaluationResult(
        name=RUNTIME_ERROR_PREFIX + evaluator_name(evaluator),
        passed=False,
        score=0.0,
        threshold=0.0,
        category="structural",
        severity="error",
        details=str(exc) or type(exc).__name__,
    )


async def _invoke(evaluator: object, response: str, config: EvaluationConfig) -> EvaluationResult:
    """Call one evaluator, awaiting and coercing its return value."""
    outcome = await resolve_awaitable(evaluator(response, config.context))
    if isinstance(outcome, EvaluationResult):
        return outcome
    return EvaluationResult.model_validate(outcome)


async def run_evaluators(response: str, config: EvaluationConfig) -> list[EvaluationResult]:
    """Run every evaluator in order and collect one result per invocation.

    With ``stop_on_first_failure`` the run halts after the first failing
    error-severity result, which is kept.
    """
    results: list[EvaluationResult] = []

    for evaluator in config.evaluators:
        logger.debug("Running evaluator %s", evaluator_name(evaluator))
        try:
            result = await _invoke(evaluator, response, config)
        except Exception as exc:
            logger.warning(
                "Evaluator %s raised; recording a runtime error result",
                evaluator_name(evaluator),
                exc_info=True,
            )
            result = runtime_error_result(evaluator, exc)

        results.append(result)

        if config.stop_on_first_failure and result.is_critical_failure:
            logger.info(
                "Stopping %r after %s failed (%d of %d evaluators run)",
                config.test_name,
                result.name,
                len(results),
                len(config.evaluators),
            )
            break

    return results


def summarize(results: Sequence[EvaluationResult]) -> EvaluationSummary:
    """Count totals, passes, failures and per-severity results."""
    by_severity = {severity: 0 for severity in SEVERITIES}
    for result in results:
        by_severity[result.severity] += 1

    passed = sum(1 for r in results if r.passed)
    return EvaluationSummary(
        total=len(results),
        passed=passed,
        failed=len(results) - passed,
        by_severity=by_severity,
    )


def compute_overall(results: Sequence[EvaluationResult]) -> tuple[float, bool]:
    """Compute (overall_score, overall_pass) for a list of results.

    The score is the arithmetic mean (0.0 for no results). The run
    passes unless some error-severity result failed, so an empty run
    passes vacuously.
    """
    if not results:
        return (0.0, True)

    score = sum(r.score for r in results) / len(results)
    passed = not any(r.is_critical_failure for r in results)
    return (score, passed)


def build_report(test_name: str, results: Sequence[EvaluationResult]) -> EvaluationReport:
    """Reduce collected results into a timestamped report."""
    overall_score, overall_pass = compute_overall(results)
    return EvaluationReport(
        test_name=test_name,
        timestamp=datetime.now(timezone.utc),
        overall_pass=overall_pass,
        overall_score=overall_score,
        results=list(results),
        summary=summarize(results),
    )


async def evaluate(response: str, config: EvaluationConfig) -> EvaluationReport:
    """Evaluate one response against the configured evaluators.

    Never raises for evaluator-caused failures; they surface as
    entries in ``report.results``.

    Args:
        response: The text under test.
        config: Test name, evaluators, optional context and early-stop flag.

    Returns:
        EvaluationReport with results in invocation order.
    """
    results = await run_evaluators(response, config)
    report = build_report(config.test_name, results)
    logger.debug(
        "%r: %s (score %.2f, %d/%d passed)",
        report.test_name,
        "PASS" if report.overall_pass else "FAIL",
        report.overall_score,
        report.summary.passed,
        report.summary.total,
    )
    return report


def evaluate_sync(response: str, config: EvaluationConfig) -> EvaluationReport:
    """Sync entry point -- runs evaluate() in a fresh event loop.

    Raises:
        RuntimeError: If called from within a running event loop.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        raise RuntimeError(
            "evaluate_sync() called from within an async context. "
            "Use 'await evaluate(...)' instead."
        )

    return asyncio.run(evaluate(response, config))


async def evaluate_many(
    responses: Sequence[str], config: EvaluationConfig
) -> list[EvaluationReport]:
    """Evaluate several responses concurrently, one report per response.

    Reports are returned in the order of *responses*. Evaluators within
    each run still execute sequentially.
    """
    return list(await asyncio.gather(*(evaluate(r, config) for r in responses)))
