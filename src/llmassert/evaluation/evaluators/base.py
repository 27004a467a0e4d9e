"""Evaluator contract and base classes.

An evaluator is any callable ``(response, context=None)`` that returns
an EvaluationResult, directly or as an awaitable. Built-in evaluators
derive from BaseEvaluator; user code may pass plain (async) functions.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import json
import math
from abc import ABC, abstractmethod
from typing import Any, Awaitable, ClassVar, Protocol, TypeVar, Union

from llmassert.models.context import EvaluationContext
from llmassert.models.result import Category, EvaluationResult, Severity

T = TypeVar("T")

ANONYMOUS_EVALUATOR = "Anonymous Evaluator"


class Evaluator(Protocol):
    """Structural type of anything the engine can run."""

    def __call__(
        self, response: str, context: EvaluationContext | None = None
    ) -> Union[EvaluationResult, Awaitable[EvaluationResult]]: ...


async def resolve_awaitable(value: Union[T, Awaitable[T]]) -> T:
    """Await *value* if it is awaitable, otherwise return it unchanged.

    Lets callbacks and evaluators be written as either sync or async
    functions.
    """
    if inspect.isawaitable(value):
        return await value
    return value


def evaluator_name(evaluator: Any) -> str:
    """Best-effort display name for an evaluator callable.

    Resolution order: a non-empty ``name`` attribute, the wrapped
    function of a ``functools.partial``, the function's ``__name__``
    (lambdas excluded), then ``"Anonymous Evaluator"``.
    """
    name = getattr(evaluator, "name", None)
    if isinstance(name, str) and name:
        return name

    if isinstance(evaluator, functools.partial):
        return evaluator_name(evaluator.func)

    func_name = getattr(evaluator, "__name__", None)
    if isinstance(func_name, str) and func_name and func_name != "<lambda>":
        return func_name

    return ANONYMOUS_EVALUATOR


class BaseEvaluator(ABC):
    """Abstract base class for built-in evaluators.

    Subclasses set ``name`` and ``category`` and implement
    ``evaluate()``. Instances are callable and satisfy the evaluator
    contract, so they can be placed directly in
    ``EvaluationConfig.evaluators``.
    """

    name: ClassVar[str]
    category: ClassVar[Category]

    def __init__(self, severity: Severity = "error") -> None:
        self.severity = severity

    @abstractmethod
    def evaluate(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        """Score a single response.

        Args:
            response: The text under test.
            context: Optional run-scoped auxiliary data.

        Returns:
            EvaluationResult with score, passed, threshold and details.
        """

    async def evaluate_async(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        """Async evaluation. Default delegates to sync evaluate().

        Subclasses with async callbacks (see CallbackEvaluator)
        override this method with their async implementation.
        """
        return self.evaluate(response, context)

    async def __call__(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        return await self.evaluate_async(response, context)

    def _result(
        self,
        *,
        passed: bool,
        score: float,
        threshold: float,
        details: str,
        metadata: dict[str, Any] | None = None,
    ) -> EvaluationResult:
        """Build a result stamped with this evaluator's name, category and severity."""
        return EvaluationResult(
            name=self.name,
            passed=passed,
            score=score,
            threshold=threshold,
            category=self.category,
            severity=self.severity,
            details=details,
            metadata=metadata or {},
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(severity={self.severity!r})"


class CallbackEvaluator(BaseEvaluator):
    """Base for evaluators that may await a caller-supplied callback.

    The async path is the real implementation; ``evaluate()`` is a sync
    convenience wrapper for use outside an event loop.
    """

    def evaluate(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        """Sync entry point -- delegates to evaluate_async.

        Raises:
            RuntimeError: If called from within a running event loop.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            raise RuntimeError(
                f"{type(self).__name__}.evaluate() called from within an async "
                "context. Use evaluate_async() instead."
            )

        return asyncio.run(self.evaluate_async(response, context))

    @abstractmethod
    async def evaluate_async(
        self, response: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        """Score a single response, awaiting the callback if one is configured."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant {name!r}")


def load_json(text: str) -> Any:
    """Parse JSON text, rejecting the non-standard NaN and Infinity literals.

    Raises:
        ValueError: If *text* is not valid JSON.
    """
    return json.loads(text, parse_constant=_reject_constant)


def clamp_unit(value: float) -> float:
    """Clamp a number into [0.0, 1.0].

    Raises:
        ValueError: If *value* is NaN.
    """
    value = float(value)
    if math.isnan(value):
        raise ValueError("Score is NaN")
    return max(0.0, min(1.0, value))
