"""Evaluator registry -- maps evaluator type names to factories.

Supports both builtin type names (e.g. "max_length", "toxicity") and
dotted-path imports of user-defined evaluators or factories
(e.g. "my.module.no_apologies").
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Any

from llmassert.evaluation.evaluators.base import (
    BaseEvaluator,
    CallbackEvaluator,
    Evaluator,
    evaluator_name,
    resolve_awaitable,
)
from llmassert.evaluation.evaluators.hallucinated_urls import no_hallucinated_urls
from llmassert.evaluation.evaluators.json_schema import json_schema
from llmassert.evaluation.evaluators.length import max_length, min_length
from llmassert.evaluation.evaluators.on_topic import on_topic
from llmassert.evaluation.evaluators.personal_data import no_personal_data
from llmassert.evaluation.evaluators.required_fields import required_fields
from llmassert.evaluation.evaluators.toxicity import toxicity

EVALUATOR_REGISTRY: dict[str, Callable[..., BaseEvaluator]] = {
    "max_length": max_length,
    "min_length": min_length,
    "required_fields": required_fields,
    "json_schema": json_schema,
    "no_personal_data": no_personal_data,
    "on_topic": on_topic,
    "no_hallucinated_urls": no_hallucinated_urls,
    "toxicity": toxicity,
}


def import_dotted_path(dotted_path: str) -> Any:
    """Import ``module.path.attribute`` and return the attribute.

    Raises:
        ValueError: If the path has no module part.
        ImportError: If the module or attribute cannot be found.
    """
    module_path, _, attr_name = dotted_path.rpartition(".")
    if not module_path or not attr_name:
        raise ValueError(
            f"Invalid dotted path '{dotted_path}'. "
            f"Expected format: 'module.path.name'."
        )

    module = importlib.import_module(module_path)
    try:
        return getattr(module, attr_name)
    except AttributeError:
        raise ImportError(
            f"Module '{module_path}' has no attribute '{attr_name}'."
        ) from None


def get_evaluator_factory(type_name: str) -> Callable[..., BaseEvaluator]:
    """Look up the factory for a builtin evaluator type.

    Raises:
        ValueError: If *type_name* is not in the registry.
    """
    factory = EVALUATOR_REGISTRY.get(type_name)
    if factory is None:
        available = sorted(EVALUATOR_REGISTRY.keys())
        raise ValueError(
            f"Unknown evaluator type {type_name!r}. "
            f"Available types: {available}. "
            f"For custom evaluators, provide the full dotted path "
            f"(e.g. 'my.module.my_evaluator')."
        )
    return factory


def build_evaluator(type_name: str, options: dict[str, Any] | None = None) -> Evaluator:
    """Create an evaluator from a type name and factory options.

    Builtin names are called as factories with *options*. A dotted path
    is imported; with options the target is called as a factory,
    without options it is used as the evaluator itself.

    Raises:
        ValueError: Unknown type name or invalid factory options.
        ImportError: Unresolvable dotted path.
        TypeError: Options the factory does not accept, or a resolved
            target that is not callable.
    """
    options = options or {}

    if type_name in EVALUATOR_REGISTRY or "." not in type_name:
        return get_evaluator_factory(type_name)(**options)

    target = import_dotted_path(type_name)
    if not callable(target):
        raise TypeError(f"'{type_name}' is not callable and cannot be used as an evaluator.")
    if options:
        return target(**options)
    return target


__all__ = [
    "EVALUATOR_REGISTRY",
    "BaseEvaluator",
    "CallbackEvaluator",
    "Evaluator",
    "build_evaluator",
    "evaluator_name",
    "get_evaluator_factory",
    "import_dotted_path",
    "resolve_awaitable",
]
