"""Suite loading from YAML files with collected, formatted errors."""

from llmassert.loader.errors import ErrorFormatter, format_load_error
from llmassert.loader.suite import (
    LoadProblem,
    Suite,
    SuiteLoadError,
    load_suite,
    load_suite_config,
    load_suite_string,
    suite_to_config,
)

__all__ = [
    "ErrorFormatter",
    "LoadProblem",
    "Suite",
    "SuiteLoadError",
    "format_load_error",
    "load_suite",
    "load_suite_config",
    "load_suite_string",
    "suite_to_config",
]
