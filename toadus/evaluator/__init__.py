"""Running Forge programs and reading what the evaluator says about them."""

__all__ = [
    "EvaluatorError",
    "EvaluatorExitError",
    "EvaluatorGateway",
    "EvaluatorLaunchError",
    "failing_test_names",
    "is_consistent",
    "parse_diagnostic_line",
    "parse_failing_tests",
]

from .diagnostics import failing_test_names, is_consistent, parse_diagnostic_line, parse_failing_tests
from .errors import EvaluatorError, EvaluatorExitError, EvaluatorLaunchError
from .gateway import EvaluatorGateway
