"""Errors raised while driving the Forge evaluator process."""

from __future__ import annotations


class EvaluatorError(Exception):
    """Base class for evaluator failures."""


class EvaluatorLaunchError(EvaluatorError):
    """The evaluation file could not be written or the process could not be started."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class EvaluatorExitError(EvaluatorError):
    """The evaluator exited with a code other than 0 (passed) or 1 (tests failed)."""

    def __init__(self, code: int | None) -> None:
        super().__init__(f"Forge process exited with code {code}")
        self.code = code
