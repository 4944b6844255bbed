from __future__ import annotations

import typing as t

from .base import BaseModel, FrozenModel

TIMEOUT_MESSAGE: t.Final[str] = "Toadus Ponens timed out."


class SourceLocation(FrozenModel):
    filename: str | None = None
    line: int = 0  # 0-based
    column: int = 0  # 0-based
    span: int = 1


class TestOutcomeRecord(FrozenModel):
    __test__ = False

    name: str = ""
    location: SourceLocation | None = None
    text: str = ""


class EvaluationRun(BaseModel):
    """Output of one evaluator invocation; `stderr` is the signal that matters."""

    stdout: str = ""
    stderr: str = ""
    source: str = ""

    @classmethod
    def timed_out(cls, source: str) -> EvaluationRun:
        return cls(stdout=TIMEOUT_MESSAGE, stderr=TIMEOUT_MESSAGE, source=source)

    @property
    def is_timed_out(self) -> bool:
        return self.stderr == TIMEOUT_MESSAGE


class EvaluatorExit(FrozenModel):
    code: int | None
    manual: bool = False

    def describe(self) -> str:
        if self.manual:
            return "Forge process terminated by user."
        return f"Forge process finished with exit code {self.code}."
